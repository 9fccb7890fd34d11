import pytest

from shrinklink.exceptions import AccessDeniedError, NotFoundError
from shrinklink.core.ownership import OwnershipGuard


def test_toggle_twice_restores_original_value(dao, make_record):
    record = make_record('abc123', owner_id='user-1')
    dao.insert(record)
    guard = OwnershipGuard(dao)

    assert guard.toggle_favorite(record.id, 'user-1') is True
    assert dao.get('abc123').is_favorite is True
    assert guard.toggle_favorite(record.id, 'user-1') is False
    assert dao.get('abc123').is_favorite is False


def test_non_owner_is_denied_every_time(dao, make_record):
    record = make_record('abc123', owner_id='user-1')
    dao.insert(record)
    guard = OwnershipGuard(dao)

    for _ in range(2):
        with pytest.raises(AccessDeniedError):
            guard.toggle_favorite(record.id, 'user-2')

    assert dao.get('abc123').is_favorite is False


def test_denied_and_missing_are_indistinguishable(dao, make_record):
    record = make_record('abc123', owner_id='user-1')
    dao.insert(record)
    guard = OwnershipGuard(dao)

    with pytest.raises(NotFoundError) as denied:
        guard.toggle_favorite(record.id, 'user-2')
    with pytest.raises(NotFoundError) as missing:
        guard.toggle_favorite('no-such-id', 'user-2')

    assert type(denied.value) is type(missing.value)
    assert denied.value.status_code == missing.value.status_code == 404
    assert denied.value.error_code == missing.value.error_code
    assert str(denied.value).replace(record.id, '<id>') == str(missing.value).replace('no-such-id', '<id>')


def test_anonymous_records_cannot_be_favorited(dao, make_record):
    record = make_record('abc123', creator_address='203.0.113.7')
    dao.insert(record)

    with pytest.raises(AccessDeniedError):
        OwnershipGuard(dao).toggle_favorite(record.id, 'user-1')
