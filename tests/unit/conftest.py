import dataclasses
import threading
from datetime import datetime, timedelta, UTC

import pytest

from shrinklink.models import ShortURLModel
from shrinklink.dao.base import ShortURLBaseDAO, AnonymousUsageBaseDAO
from shrinklink.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class InMemoryDAO(ShortURLBaseDAO, AnonymousUsageBaseDAO):
    """Thread-safe in-memory data store honoring the DAO contracts."""

    def __init__(self):
        self.records: dict[str, ShortURLModel] = {}
        self.lock = threading.Lock()

    def insert(self, short_url: ShortURLModel, **kwargs) -> 'InMemoryDAO':
        with self.lock:
            if short_url.shortcode in self.records:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            self.records[short_url.shortcode] = short_url
        return self

    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        with self.lock:
            try:
                return self.records[shortcode]
            except KeyError as e:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from e

    def hit(self, shortcode: str, **kwargs) -> ShortURLModel:
        with self.lock:
            record = self.records.get(shortcode)
            if record is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            record = dataclasses.replace(record, clicks=record.clicks + 1, last_clicked_at=kwargs.get('clicked_at'))
            self.records[shortcode] = record
            return record

    def toggle_favorite(self, record_id: str, owner_id: str, **kwargs) -> bool:
        with self.lock:
            for shortcode, record in self.records.items():
                if record.id == record_id and record.owner_id == owner_id:
                    self.records[shortcode] = dataclasses.replace(record, is_favorite=not record.is_favorite)
                    return not record.is_favorite
            raise ShortURLNotFoundError(f"Short URL with id '{record_id}' not found.")

    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortURLModel]:
        with self.lock:
            owned = [record for record in self.records.values() if record.owner_id == owner_id]
        return sorted(owned, key=lambda record: record.created_at, reverse=True)

    def count(self, address: str, **kwargs) -> int:
        with self.lock:
            return sum(1 for record in self.records.values() if record.owner_id is None and record.creator_address == address)

    def reset(self, **kwargs) -> int:
        with self.lock:
            anonymous = [code for code, record in self.records.items() if record.owner_id is None and record.creator_address is not None]
            for shortcode in anonymous:
                del self.records[shortcode]
            return len(anonymous)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def dao() -> InMemoryDAO:
    return InMemoryDAO()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def make_record(clock: FakeClock):
    def factory(shortcode: str = 'abc123', *, expires_in: timedelta | None = timedelta(days=14), **kwargs) -> ShortURLModel:
        kwargs.setdefault('target', 'https://example.com/page')
        kwargs.setdefault('created_at', clock())
        expires_at = clock() + expires_in if expires_in is not None else None
        return ShortURLModel(shortcode=shortcode, expires_at=expires_at, **kwargs)

    return factory
