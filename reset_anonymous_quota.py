#!/usr/bin/env python3
"""
Delete every anonymous short URL, resetting the anonymous quota of all origin addresses.

This script follows this procedure:
- Step 1: Connect to Redis (ping healthcheck)
- Step 2: Refuse to continue unless --yes is given
- Step 3: Delete all anonymous records and their index entries
- Step 4: Report how many records were deleted

CLI usage:
    $ python reset_anonymous_quota.py --prefix shrinklink:dev --yes
    $ python reset_anonymous_quota.py --host redis.internal --port 6380 --db 1 --prefix shrinklink:prod --yes
    $ REDIS_PASSWORD=... python reset_anonymous_quota.py --username admin --prefix shrinklink:prod --yes

Behavior:
    - Owned (authenticated) short URLs are never touched.
    - The deletion is irreversible. Without --yes the script only reports the
      current number of anonymous origin addresses and exits with status 2.

Raises:
    shrinklink.dao.exceptions.DataStoreError: If Redis is unreachable.
"""

import os
import sys
import argparse

from shrinklink.dao.redis import AnonymousUsageRedisDAO
from shrinklink.core import QuotaGuard
from shrinklink.utils import initialize_logging


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint.

    Args:
        argv (list[str] | None): Optional argument vector for testing.

    Returns:
        int: Process exit status.
    """
    parser = argparse.ArgumentParser(
        description='Delete every anonymous short URL (irreversible).',
    )
    parser.add_argument('--host', default='localhost', help='Redis host (default: localhost).')
    parser.add_argument('--port', type=int, default=6379, help='Redis port (default: 6379).')
    parser.add_argument('--db', type=int, default=0, help='Redis database index (default: 0).')
    parser.add_argument('--username', default=None, help='Redis username. The password is read from $REDIS_PASSWORD.')
    parser.add_argument('--prefix', default=None, help='Key prefix of the deployment, e.g. "shrinklink:prod".')
    parser.add_argument('--yes', action='store_true', help='Confirm the irreversible deletion.')
    args = parser.parse_args(argv)

    initialize_logging()

    dao = AnonymousUsageRedisDAO(
        redis_host=args.host,
        redis_port=args.port,
        redis_db=args.db,
        redis_username=args.username,
        redis_password=os.getenv('REDIS_PASSWORD'),
        prefix=args.prefix,
    )

    if not args.yes:
        addresses = dao.redis.scard(dao.keys.anonymous_addresses_key())
        print(f'Refusing to delete anonymous short URLs of {addresses} origin addresses without --yes.', file=sys.stderr)
        return 2

    deleted = QuotaGuard(dao).reset(confirm=True)
    print(f'Done. Deleted {deleted} anonymous short URLs.')
    return 0


if __name__ == '__main__':
    sys.exit(main())
