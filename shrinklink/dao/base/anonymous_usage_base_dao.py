"""Abstract base class for anonymous usage data access objects (DAOs).

This interface defines the contract for anonymous link accounting across
different storage systems (e.g., Redis, DynamoDB, PostgreSQL). Anonymous links
are attributed to the origin address that created them.

Responsibilities:
    - Count the anonymous links created from an origin address.
    - Bulk-delete every anonymous link (quota reset).

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shrinklink.dao.redis import AnonymousUsageRedisDAO
        >>> dao = AnonymousUsageRedisDAO(...)

        >>> dao.count("203.0.113.7")
        2

        >>> dao.reset()
        17
"""

from abc import ABC, abstractmethod


class AnonymousUsageBaseDAO(ABC):
    """Interface for per-address anonymous link accounting DAOs

    Methods:
        count(address: str, **kwargs) -> int:
            Count anonymous records created from an origin address.
            Raises DataStoreError on read failure.

        reset(**kwargs) -> int:
            Delete every anonymous record and return how many were deleted.
            Raises DataStoreError on write failure.

    NOTE:
        - count() includes expired records which have not been reclaimed yet.
        - reset() is destructive and irreversible. It is not scoped to a
          single address.
    """

    @abstractmethod
    def count(self, address: str, **kwargs) -> int:
        """Count anonymous records created from an origin address.

        Args:
            address (str):
                Normalized origin address.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int:
                Number of anonymous records attributed to the address.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def reset(self, **kwargs) -> int:
        """Delete all anonymous records.

        Args:
            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int:
                Number of deleted records.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
