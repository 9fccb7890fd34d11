"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, DynamoDB, PostgreSQL).

Responsibilities:
    - Insert short URLs behind a storage-level uniqueness constraint on shortcodes.
    - Retrieve short URLs by shortcode and list them per owner.
    - Atomically increment click counters and toggle favorites.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shrinklink.models import ShortURLModel
        >>> from shrinklink.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3",
        ...     owner_id="user-123",
        ... )
        >>> dao.insert(short_url)

        >>> dao.hit("a1b2c3").clicks
        1

        >>> dao.toggle_favorite(short_url.id, "user-123")
        True
"""

from abc import ABC, abstractmethod

from shrinklink.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store.
            Raises ShortURLAlreadyExistsError if the short code already exists.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by short code.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        hit(shortcode: str, **kwargs) -> ShortURLModel:
            Atomically increment the click counter and return the updated record.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

        toggle_favorite(record_id: str, owner_id: str, **kwargs) -> bool:
            Flip the favorite flag of a record owned by `owner_id`.
            Raises ShortURLNotFoundError if the record does not exist or is owned by somebody else.
            Raises DataStoreError on connection or write failure.

        list_by_owner(owner_id: str, **kwargs) -> list[ShortURLModel]:
            Return every record owned by `owner_id`, newest first.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO or
        ShortURLDynamoDBDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - The uniqueness of shortcodes must be enforced by insert() itself
          (a single atomic conditional write), never by a separate existence
          check made beforehand.
        - hit() must be a single atomic increment-and-fetch.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its short code.

        Args:
            shortcode (str):
                The case-sensitive short code of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Increment the click counter of a short URL.

        Args:
            shortcode (str):
                The short code of the clicked ShortURLModel.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The record with its updated click count.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def toggle_favorite(self, record_id: str, owner_id: str, **kwargs) -> bool:
        """Flip the favorite flag of a record scoped to its owner.

        Args:
            record_id (str):
                Opaque record identifier.

            owner_id (str):
                Identifier of the acting user. Only records owned by this user match.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: The new favorite flag.

        Raises:
            ShortURLNotFoundError:
                If no record with the given id is owned by `owner_id`.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortURLModel]:
        """List all records owned by a user, newest first.

        Args:
            owner_id (str):
                The owner's unique identifier.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            list[ShortURLModel]: The owner's records.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
