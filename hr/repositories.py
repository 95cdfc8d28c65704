"""
Repository interfaces defined as Protocols.

The HR service persists everything through a single seam: a generic keyed
document store over one collection of records of one type. The contract is
deliberately small because the domain only ever needs point lookups, a full
scan and one uniqueness check on the email field.

All store operations follow these principles:

- **Closed outcomes**: every operation either returns its value or raises
  exactly one of ``StoreNotFoundError``, ``StoreConflictError`` or
  ``StoreFailureError``. Implementations must translate driver errors into
  ``StoreFailureError``; nothing else escapes.

- **Whole-record writes**: there is no partial or field-level update.
  Callers read the full record, modify it in memory and write it back.

- **Single-record atomicity**: a single ``create``, ``update`` or ``delete``
  is atomic with respect to its own record. Nothing spans records.

- **Domain Objects**: Methods accept and return domain objects or
  primitives, never framework-specific types.

Architectural Notes:

- These are pure interfaces with no implementation details
- Use case classes depend on these protocols, not concrete implementations
- Implementations live in ``hr.repos.memory`` and ``hr.repos.minio``
"""

from typing import List, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

# Type variable bound to Pydantic BaseModel for stored records
T = TypeVar("T", bound=BaseModel)


class StoreError(Exception):
    """Base class of every outcome a document store may raise."""

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key


class StoreNotFoundError(StoreError):
    """No record matches the requested key."""


class StoreConflictError(StoreError):
    """A record with the requested key already exists."""


class StoreFailureError(StoreError):
    """The underlying storage failed, or a lookup was ambiguous."""


@runtime_checkable
class DocumentStore(Protocol[T]):
    """Generic keyed-document repository over one collection.

    Type Parameter:
        T: The stored record type (must extend Pydantic BaseModel)
    """

    async def create(self, key: str, record: T) -> None:
        """Store a new record under ``key``.

        Raises:
            StoreConflictError: If a record with ``key`` already exists
            StoreFailureError: On any storage fault
        """
        ...

    async def find(self, key: str) -> T:
        """Return the record stored under ``key``.

        Raises:
            StoreNotFoundError: If no record has ``key``
            StoreFailureError: On any storage fault
        """
        ...

    async def find_by_secondary_key(self, value: str) -> T:
        """Return the single record whose secondary key equals ``value``.

        The secondary key is the email field for user records. It is
        expected to be unique, so more than one match is an invariant
        violation rather than a normal outcome.

        Raises:
            StoreNotFoundError: If no record matches
            StoreFailureError: On a storage fault, or if several match
        """
        ...

    async def list_all(self) -> List[T]:
        """Return every record in the collection.

        Order is store-defined; callers must not depend on it.

        Raises:
            StoreFailureError: On any storage fault
        """
        ...

    async def update(self, key: str, record: T) -> None:
        """Replace the record stored under ``key`` wholesale.

        Raises:
            StoreNotFoundError: If no record has ``key``
            StoreFailureError: On any storage fault
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove the record stored under ``key``.

        Raises:
            StoreNotFoundError: If no record has ``key``
            StoreFailureError: On any storage fault
        """
        ...
