"""
Memory implementation of DocumentStore.

This module provides an in-memory implementation of the DocumentStore
protocol. Records are kept in a Python dictionary keyed by record id, which
makes it ideal for testing scenarios where external dependencies should be
avoided, and for running the service locally without MinIO.

Records are deep-copied on the way in and on the way out, so a caller that
mutates a fetched record changes nothing until it writes the record back.
All operations are still async to maintain interface compatibility.
"""

import asyncio
import logging
from typing import Dict, Generic, List, Type

from hr.repositories import (
    StoreConflictError,
    StoreFailureError,
    StoreNotFoundError,
    T,
)

logger = logging.getLogger(__name__)


class MemoryDocumentStore(Generic[T]):
    """
    Memory implementation of DocumentStore using a Python dictionary.

    A single ``asyncio.Lock`` serializes every operation, which makes each
    create, update and delete atomic with respect to concurrent readers.
    """

    def __init__(
        self,
        model_class: Type[T],
        secondary_key: str = "email",
    ) -> None:
        """Initialize the store with empty in-memory storage.

        Args:
            model_class: Pydantic model of the stored records
            secondary_key: Name of the field used by find_by_secondary_key
        """
        self.model_class = model_class
        self.secondary_key = secondary_key
        self.entity_name = model_class.__name__
        self.storage_dict: Dict[str, T] = {}
        self._lock = asyncio.Lock()

        logger.debug(
            "Initializing MemoryDocumentStore",
            extra={"entity_name": self.entity_name},
        )

    async def create(self, key: str, record: T) -> None:
        async with self._lock:
            if key in self.storage_dict:
                logger.warning(
                    f"{self.entity_name} already exists",
                    extra={"key": key},
                )
                raise StoreConflictError(
                    f"{self.entity_name} {key} already exists", key
                )
            self.storage_dict[key] = record.model_copy(deep=True)

        logger.info(
            f"{self.entity_name} created", extra={"key": key}
        )

    async def find(self, key: str) -> T:
        async with self._lock:
            record = self.storage_dict.get(key)
        if record is None:
            logger.debug(
                f"{self.entity_name} not found", extra={"key": key}
            )
            raise StoreNotFoundError(
                f"{self.entity_name} {key} not found", key
            )
        return record.model_copy(deep=True)

    async def find_by_secondary_key(self, value: str) -> T:
        async with self._lock:
            matches = [
                record
                for record in self.storage_dict.values()
                if getattr(record, self.secondary_key) == value
            ]

        if not matches:
            logger.debug(
                f"{self.entity_name} not found by {self.secondary_key}",
                extra={"secondary_key": self.secondary_key, "value": value},
            )
            raise StoreNotFoundError(
                f"{self.entity_name} with {self.secondary_key} {value} "
                "not found",
                value,
            )
        if len(matches) > 1:
            logger.error(
                f"Several {self.entity_name} records share one "
                f"{self.secondary_key}",
                extra={
                    "secondary_key": self.secondary_key,
                    "value": value,
                    "count": len(matches),
                },
            )
            raise StoreFailureError(
                f"{len(matches)} {self.entity_name} records match "
                f"{self.secondary_key} {value}",
                value,
            )
        return matches[0].model_copy(deep=True)

    async def list_all(self) -> List[T]:
        async with self._lock:
            records = [
                record.model_copy(deep=True)
                for record in self.storage_dict.values()
            ]
        logger.debug(
            f"Listed {self.entity_name} records",
            extra={"count": len(records)},
        )
        return records

    async def update(self, key: str, record: T) -> None:
        async with self._lock:
            if key not in self.storage_dict:
                raise StoreNotFoundError(
                    f"{self.entity_name} {key} not found", key
                )
            self.storage_dict[key] = record.model_copy(deep=True)

        logger.info(
            f"{self.entity_name} updated", extra={"key": key}
        )

    async def delete(self, key: str) -> None:
        async with self._lock:
            if self.storage_dict.pop(key, None) is None:
                raise StoreNotFoundError(
                    f"{self.entity_name} {key} not found", key
                )

        logger.info(
            f"{self.entity_name} deleted", extra={"key": key}
        )
