"""
Minio implementation of DocumentStore.

This module provides a Minio-based implementation of the DocumentStore
protocol. Each record is stored as a separate JSON object whose name is
derived from the record key (``<prefix>/<key>.json``), so a single
``put_object`` or ``remove_object`` replaces or removes exactly one record
atomically.

The Minio client is synchronous. Every client call runs in a worker thread
so that a request-scoped timeout can abandon it without blocking the event
loop. Driver errors never leave this module: ``NoSuchKey`` becomes
``StoreNotFoundError`` where the contract calls for it, and every other
``S3Error`` or unexpected exception becomes ``StoreFailureError``.

The existence check and the write of ``create``, ``update`` and ``delete``
are two client calls. A per-key ``asyncio.Lock`` makes the pair atomic
within one process; several processes sharing a bucket are not
coordinated.

A worker thread cannot be interrupted. When the caller stops waiting, the
client call still runs until the HTTP timeout configured on the client
(see ``create_minio_client``), so a write that already reached the server
may land after the caller was told it failed.

Note on performance: there is no index on the secondary key.
``find_by_secondary_key`` lists the prefix and reads every object, so each
user creation and each login costs one GET per stored record.
"""

import asyncio
import io
import logging
import weakref
from typing import Any, Callable, Generic, List, Type

from minio.error import S3Error
from pydantic import ValidationError

from hr.repositories import (
    StoreConflictError,
    StoreFailureError,
    StoreNotFoundError,
    T,
)
from .client import MinioClient

logger = logging.getLogger(__name__)


def _is_no_such_key(error: S3Error) -> bool:
    return getattr(error, "code", None) in ("NoSuchKey", "NoSuchObject")


class MinioDocumentStore(Generic[T]):
    """
    Minio implementation of DocumentStore using one JSON object per record.

    Records are serialized with ``model_dump_json(by_alias=True)`` so the
    stored layout matches the public field names.
    """

    def __init__(
        self,
        client: MinioClient,
        model_class: Type[T],
        bucket_name: str,
        prefix: str = "records",
        secondary_key: str = "email",
    ) -> None:
        """Initialize the store with a Minio client.

        Args:
            client: MinioClient protocol implementation (real or fake)
            model_class: Pydantic model of the stored records
            bucket_name: Bucket holding the collection
            prefix: Object name prefix for the collection
            secondary_key: Name of the field used by find_by_secondary_key
        """
        self.client = client
        self.model_class = model_class
        self.bucket_name = bucket_name
        self.prefix = prefix
        self.secondary_key = secondary_key
        self.entity_name = model_class.__name__
        self._key_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )
        self._ensure_bucket_exists()

    def _ensure_bucket_exists(self) -> None:
        try:
            if not self.client.bucket_exists(self.bucket_name):
                logger.info(
                    "Creating bucket",
                    extra={"bucket_name": self.bucket_name},
                )
                self.client.make_bucket(self.bucket_name)
            else:
                logger.debug(
                    "Bucket already exists",
                    extra={"bucket_name": self.bucket_name},
                )
        except S3Error as e:
            logger.error(
                "Failed to create bucket",
                extra={"bucket_name": self.bucket_name, "error": str(e)},
            )
            raise

    def _object_name(self, key: str) -> str:
        return f"{self.prefix}/{key}.json"

    def _lock_for(self, key: str) -> asyncio.Lock:
        """Return the lock serializing check-and-write on ``key``.

        Locks live only while some coroutine holds a reference.
        """
        lock = self._key_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._key_locks[key] = lock
        return lock

    async def _call(
        self, operation: str, func: Callable[..., Any], **kwargs: Any
    ) -> Any:
        """Run one blocking client call, translating unexpected errors.

        ``S3Error`` is re-raised untouched so the caller can decide whether
        it means not-found; anything else is a storage fault.
        """
        try:
            return await asyncio.to_thread(func, **kwargs)
        except S3Error:
            raise
        except Exception as e:
            logger.error(
                f"MinioDocumentStore: Unexpected error during {operation}",
                extra={
                    "bucket": self.bucket_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            raise StoreFailureError(
                f"{operation} failed: {e}"
            ) from e

    def _failure(
        self, operation: str, key: str, error: Exception
    ) -> StoreFailureError:
        logger.error(
            f"MinioDocumentStore: {operation} failed",
            extra={
                "entity_name": self.entity_name,
                "key": key,
                "bucket": self.bucket_name,
                "error": str(error),
                "error_type": type(error).__name__,
            },
            exc_info=True,
        )
        return StoreFailureError(
            f"{operation} of {self.entity_name} {key} failed: {error}", key
        )

    async def _exists(self, key: str) -> bool:
        try:
            await self._call(
                "stat",
                self.client.stat_object,
                bucket_name=self.bucket_name,
                object_name=self._object_name(key),
            )
            return True
        except S3Error as e:
            if _is_no_such_key(e):
                return False
            raise self._failure("stat", key, e) from e

    async def _read(self, object_name: str, key: str) -> T:
        response = await self._call(
            "get",
            self.client.get_object,
            bucket_name=self.bucket_name,
            object_name=object_name,
        )
        try:
            data = response.read()
        finally:
            response.close()
            response.release_conn()

        try:
            return self.model_class.model_validate_json(data)
        except ValidationError as e:
            raise self._failure("decode", key, e) from e

    async def _write(self, key: str, record: T) -> None:
        payload = record.model_dump_json(by_alias=True).encode("utf-8")
        try:
            await self._call(
                "put",
                self.client.put_object,
                bucket_name=self.bucket_name,
                object_name=self._object_name(key),
                data=io.BytesIO(payload),
                length=len(payload),
                content_type="application/json",
            )
        except S3Error as e:
            raise self._failure("put", key, e) from e

        logger.debug(
            "MinioDocumentStore: Record written",
            extra={
                "key": key,
                "bucket": self.bucket_name,
                "payload_size_bytes": len(payload),
            },
        )

    async def create(self, key: str, record: T) -> None:
        async with self._lock_for(key):
            if await self._exists(key):
                logger.warning(
                    f"{self.entity_name} already exists",
                    extra={"key": key, "bucket": self.bucket_name},
                )
                raise StoreConflictError(
                    f"{self.entity_name} {key} already exists", key
                )
            await self._write(key, record)
        logger.info(
            f"{self.entity_name} created",
            extra={"key": key, "bucket": self.bucket_name},
        )

    async def find(self, key: str) -> T:
        logger.debug(
            "MinioDocumentStore: Attempting to retrieve record",
            extra={"key": key, "bucket": self.bucket_name},
        )
        try:
            return await self._read(self._object_name(key), key)
        except S3Error as e:
            if _is_no_such_key(e):
                logger.debug(
                    f"{self.entity_name} not found (NoSuchKey)",
                    extra={"key": key},
                )
                raise StoreNotFoundError(
                    f"{self.entity_name} {key} not found", key
                ) from e
            raise self._failure("get", key, e) from e

    async def find_by_secondary_key(self, value: str) -> T:
        records = await self.list_all()
        matches = [
            record
            for record in records
            if getattr(record, self.secondary_key) == value
        ]
        if not matches:
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
        return matches[0]

    async def list_all(self) -> List[T]:
        try:
            objects = await self._call(
                "list",
                lambda **kw: list(self.client.list_objects(**kw)),
                bucket_name=self.bucket_name,
                prefix=f"{self.prefix}/",
                recursive=True,
            )
        except S3Error as e:
            raise self._failure("list", self.prefix, e) from e

        records = []
        for obj in objects:
            try:
                records.append(
                    await self._read(obj.object_name, obj.object_name)
                )
            except S3Error as e:
                if _is_no_such_key(e):
                    # removed between listing and reading
                    continue
                raise self._failure("get", obj.object_name, e) from e

        logger.debug(
            f"Listed {self.entity_name} records",
            extra={"count": len(records), "bucket": self.bucket_name},
        )
        return records

    async def update(self, key: str, record: T) -> None:
        async with self._lock_for(key):
            if not await self._exists(key):
                raise StoreNotFoundError(
                    f"{self.entity_name} {key} not found", key
                )
            await self._write(key, record)
        logger.info(
            f"{self.entity_name} updated",
            extra={"key": key, "bucket": self.bucket_name},
        )

    async def delete(self, key: str) -> None:
        async with self._lock_for(key):
            if not await self._exists(key):
                raise StoreNotFoundError(
                    f"{self.entity_name} {key} not found", key
                )
            try:
                await self._call(
                    "remove",
                    self.client.remove_object,
                    bucket_name=self.bucket_name,
                    object_name=self._object_name(key),
                )
            except S3Error as e:
                raise self._failure("remove", key, e) from e
        logger.info(
            f"{self.entity_name} deleted",
            extra={"key": key, "bucket": self.bucket_name},
        )
