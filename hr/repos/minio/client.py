"""
MinioClient protocol definition.

This module defines the protocol interface that both the real Minio client
and our fake test client must implement. The document store depends on this
abstraction rather than on ``minio.Minio`` directly, so tests can swap in an
in-process fake.
"""

from typing import Any, Dict, Iterable, Optional, Protocol, runtime_checkable

import urllib3
from minio import Minio
from minio.datatypes import Object
from urllib3.response import HTTPResponse


@runtime_checkable
class MinioClient(Protocol):
    """
    Protocol defining the MinIO client interface used by the store.

    This protocol captures only the methods we actually use, making our
    dependency explicit and testable. Both the real minio.Minio client and
    FakeMinioClient implement this protocol.
    """

    def bucket_exists(self, bucket_name: str) -> bool:
        """Check if a bucket exists."""
        ...

    def make_bucket(self, bucket_name: str) -> None:
        """Create a bucket.

        Raises:
            S3Error: If bucket creation fails
        """
        ...

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: Any,
        length: int,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Store an object in the bucket.

        Raises:
            S3Error: If object storage fails
        """
        ...

    def get_object(self, bucket_name: str, object_name: str) -> HTTPResponse:
        """Retrieve an object from the bucket.

        Raises:
            S3Error: If object retrieval fails (e.g., NoSuchKey)
        """
        ...

    def stat_object(self, bucket_name: str, object_name: str) -> Object:
        """Get object metadata without retrieving the object data.

        Raises:
            S3Error: If object doesn't exist (NoSuchKey) or other errors
        """
        ...

    def remove_object(self, bucket_name: str, object_name: str) -> None:
        """Remove an object. Removing a missing object is not an error."""
        ...

    def list_objects(
        self,
        bucket_name: str,
        prefix: Optional[str] = None,
        recursive: bool = False,
    ) -> Iterable[Object]:
        """List objects in the bucket under ``prefix``."""
        ...


def create_minio_client(
    endpoint: str,
    access_key: str,
    secret_key: str,
    secure: bool = False,
    timeout: Optional[float] = None,
) -> MinioClient:
    """Build a real Minio client for the given endpoint.

    With ``timeout`` set, every HTTP request the client makes is bounded by
    it (connect and read) and is not retried, so a worker thread running a
    client call ends about when the awaiting store call gives up. Without
    it the driver keeps its own defaults.
    """
    http_client = None
    if timeout is not None:
        http_client = urllib3.PoolManager(
            timeout=urllib3.Timeout(connect=timeout, read=timeout),
            retries=urllib3.Retry(total=0),
        )
    return Minio(
        endpoint,
        access_key=access_key,
        secret_key=secret_key,
        secure=secure,
        http_client=http_client,
    )
