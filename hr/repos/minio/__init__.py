"""
Minio store implementations for the hr domain.

These implementations use Minio for object storage and are suitable for
production environments where persistent storage is required. They keep the
same async interface as their memory counterparts.
"""

from .client import MinioClient, create_minio_client
from .store import MinioDocumentStore

__all__ = [
    "MinioClient",
    "MinioDocumentStore",
    "create_minio_client",
]
