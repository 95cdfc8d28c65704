"""
Memory store implementations for the hr domain.

These implementations use Python dictionaries for storage and are ideal for
testing scenarios where external dependencies should be avoided. They keep
the same async interface as their MinIO counterparts.
"""

from .store import MemoryDocumentStore

__all__ = [
    "MemoryDocumentStore",
]
