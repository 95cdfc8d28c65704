"""
Runtime validation utilities for ensuring architectural contracts.

Use cases receive their document store by explicit injection. This module
checks, once at construction time, that whatever was injected actually
satisfies the ``DocumentStore`` protocol, using Python's built-in
``isinstance()`` with ``@runtime_checkable``. A missing or mistyped store is
a storage-class fault and is reported before any domain logic runs.
"""

import logging
from typing import Any, Type, TypeVar

from hr.errors import StorageFailureError
from hr.repositories import DocumentStore

logger = logging.getLogger(__name__)

P = TypeVar("P")


class RepositoryValidationError(Exception):
    """Raised when repository contract validation fails"""

    pass


def validate_repository_protocol(
    repository: object, protocol: Type[P]
) -> None:
    """
    Validate that a repository implementation satisfies a protocol contract.

    Args:
        repository: The repository implementation to validate
        protocol: The protocol class to validate against

    Raises:
        RepositoryValidationError: If validation fails

    Example:
        >>> from hr.domain import User
        >>> from hr.repos.memory import MemoryDocumentStore
        >>> validate_repository_protocol(
        ...     MemoryDocumentStore(User), DocumentStore
        ... )
    """
    logger.debug(
        "Validating repository protocol",
        extra={
            "repository_type": type(repository).__name__,
            "protocol_name": protocol.__name__,
        },
    )

    if repository is None or not isinstance(repository, protocol):
        error_message = (
            f"Repository {type(repository).__name__} does not implement "
            f"{protocol.__name__} protocol. Missing or incorrect methods."
        )

        logger.error(
            "Repository protocol validation failed",
            extra={
                "repository_type": type(repository).__name__,
                "protocol_name": protocol.__name__,
            },
        )

        raise RepositoryValidationError(error_message)

    logger.debug(
        "Repository protocol validation passed",
        extra={
            "repository_type": type(repository).__name__,
            "protocol_name": protocol.__name__,
        },
    )


def ensure_repository_protocol(repository: object, protocol: Type[P]) -> P:
    """
    Validate and return a repository with proper type annotation.

    This provides both runtime validation and static type checking benefits.

    Raises:
        RepositoryValidationError: If validation fails
    """
    validate_repository_protocol(repository, protocol)
    return repository  # type: ignore[return-value]


def ensure_document_store(store: Any) -> DocumentStore:
    """Validate an injected document store.

    Raises:
        StorageFailureError: If ``store`` is missing or is not a
            DocumentStore
    """
    try:
        return ensure_repository_protocol(store, DocumentStore)
    except RepositoryValidationError as e:
        raise StorageFailureError(str(e), message="db not found") from e
