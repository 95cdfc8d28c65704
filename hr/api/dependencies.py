"""
Dependency injection for FastAPI endpoints.

The user store is a process-wide singleton. Each request receives it
explicitly through ``Depends`` and hands it to the use case constructor;
there is no request-context lookup. Tests replace ``get_user_store`` via
``app.dependency_overrides``.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import Depends

from hr.config import Settings
from hr.domain import User
from hr.repositories import DocumentStore
from hr.repos.memory import MemoryDocumentStore
from hr.repos.minio import MinioDocumentStore, create_minio_client
from hr.usecase import HRManagementUseCase, UserManagementUseCase

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency injection container with singleton lifecycle management.
    Always creates real stores; test doubles are provided by overrides.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}
        self.settings = Settings.from_env()

    async def get_or_create(
        self, key: str, factory: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Get or create a singleton instance."""
        if key not in self._instances:
            self._instances[key] = await factory()
        return self._instances[key]

    async def get_user_store(self) -> DocumentStore[User]:
        """Get or create the user document store."""
        store = await self.get_or_create(
            "user_store", self._create_user_store
        )
        return store  # type: ignore[no-any-return]

    async def _create_user_store(self) -> DocumentStore[User]:
        """Create the user store for the configured backend."""
        backend = self.settings.store_backend
        logger.debug(
            "Creating user store",
            extra={
                "backend": backend,
                "bucket": self.settings.users_bucket,
            },
        )

        if backend == "minio":
            client = create_minio_client(
                self.settings.minio_endpoint,
                access_key=self.settings.minio_access_key,
                secret_key=self.settings.minio_secret_key,
                secure=self.settings.minio_secure,
                timeout=self.settings.store_timeout,
            )
            return MinioDocumentStore(
                client,
                User,
                bucket_name=self.settings.users_bucket,
                prefix="users",
            )
        return MemoryDocumentStore(User)


# Global container instance
_container = DependencyContainer()


async def get_user_store() -> DocumentStore[User]:
    """FastAPI dependency for the user document store."""
    return await _container.get_user_store()


async def get_hr_management_use_case(
    user_store: DocumentStore[User] = Depends(get_user_store),
) -> HRManagementUseCase:
    """FastAPI dependency for HRManagementUseCase."""
    return HRManagementUseCase(
        user_store, store_timeout=_container.settings.store_timeout
    )


async def get_user_management_use_case(
    user_store: DocumentStore[User] = Depends(get_user_store),
) -> UserManagementUseCase:
    """FastAPI dependency for UserManagementUseCase."""
    return UserManagementUseCase(
        user_store, store_timeout=_container.settings.store_timeout
    )
