"""
usecase logic must be clean, without direct dependencies.
the document store is injected via the constructor.

Two use cases operate on the user collection:

- ``HRManagementUseCase`` works on the collection as a whole: create
  (enforcing email uniqueness), delete, fetch one, list, and move a user to
  another department.
- ``UserManagementUseCase`` works inside one user record: add and update
  personal documents, and look a user up by email.

Every operation is a single linear sequence of optional lookup, in-memory
mutation, optional single write-back and response. Same-user updates are
read-modify-write without any concurrency guard, so the later write-back
wins. There is no retry: any store error aborts the operation and is raised
as one of the failures in ``hr.errors``.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from hr.domain import (
    DepartmentEntry,
    LoginEntry,
    PersonalDocument,
    PersonalDocumentEntry,
    PersonalDocumentUpdate,
    User,
    UserEntry,
    UserListItem,
)
from hr.errors import (
    PersonalDocumentNotFoundError,
    StorageFailureError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from hr.repositories import (
    DocumentStore,
    StoreConflictError,
    StoreError,
    StoreFailureError,
    StoreNotFoundError,
)
from hr.validation import ensure_document_store

logger = logging.getLogger(__name__)

R = TypeVar("R")


def generate_id() -> str:
    """Generate a random unique identifier."""
    return str(uuid.uuid4())


class _UserStoreUseCase:
    """Shared plumbing for use cases backed by the user document store."""

    def __init__(
        self,
        user_store: DocumentStore[User],
        store_timeout: Optional[float] = None,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        """Initialize the use case.

        Args:
            user_store: Document store holding User records
            store_timeout: Seconds each store call may take, or None
            id_factory: Produces identifiers for new users and documents

        Raises:
            StorageFailureError: If ``user_store`` is not a DocumentStore
        """
        # Validate at construction time for early error detection
        self.user_store = ensure_document_store(user_store)
        self.store_timeout = store_timeout
        self.id_factory = id_factory

    async def _store_call(
        self,
        operation: str,
        call: Awaitable[R],
        extra: Dict[str, Any],
    ) -> R:
        """Await one store call under the configured timeout.

        A timeout cancels the store call and is reported as a storage
        fault. Cancellation of the caller itself propagates unchanged.
        """
        logger.debug(
            f"About to {operation}",
            extra={**extra, "operation": operation},
        )
        try:
            return await asyncio.wait_for(call, timeout=self.store_timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                "Store call timed out",
                extra={
                    **extra,
                    "operation": operation,
                    "timeout": self.store_timeout,
                },
            )
            raise StoreFailureError(
                f"{operation} timed out after {self.store_timeout}s"
            ) from e

    @staticmethod
    def _storage_failure(
        message: str, error: StoreError, extra: Dict[str, Any]
    ) -> StorageFailureError:
        logger.error(
            message,
            extra={
                **extra,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )
        return StorageFailureError(str(error), message=message)

    async def _get_user(self, user_id: str) -> User:
        extra = {"user_id": user_id}
        try:
            return await self._store_call(
                "find user", self.user_store.find(user_id), extra
            )
        except StoreNotFoundError as e:
            logger.warning("User not found", extra=extra)
            raise UserNotFoundError(str(e)) from e
        except StoreFailureError as e:
            raise self._storage_failure(
                "Failed to get user from database", e, extra
            ) from e
        except StoreError as e:
            raise self._storage_failure(
                "Unexpected store outcome", e, extra
            ) from e

    async def _write_back(self, user: User) -> None:
        extra = {"user_id": user.id}
        try:
            await self._store_call(
                "update user", self.user_store.update(user.id, user), extra
            )
        except StoreNotFoundError as e:
            # deleted between the read and the write-back
            logger.warning("User disappeared before update", extra=extra)
            raise UserNotFoundError(str(e)) from e
        except StoreFailureError as e:
            raise self._storage_failure(
                "Failed to update user", e, extra
            ) from e
        except StoreError as e:
            raise self._storage_failure(
                "Unexpected store outcome", e, extra
            ) from e


class HRManagementUseCase(_UserStoreUseCase):
    """
    Use case for managing the user collection as a whole.

    Architectural Notes:
    - Pure business logic with no framework dependencies
    - The store is injected via constructor (dependency inversion)
    - Email uniqueness is checked only when a user is created
    """

    async def create_user(self, entry: UserEntry) -> List[UserListItem]:
        """Create a user unless one with the same email exists.

        Returns:
            The freshly recomputed projection of every stored user

        Raises:
            UserAlreadyExistsError: Email already taken, or id collision
            StorageFailureError: Any other store fault
        """
        extra = {"email": entry.email}
        logger.info("User creation requested", extra=extra)

        try:
            existing = await self._store_call(
                "find user by email",
                self.user_store.find_by_secondary_key(entry.email),
                extra,
            )
        except StoreNotFoundError:
            existing = None
        except StoreFailureError as e:
            raise self._storage_failure(
                "Failed to check if user with email already exists", e, extra
            ) from e
        except StoreError as e:
            raise self._storage_failure(
                "Unexpected store outcome", e, extra
            ) from e

        if existing is not None:
            logger.warning(
                "User with email already exists",
                extra={**extra, "existing_user_id": existing.id},
            )
            raise UserAlreadyExistsError(
                f"User with email {entry.email} already exists"
            )

        user = entry.to_domain_model(self.id_factory())
        extra["user_id"] = user.id

        try:
            await self._store_call(
                "create user", self.user_store.create(user.id, user), extra
            )
        except StoreConflictError as e:
            logger.warning("User id already exists", extra=extra)
            raise UserAlreadyExistsError(
                str(e), message="User already exists"
            ) from e
        except StoreFailureError as e:
            error = self._storage_failure(
                "Failed to create user in database", e, extra
            )
            error.status_code = 502
            raise error from e
        except StoreError as e:
            raise self._storage_failure(
                "Unexpected store outcome", e, extra
            ) from e

        logger.info("User created", extra=extra)
        return await self.get_users()

    async def delete_user(self, user_id: str) -> None:
        """Delete a user and, with it, all of its personal documents.

        Raises:
            UserNotFoundError: No user has ``user_id``
            StorageFailureError: Any other store fault
        """
        extra = {"user_id": user_id}
        try:
            await self._store_call(
                "delete user", self.user_store.delete(user_id), extra
            )
        except StoreNotFoundError as e:
            logger.warning("User not found", extra=extra)
            raise UserNotFoundError(str(e)) from e
        except StoreFailureError as e:
            raise self._storage_failure(
                "Failed to delete user from database", e, extra
            ) from e
        except StoreError as e:
            raise self._storage_failure(
                "Unexpected store outcome", e, extra
            ) from e

        logger.info("User deleted", extra=extra)

    async def get_user(self, user_id: str) -> User:
        """Return the full record of one user."""
        return await self._get_user(user_id)

    async def get_users(self) -> List[UserListItem]:
        """Return the list projection of every stored user."""
        try:
            users = await self._store_call(
                "list users", self.user_store.list_all(), {}
            )
        except StoreError as e:
            raise self._storage_failure(
                "Failed to get users from database", e, {}
            ) from e

        logger.debug("Users listed", extra={"count": len(users)})
        return [user.to_list_item() for user in users]

    async def update_user_department(
        self, user_id: str, entry: DepartmentEntry
    ) -> User:
        """Move a user to another department.

        Only the department field changes; the whole record is written
        back.
        """
        user = await self._get_user(user_id)
        previous = user.department
        user.department = entry.department
        await self._write_back(user)

        logger.info(
            "User department updated",
            extra={
                "user_id": user_id,
                "previous_department": previous,
                "department": user.department,
            },
        )
        return user


class UserManagementUseCase(_UserStoreUseCase):
    """
    Use case for operations nested inside one user record.

    Personal documents are created only here, mutated only here by id, and
    disappear only when their owner is deleted.
    """

    async def add_personal_document(
        self, user_id: str, entry: PersonalDocumentEntry
    ) -> PersonalDocument:
        """Append a new personal document to the end of a user's list.

        Raises:
            UserNotFoundError: No user has ``user_id``
            StorageFailureError: Any store fault
        """
        user = await self._get_user(user_id)

        document = entry.to_domain_model(self.id_factory())
        user.personal_document.append(document)
        await self._write_back(user)

        logger.info(
            "Personal document added",
            extra={
                "user_id": user_id,
                "document_id": document.id,
                "document_count": len(user.personal_document),
            },
        )
        return document

    async def update_personal_document(
        self, user_id: str, update: PersonalDocumentUpdate
    ) -> PersonalDocument:
        """Overwrite name and content of one personal document in place.

        The document keeps its id and its position in the list.

        Raises:
            UserNotFoundError: No user has ``user_id``
            PersonalDocumentNotFoundError: The user owns no such document
            StorageFailureError: Any store fault
        """
        user = await self._get_user(user_id)

        index = user.find_personal_document(update.id)
        if index < 0:
            logger.warning(
                "Personal document not found",
                extra={"user_id": user_id, "document_id": update.id},
            )
            raise PersonalDocumentNotFoundError(
                f"User {user_id} has no personal document {update.id}"
            )

        document = user.personal_document[index]
        document.name = update.name
        document.content = update.content
        await self._write_back(user)

        logger.info(
            "Personal document updated",
            extra={
                "user_id": user_id,
                "document_id": document.id,
                "position": index,
            },
        )
        return document

    async def login_user(self, entry: LoginEntry) -> User:
        """Look a user up by email. No credential is checked."""
        extra = {"email": entry.email}
        try:
            user = await self._store_call(
                "find user by email",
                self.user_store.find_by_secondary_key(entry.email),
                extra,
            )
        except StoreNotFoundError as e:
            logger.warning("Login for unknown email", extra=extra)
            raise UserNotFoundError(str(e)) from e
        except StoreFailureError as e:
            raise self._storage_failure(
                "Failed to find user by email", e, extra
            ) from e
        except StoreError as e:
            raise self._storage_failure(
                "Unexpected store outcome", e, extra
            ) from e

        logger.info("User logged in", extra={**extra, "user_id": user.id})
        return user
