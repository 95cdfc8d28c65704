"""
User management API router.

Endpoints that work inside a single user record, plus login.

Routes defined at root level:
- POST /login - Look a user up by email
- POST /{user_id}/documents - Add a personal document
- PUT /{user_id}/documents - Update a personal document by id

These routes are mounted with '/users' prefix in the main app.
"""

import logging

from fastapi import APIRouter, Depends

from hr.api.dependencies import get_user_management_use_case
from hr.domain import (
    LoginEntry,
    PersonalDocument,
    PersonalDocumentEntry,
    PersonalDocumentUpdate,
    User,
)
from hr.usecase import UserManagementUseCase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=User)
async def login_user(
    entry: LoginEntry,
    use_case: UserManagementUseCase = Depends(get_user_management_use_case),
) -> User:
    """
    Return the user registered under the given email.

    This is a lookup only; no password or token is verified.
    """
    logger.info("Login requested", extra={"email": entry.email})
    return await use_case.login_user(entry)


@router.post("/{user_id}/documents", response_model=PersonalDocument)
async def add_personal_document(
    user_id: str,
    entry: PersonalDocumentEntry,
    use_case: UserManagementUseCase = Depends(get_user_management_use_case),
) -> PersonalDocument:
    """Append a personal document to a user and return it with its id."""
    logger.info(
        "Personal document addition requested",
        extra={"user_id": user_id, "document_name": entry.name},
    )
    return await use_case.add_personal_document(user_id, entry)


@router.put("/{user_id}/documents", response_model=PersonalDocument)
async def update_personal_document(
    user_id: str,
    update: PersonalDocumentUpdate,
    use_case: UserManagementUseCase = Depends(get_user_management_use_case),
) -> PersonalDocument:
    """Overwrite name and content of the personal document with ``id``."""
    logger.info(
        "Personal document update requested",
        extra={"user_id": user_id, "document_id": update.id},
    )
    return await use_case.update_personal_document(user_id, update)
