"""
HR management API router.

This module provides the endpoints that operate on the user collection as a
whole.

Routes defined at root level:
- GET (root) - List users (projection, not paginated)
- POST (root) - Create user
- GET /{user_id} - Get one user
- DELETE /{user_id} - Delete user
- PUT /{user_id}/department - Move user to another department

These routes are mounted with '/users' prefix in the main app.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from hr.api.dependencies import get_hr_management_use_case
from hr.domain import DepartmentEntry, User, UserEntry, UserListItem
from hr.usecase import HRManagementUseCase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserListItem])
async def get_users(
    use_case: HRManagementUseCase = Depends(get_hr_management_use_case),
) -> List[UserListItem]:
    """List every user as id, name, role and department."""
    logger.info("Users requested")
    users = await use_case.get_users()
    logger.info("Users retrieved", extra={"count": len(users)})
    return users


@router.post(
    "",
    response_model=List[UserListItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    entry: UserEntry,
    use_case: HRManagementUseCase = Depends(get_hr_management_use_case),
) -> List[UserListItem]:
    """
    Create a new user.

    Answers with the refreshed list of all users rather than the created
    record alone.
    """
    logger.info("User creation requested", extra={"email": entry.email})
    return await use_case.create_user(entry)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    use_case: HRManagementUseCase = Depends(get_hr_management_use_case),
) -> User:
    """Get the full record of one user, personal documents included."""
    logger.debug("User requested", extra={"user_id": user_id})
    return await use_case.get_user(user_id)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(
    user_id: str,
    use_case: HRManagementUseCase = Depends(get_hr_management_use_case),
) -> Response:
    """Delete a user together with its personal documents."""
    logger.info("User deletion requested", extra={"user_id": user_id})
    await use_case.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}/department", response_model=User)
async def update_user_department(
    user_id: str,
    entry: DepartmentEntry,
    use_case: HRManagementUseCase = Depends(get_hr_management_use_case),
) -> User:
    """Move a user to another department."""
    logger.info(
        "Department update requested",
        extra={"user_id": user_id, "department": entry.department},
    )
    return await use_case.update_user_department(user_id, entry)
