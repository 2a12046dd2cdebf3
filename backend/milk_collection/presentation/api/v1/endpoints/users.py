"""User account endpoints.

Profiles never include the password hash. ``/{user_id}`` routes are open
to administrators and to the account's own holder; everything else that
touches other accounts is administrator-only.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from milk_collection.application.schemas import (
    CountResponse,
    MessageResponse,
    PasswordChangeRequest,
    UserResponse,
    UserUpdate,
)
from milk_collection.application.services import UserService
from milk_collection.domain import access_policy
from milk_collection.domain.entities import Actor
from milk_collection.domain.exceptions import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    InvalidCredentialsError,
)
from milk_collection.infrastructure.dependencies import (
    get_current_actor,
    get_user_service,
    require_admin,
)
from milk_collection.presentation.api.v1.endpoints.mappers import user_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _require_self_or_admin(actor: Actor, user_id: int) -> None:
    if not access_policy.can_manage_account(actor, user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


@router.get("/", response_model=list[UserResponse])
async def list_users(
    actor: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """Every account (administrators only)."""
    return [user_to_response(u) for u in await service.list_users()]


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """The caller's own profile."""
    try:
        user = await service.get_user(actor.id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return user_to_response(user)


@router.get("/count", response_model=CountResponse)
async def count_users(
    actor: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> CountResponse:
    """Total number of accounts (administrators only)."""
    return CountResponse(count=await service.count())


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: PasswordChangeRequest,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Change the caller's password after re-checking the current one."""
    if data.new_password != data.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password and confirm password do not match",
        )
    try:
        await service.change_password(actor.username, data.current_password, data.new_password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    return MessageResponse(message="Password changed successfully")


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """A single profile (administrators or the account holder)."""
    _require_self_or_admin(actor, user_id)
    try:
        user = await service.get_user(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return user_to_response(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    actor: Actor = Depends(get_current_actor),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update profile fields (administrators or the account holder)."""
    _require_self_or_admin(actor, user_id)
    try:
        await service.ensure_available(
            username=data.username, email=data.email, exclude_user_id=user_id
        )
        user = await service.update_user(user_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        detail = (
            "Username is already taken" if e.field == "username" else "Email is already in use"
        )
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)
    return user_to_response(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    actor: Actor = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete an account (administrators only; never one's own)."""
    if user_id == actor.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )
    try:
        await service.delete_user(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EntityInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    logger.info("User %s deleted by %s", user_id, actor.username)
    return MessageResponse(message="User deleted successfully")
