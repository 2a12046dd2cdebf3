"""Sign-in and sign-up endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from milk_collection.application.schemas import (
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UserResponse,
)
from milk_collection.application.services import AuthService
from milk_collection.domain.exceptions import (
    DuplicateEntityError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from milk_collection.infrastructure.dependencies import get_auth_service
from milk_collection.presentation.api.v1.endpoints.mappers import user_to_response

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signin", response_model=TokenResponse)
async def sign_in(
    data: SignInRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange a username and password for a bearer token."""
    try:
        user, token = await service.sign_in(data.username, data.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(
        token=token,
        id=user.id,
        username=user.username,
        email=user.email,
        roles=sorted(user.roles),
    )


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    data: SignUpRequest,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Register a new account."""
    try:
        user = await service.sign_up(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    return user_to_response(user)
