"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from milk_collection.config import get_settings
from milk_collection.application.interfaces import PasswordHasher, TokenProvider
from milk_collection.application.services import AuthService, MilkRecordService, UserService
from milk_collection.domain import access_policy
from milk_collection.domain.entities import Actor
from milk_collection.infrastructure.database.session import get_db_session
from milk_collection.infrastructure.database.repositories import (
    SQLAlchemyMilkRecordRepository,
    SQLAlchemyUserRepository,
)
from milk_collection.infrastructure.security import BcryptPasswordHasher, JWTTokenProvider

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_token_provider() -> TokenProvider:
    settings = get_settings()
    return JWTTokenProvider(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService wired to the user repository, hasher and token provider."""
    yield AuthService(
        users=SQLAlchemyUserRepository(session),
        hasher=get_password_hasher(),
        tokens=get_token_provider(),
        allow_admin_signup=get_settings().allow_admin_signup,
    )


async def get_milk_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[MilkRecordService, None]:
    """Provides a MilkRecordService instance with its repositories wired up."""
    yield MilkRecordService(
        records=SQLAlchemyMilkRecordRepository(session),
        users=SQLAlchemyUserRepository(session),
    )


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserService, None]:
    """Provides a UserService instance with its repositories wired up."""
    yield UserService(
        users=SQLAlchemyUserRepository(session),
        records=SQLAlchemyMilkRecordRepository(session),
        hasher=get_password_hasher(),
        delete_policy=get_settings().user_delete_policy,
    )


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> Actor:
    """Resolve the bearer token into the calling Actor, or answer 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    actor = await auth.resolve_actor(credentials.credentials)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Let administrators through; everyone else gets 403 before any service runs."""
    if not access_policy.is_admin(actor):
        logger.warning("User %s denied access to an administrator endpoint", actor.username)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return actor
