"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from milk_collection.config import get_settings
from milk_collection.application.services import AuthService
from milk_collection.infrastructure.database import Base, engine
from milk_collection.infrastructure.database.session import async_session_factory
from milk_collection.infrastructure.database.repositories import SQLAlchemyUserRepository
from milk_collection.infrastructure.dependencies import get_password_hasher, get_token_provider
from milk_collection.infrastructure.logging.log_config import setup_logging
from milk_collection.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_bootstrap_admin() -> None:
    """Ensure the configured administrator account exists.

    Does nothing unless both a username and a password are configured.
    Safe to call on every startup.
    """
    settings = get_settings()
    username = settings.bootstrap_admin_username.strip()
    password = settings.bootstrap_admin_password
    if not username or not password:
        logger.debug("No bootstrap administrator configured")
        return

    email = settings.bootstrap_admin_email.strip() or f"{username}@localhost"
    async with async_session_factory() as session:
        service = AuthService(
            users=SQLAlchemyUserRepository(session),
            hasher=get_password_hasher(),
            tokens=get_token_provider(),
        )
        await service.ensure_admin(username, email, password)
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, create tables and seed the administrator on startup."""
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await _seed_bootstrap_admin()

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "milk_collection.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )
