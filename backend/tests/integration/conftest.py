"""Shared fixtures for the HTTP integration tests.

The engine is built when ``milk_collection`` is first imported, so the
database URL and other settings are pinned in the environment here,
before any application module loads.
"""

import os
import tempfile
from pathlib import Path

_DB_PATH = Path(tempfile.mkdtemp(prefix="milk-collection-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "integration-test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["BOOTSTRAP_ADMIN_USERNAME"] = ""
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = ""
os.environ["ALLOW_ADMIN_SIGNUP"] = "false"
os.environ["USER_DELETE_POLICY"] = "block"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from milk_collection.domain.entities import Role, User  # noqa: E402
from milk_collection.infrastructure.database import (  # noqa: E402
    Base,
    async_session_factory,
    engine,
)
from milk_collection.infrastructure.database.repositories import (  # noqa: E402
    SQLAlchemyUserRepository,
)
from milk_collection.infrastructure.dependencies import get_password_hasher  # noqa: E402
from milk_collection.main import app  # noqa: E402

PASSWORD = "secret1"


@pytest_asyncio.fixture
async def client():
    """HTTP client bound to a freshly created schema; dropped afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def create_user(client):
    """Insert an account directly and return ``(user, bearer headers)``."""

    async def _create(username: str, *roles: Role) -> tuple[User, dict[str, str]]:
        async with async_session_factory() as session:
            user = await SQLAlchemyUserRepository(session).create(
                User(
                    username=username,
                    email=f"{username}@example.com",
                    password_hash=get_password_hasher().hash(PASSWORD),
                    roles=set(roles) or {Role.USER},
                )
            )
            await session.commit()

        response = await client.post(
            "/api/v1/auth/signin", json={"username": username, "password": PASSWORD}
        )
        assert response.status_code == 200, response.text
        return user, {"Authorization": f"Bearer {response.json()['token']}"}

    return _create
