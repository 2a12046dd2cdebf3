"""Integration tests for the SQLAlchemy user repository's unique columns."""

import pytest

from milk_collection.domain.entities import User
from milk_collection.domain.exceptions import DuplicateEntityError
from milk_collection.infrastructure.database import async_session_factory
from milk_collection.infrastructure.database.repositories import SQLAlchemyUserRepository


def _user(username: str, email: str | None = None) -> User:
    return User(
        username=username,
        email=email or f"{username}@example.com",
        password_hash="x",
    )


@pytest.mark.asyncio
async def test_insert_colliding_on_username_is_a_duplicate(client):
    async with async_session_factory() as session:
        await SQLAlchemyUserRepository(session).create(_user("alice"))
        await session.commit()

    async with async_session_factory() as session:
        with pytest.raises(DuplicateEntityError) as exc:
            await SQLAlchemyUserRepository(session).create(
                _user("alice", email="elsewhere@example.com")
            )
        await session.rollback()

    assert exc.value.field == "username"
    assert exc.value.value == "alice"


@pytest.mark.asyncio
async def test_update_colliding_on_email_is_a_duplicate(client):
    async with async_session_factory() as session:
        repo = SQLAlchemyUserRepository(session)
        await repo.create(_user("alice"))
        bob = await repo.create(_user("bob"))
        await session.commit()

    async with async_session_factory() as session:
        bob.update(email="alice@example.com")
        with pytest.raises(DuplicateEntityError) as exc:
            await SQLAlchemyUserRepository(session).update(bob)
        await session.rollback()

    assert exc.value.field == "email"

    async with async_session_factory() as session:
        stored = await SQLAlchemyUserRepository(session).get_by_id(bob.id)
    assert stored.email == "bob@example.com"
