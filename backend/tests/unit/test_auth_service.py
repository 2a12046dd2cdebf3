"""Unit tests for the AuthService."""

import pytest

from milk_collection.application.schemas import SignUpRequest
from milk_collection.application.services import AuthService
from milk_collection.domain.entities import Role
from milk_collection.domain.exceptions import (
    DuplicateEntityError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from tests.unit.fakes import FakePasswordHasher, FakeTokenProvider, FakeUserRepository


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def service(users: FakeUserRepository) -> AuthService:
    return AuthService(users=users, hasher=FakePasswordHasher(), tokens=FakeTokenProvider())


def _signup(username: str, roles: list[Role] | None = None) -> SignUpRequest:
    return SignUpRequest(
        username=username,
        email=f"{username}@example.com",
        password="secret1",
        roles=roles,
    )


@pytest.mark.asyncio
async def test_sign_up_defaults_to_user_role(service: AuthService):
    user = await service.sign_up(_signup("alice"))

    assert user.id is not None
    assert user.roles == {Role.USER}
    assert user.password_hash == "hashed::secret1"


@pytest.mark.asyncio
async def test_sign_up_duplicate_username(service: AuthService):
    await service.sign_up(_signup("alice"))

    with pytest.raises(DuplicateEntityError) as exc:
        await service.sign_up(_signup("alice"))
    assert exc.value.field == "username"


@pytest.mark.asyncio
async def test_sign_up_duplicate_email(service: AuthService):
    await service.sign_up(_signup("alice"))
    request = SignUpRequest(username="alice2", email="alice@example.com", password="secret1")

    with pytest.raises(DuplicateEntityError) as exc:
        await service.sign_up(request)
    assert exc.value.field == "email"


@pytest.mark.asyncio
async def test_first_account_may_claim_admin(service: AuthService):
    user = await service.sign_up(_signup("root", roles=[Role.ADMIN]))

    assert user.is_admin


@pytest.mark.asyncio
async def test_later_admin_sign_up_is_refused(service: AuthService, users: FakeUserRepository):
    await service.sign_up(_signup("root"))

    with pytest.raises(PermissionDeniedError):
        await service.sign_up(_signup("mallory", roles=[Role.ADMIN]))
    assert await users.count() == 1


@pytest.mark.asyncio
async def test_admin_sign_up_allowed_by_flag(users: FakeUserRepository):
    service = AuthService(
        users=users,
        hasher=FakePasswordHasher(),
        tokens=FakeTokenProvider(),
        allow_admin_signup=True,
    )
    await service.sign_up(_signup("root"))

    user = await service.sign_up(_signup("second", roles=[Role.ADMIN, Role.USER]))

    assert user.roles == {Role.ADMIN, Role.USER}


@pytest.mark.asyncio
async def test_sign_in_returns_token(service: AuthService):
    created = await service.sign_up(_signup("alice"))

    user, token = await service.sign_in("alice", "secret1")

    assert user.username == "alice"
    assert token == f"token::{created.id}"


@pytest.mark.asyncio
async def test_sign_in_wrong_password_and_unknown_user_fail_alike(service: AuthService):
    await service.sign_up(_signup("alice"))

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await service.sign_in("alice", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        await service.sign_in("ghost", "secret1")

    assert str(wrong_password.value) == str(unknown_user.value)


@pytest.mark.asyncio
async def test_resolve_actor(service: AuthService):
    user = await service.sign_up(_signup("alice"))

    actor = await service.resolve_actor(f"token::{user.id}")

    assert actor is not None
    assert actor.id == user.id
    assert actor.roles == frozenset({Role.USER})
    assert await service.resolve_actor("garbage") is None
    assert await service.resolve_actor("token::alice") is None
    assert await service.resolve_actor("token::999") is None


@pytest.mark.asyncio
async def test_ensure_admin_is_idempotent(service: AuthService, users: FakeUserRepository):
    created = await service.ensure_admin("admin", "admin@example.com", "changeit")

    assert created is not None
    assert created.roles == {Role.ADMIN, Role.USER}
    assert await service.ensure_admin("admin", "admin@example.com", "changeit") is None
    assert await users.count() == 1


@pytest.mark.asyncio
async def test_token_follows_account_through_rename(
    service: AuthService, users: FakeUserRepository
):
    alice = await service.sign_up(_signup("alice"))
    _, token = await service.sign_in("alice", "secret1")

    alice.update(username="alice2")
    await users.update(alice)
    newcomer = await service.sign_up(
        SignUpRequest(username="alice", email="other@example.com", password="secret1")
    )

    actor = await service.resolve_actor(token)

    assert actor is not None
    assert actor.id == alice.id
    assert actor.id != newcomer.id
    assert actor.username == "alice2"
