"""Unit tests for the UserService."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from milk_collection.application.schemas import UserUpdate
from milk_collection.application.services import UserService
from milk_collection.domain.entities import MilkRecord, User
from milk_collection.domain.exceptions import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    InvalidCredentialsError,
)
from tests.unit.fakes import FakeMilkRecordRepository, FakePasswordHasher, FakeUserRepository


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def records() -> FakeMilkRecordRepository:
    return FakeMilkRecordRepository()


@pytest.fixture
def service(users: FakeUserRepository, records: FakeMilkRecordRepository) -> UserService:
    return UserService(users=users, records=records, hasher=FakePasswordHasher())


async def _user(users: FakeUserRepository, username: str, password: str = "secret1") -> User:
    return await users.create(
        User(
            username=username,
            email=f"{username}@example.com",
            password_hash=f"hashed::{password}",
        )
    )


@pytest.mark.asyncio
async def test_get_user_not_found(service: UserService):
    with pytest.raises(EntityNotFoundError):
        await service.get_user(42)


@pytest.mark.asyncio
async def test_exists_and_count(service: UserService, users: FakeUserRepository):
    await _user(users, "alice")

    assert await service.exists_by_username("alice")
    assert not await service.exists_by_username("bob")
    assert await service.exists_by_email("alice@example.com")
    assert await service.count() == 1


@pytest.mark.asyncio
async def test_update_applies_only_provided_fields(
    service: UserService, users: FakeUserRepository
):
    alice = await _user(users, "alice")
    alice.updated_at = datetime.now(timezone.utc) - timedelta(hours=1)
    stale = alice.updated_at

    updated = await service.update_user(alice.id, UserUpdate(phone_number="555-0100"))

    assert updated.phone_number == "555-0100"
    assert updated.username == "alice"
    assert updated.email == "alice@example.com"
    assert updated.password_hash == "hashed::secret1"
    assert updated.updated_at > stale


@pytest.mark.asyncio
async def test_update_hashes_new_password(service: UserService, users: FakeUserRepository):
    alice = await _user(users, "alice")

    updated = await service.update_user(alice.id, UserUpdate(password="brand-new"))

    assert updated.password_hash == "hashed::brand-new"


@pytest.mark.asyncio
async def test_update_to_taken_username_leaves_account_untouched(
    service: UserService, users: FakeUserRepository
):
    await _user(users, "alice")
    bob = await _user(users, "bob")

    with pytest.raises(DuplicateEntityError) as exc:
        await service.update_user(bob.id, UserUpdate(username="alice", phone_number="1"))

    assert exc.value.field == "username"
    stored = await service.get_user(bob.id)
    assert stored.username == "bob"
    assert stored.phone_number is None


@pytest.mark.asyncio
async def test_update_to_taken_email(service: UserService, users: FakeUserRepository):
    await _user(users, "alice")
    bob = await _user(users, "bob")

    with pytest.raises(DuplicateEntityError) as exc:
        await service.update_user(bob.id, UserUpdate(email="alice@example.com"))

    assert exc.value.field == "email"


@pytest.mark.asyncio
async def test_update_keeping_own_username_is_allowed(
    service: UserService, users: FakeUserRepository
):
    alice = await _user(users, "alice")

    updated = await service.update_user(
        alice.id, UserUpdate(username="alice", email="alice@example.com")
    )

    assert updated.username == "alice"


@pytest.mark.asyncio
async def test_change_password(service: UserService, users: FakeUserRepository):
    await _user(users, "alice", password="old-pass")

    await service.change_password("alice", "old-pass", "new-pass")

    assert (await service.get_user_by_username("alice")).password_hash == "hashed::new-pass"


@pytest.mark.asyncio
async def test_change_password_wrong_current(service: UserService, users: FakeUserRepository):
    await _user(users, "alice", password="old-pass")

    with pytest.raises(InvalidCredentialsError):
        await service.change_password("alice", "guess", "new-pass")

    assert (await service.get_user_by_username("alice")).password_hash == "hashed::old-pass"


@pytest.mark.asyncio
async def test_delete_user_without_records(service: UserService, users: FakeUserRepository):
    alice = await _user(users, "alice")

    assert await service.delete_user(alice.id) is True
    with pytest.raises(EntityNotFoundError):
        await service.get_user(alice.id)


@pytest.mark.asyncio
async def test_delete_user_not_found(service: UserService):
    with pytest.raises(EntityNotFoundError):
        await service.delete_user(7)


@pytest.mark.asyncio
async def test_delete_owner_is_blocked_by_default(
    service: UserService, users: FakeUserRepository, records: FakeMilkRecordRepository
):
    alice = await _user(users, "alice")
    await records.create(
        MilkRecord(owner_user_id=alice.id, milk_type="cow", quantity=1, rate=Decimal("1"))
    )

    with pytest.raises(EntityInUseError):
        await service.delete_user(alice.id)

    assert await service.get_user(alice.id) is not None
    assert await records.count_by_owner(alice.id) == 1


@pytest.mark.asyncio
async def test_delete_owner_cascades_when_configured(
    users: FakeUserRepository, records: FakeMilkRecordRepository
):
    service = UserService(
        users=users, records=records, hasher=FakePasswordHasher(), delete_policy="cascade"
    )
    alice = await _user(users, "alice")
    bob = await _user(users, "bob")
    for owner in (alice, alice, bob):
        await records.create(
            MilkRecord(owner_user_id=owner.id, milk_type="cow", quantity=1, rate=Decimal("1"))
        )

    assert await service.delete_user(alice.id) is True

    assert await records.count_by_owner(alice.id) == 0
    assert await records.count_by_owner(bob.id) == 1
