"""Application service (use case) for user account operations."""

import logging

from milk_collection.application.interfaces import (
    MilkRecordRepository,
    PasswordHasher,
    UserRepository,
)
from milk_collection.application.schemas.user import UserUpdate
from milk_collection.domain.entities import User
from milk_collection.domain.exceptions import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

DELETE_POLICY_BLOCK = "block"
DELETE_POLICY_CASCADE = "cascade"


class UserService:
    """Orchestrates account reads, profile updates, password changes and deletion."""

    def __init__(
        self,
        users: UserRepository,
        records: MilkRecordRepository,
        hasher: PasswordHasher,
        delete_policy: str = DELETE_POLICY_BLOCK,
    ):
        self._users = users
        self._records = records
        self._hasher = hasher
        self._delete_policy = delete_policy

    async def list_users(self) -> list[User]:
        return await self._users.get_all()

    async def get_user(self, user_id: int) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def get_user_by_username(self, username: str) -> User:
        user = await self._users.get_by_username(username)
        if user is None:
            raise EntityNotFoundError("User", username)
        return user

    async def exists_by_username(self, username: str) -> bool:
        return await self._users.get_by_username(username) is not None

    async def exists_by_email(self, email: str) -> bool:
        return await self._users.get_by_email(email) is not None

    async def count(self) -> int:
        return await self._users.count()

    async def ensure_available(
        self,
        username: str | None = None,
        email: str | None = None,
        exclude_user_id: int | None = None,
    ) -> None:
        """Raise DuplicateEntityError if the username or email belongs to another account."""
        if username is not None:
            holder = await self._users.get_by_username(username)
            if holder is not None and holder.id != exclude_user_id:
                raise DuplicateEntityError("User", "username", username)
        if email is not None:
            holder = await self._users.get_by_email(email)
            if holder is not None and holder.id != exclude_user_id:
                raise DuplicateEntityError("User", "email", email)

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        """Apply the provided profile fields; a non-empty password is stored hashed."""
        user = await self.get_user(user_id)
        await self.ensure_available(
            username=data.username, email=data.email, exclude_user_id=user_id
        )

        password_hash = None
        if data.password:
            password_hash = self._hasher.hash(data.password)

        user.update(
            username=data.username,
            email=data.email,
            password_hash=password_hash,
            phone_number=data.phone_number,
        )
        updated = await self._users.update(user)
        logger.info(
            "User %s updated: fields=%s password_changed=%s",
            user_id,
            sorted(data.model_dump(exclude_none=True, exclude={"password"})),
            password_hash is not None,
        )
        return updated

    async def change_password(
        self, username: str, current_password: str, new_password: str
    ) -> None:
        user = await self.get_user_by_username(username)
        if not self._hasher.verify(current_password, user.password_hash):
            logger.warning("Password change for %s rejected: current password mismatch", username)
            raise InvalidCredentialsError("Current password is incorrect")

        user.update(password_hash=self._hasher.hash(new_password))
        await self._users.update(user)
        logger.info("Password changed for %s", username)

    async def delete_user(self, user_id: int) -> bool:
        await self.get_user(user_id)

        owned = await self._records.count_by_owner(user_id)
        if owned:
            if self._delete_policy == DELETE_POLICY_CASCADE:
                removed = await self._records.delete_by_owner(user_id)
                logger.info("Removed %d milk records owned by user %s", removed, user_id)
            else:
                raise EntityInUseError("User", user_id, f"owns {owned} milk record(s)")

        deleted = await self._users.delete(user_id)
        logger.info("User %s deleted", user_id)
        return deleted
