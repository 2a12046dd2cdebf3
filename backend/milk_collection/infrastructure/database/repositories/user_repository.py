"""Concrete repository implementation for User backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from milk_collection.application.interfaces import UserRepository
from milk_collection.domain.entities import Role, User
from milk_collection.domain.exceptions import DuplicateEntityError
from milk_collection.infrastructure.database.models import UserModel, UserRoleModel


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _violated_field(error: IntegrityError) -> str | None:
    """Name the unique column a failed insert or update collided on, if any."""
    message = str(error.orig).lower()
    for field in ("username", "email"):
        if field in message:
            return field
    return None


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _flush(self, user: User) -> None:
        # A concurrent writer can claim the name between the service check and this write.
        try:
            await self._session.flush()
        except IntegrityError as e:
            field = _violated_field(e)
            if field is None:
                raise
            raise DuplicateEntityError("User", field, getattr(user, field)) from e

    def _to_entity(self, model: UserModel) -> User:
        """Map ORM model → domain entity."""
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            phone_number=model.phone_number,
            roles={Role(r.role) for r in model.roles},
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _to_model(self, entity: User) -> UserModel:
        """Map domain entity → ORM model (for creation)."""
        return UserModel(
            username=entity.username,
            email=entity.email,
            password_hash=entity.password_hash,
            phone_number=entity.phone_number,
            roles=[UserRoleModel(role=r.value) for r in sorted(entity.roles)],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return self._to_entity(result) if result else None

    async def get_by_username(self, username: str) -> User | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[User]:
        result = await self._session.execute(select(UserModel).order_by(UserModel.id))
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(UserModel))
        return result.scalar_one()

    async def create(self, user: User) -> User:
        model = self._to_model(user)
        self._session.add(model)
        await self._flush(user)
        return self._to_entity(model)

    async def update(self, user: User) -> User:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise ValueError(f"User {user.id} not found in database")
        model.username = user.username
        model.email = user.email
        model.password_hash = user.password_hash
        model.phone_number = user.phone_number
        model.updated_at = user.updated_at
        await self._flush(user)
        return self._to_entity(model)

    async def delete(self, user_id: int) -> bool:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
