"""Concrete repository implementation for MilkRecord backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from milk_collection.application.interfaces import MilkRecordRepository
from milk_collection.domain.entities import MilkRecord
from milk_collection.infrastructure.database.models import MilkRecordModel


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class SQLAlchemyMilkRecordRepository(MilkRecordRepository):
    """Implements the MilkRecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: MilkRecordModel) -> MilkRecord:
        """Map ORM model → domain entity."""
        return MilkRecord(
            id=model.id,
            owner_user_id=model.owner_user_id,
            milk_type=model.milk_type,
            quantity=model.quantity,
            rate=model.rate,
            entry_date=_aware(model.entry_date),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _to_model(self, entity: MilkRecord) -> MilkRecordModel:
        """Map domain entity → ORM model (for creation)."""
        return MilkRecordModel(
            owner_user_id=entity.owner_user_id,
            milk_type=entity.milk_type,
            quantity=entity.quantity,
            rate=entity.rate,
            amount=entity.amount,
            entry_date=entity.entry_date,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def _select(self, *criteria) -> list[MilkRecord]:
        stmt = select(MilkRecordModel).where(*criteria).order_by(MilkRecordModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, record_id: int) -> MilkRecord | None:
        result = await self._session.get(MilkRecordModel, record_id)
        return self._to_entity(result) if result else None

    async def get_all(self) -> list[MilkRecord]:
        return await self._select()

    async def get_by_owner(self, owner_user_id: int) -> list[MilkRecord]:
        return await self._select(MilkRecordModel.owner_user_id == owner_user_id)

    async def get_by_type(self, milk_type: str) -> list[MilkRecord]:
        return await self._select(MilkRecordModel.milk_type == milk_type)

    async def get_by_entry_date_between(
        self, start: datetime, end: datetime
    ) -> list[MilkRecord]:
        return await self._select(MilkRecordModel.entry_date.between(start, end))

    async def count_by_owner(self, owner_user_id: int) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(MilkRecordModel)
            .where(MilkRecordModel.owner_user_id == owner_user_id)
        )
        return result.scalar_one()

    async def create(self, record: MilkRecord) -> MilkRecord:
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, record: MilkRecord) -> MilkRecord:
        model = await self._session.get(MilkRecordModel, record.id)
        if model is None:
            raise ValueError(f"MilkRecord {record.id} not found in database")
        model.milk_type = record.milk_type
        model.quantity = record.quantity
        model.rate = record.rate
        model.amount = record.amount
        model.entry_date = record.entry_date
        model.updated_at = record.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, record_id: int) -> bool:
        model = await self._session.get(MilkRecordModel, record_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_by_owner(self, owner_user_id: int) -> int:
        result = await self._session.execute(
            delete(MilkRecordModel).where(MilkRecordModel.owner_user_id == owner_user_id)
        )
        await self._session.flush()
        return result.rowcount or 0
