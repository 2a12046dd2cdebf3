"""Application service (use case) for milk record operations.

Every read and write that targets a single record goes through
``get_record``, so a record the actor may not see behaves exactly like a
record that does not exist. Role gates for admin-only operations live in
the API layer; this service trusts its caller on those.
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from decimal import Decimal

from milk_collection.application.interfaces import MilkRecordRepository, UserRepository
from milk_collection.application.schemas.milk_record import (
    MilkRecordCreate,
    MilkRecordUpdate,
    MilkSummaryResponse,
    MilkTypeTotals,
)
from milk_collection.domain import access_policy
from milk_collection.domain.entities import Actor, MilkRecord, User
from milk_collection.domain.exceptions import EntityNotFoundError, InvalidFieldError

logger = logging.getLogger(__name__)

_RATE_PRECISION = Decimal("0.0001")


def _as_utc(value: datetime) -> datetime:
    """Normalise to UTC; naive timestamps are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _validate_measurements(milk_type: str | None, quantity: int | None, rate: Decimal | None) -> None:
    if milk_type is None or not milk_type.strip():
        raise InvalidFieldError("milk_type", "Milk type is required")
    if quantity is None:
        raise InvalidFieldError("quantity", "Quantity is required")
    if quantity <= 0:
        raise InvalidFieldError("quantity", "Quantity must be positive")
    if rate is None:
        raise InvalidFieldError("rate", "Rate is required")
    if rate <= 0:
        raise InvalidFieldError("rate", "Rate must be positive")


class MilkRecordService:
    """Orchestrates milk record CRUD and visibility. Depends on repository ports (DI)."""

    def __init__(self, records: MilkRecordRepository, users: UserRepository):
        self._records = records
        self._users = users

    async def create_record(self, data: MilkRecordCreate, actor: Actor) -> MilkRecord:
        _validate_measurements(data.milk_type, data.quantity, data.rate)
        owner = await self._users.get_by_id(data.user_id)
        if owner is None:
            raise EntityNotFoundError("User", data.user_id)

        now = datetime.now(timezone.utc)
        record = MilkRecord(
            owner_user_id=data.user_id,
            milk_type=data.milk_type.strip(),
            quantity=data.quantity,
            rate=data.rate,
            entry_date=_as_utc(data.entry_date) if data.entry_date else now,
            created_at=now,
            updated_at=now,
        )
        if data.amount is not None and data.amount != record.amount:
            logger.debug(
                "Ignoring client amount %s for %s; computed %s",
                data.amount, data.milk_type, record.amount,
            )
        created = await self._records.create(record)
        logger.info(
            "Milk record %s created by %s for user %s (amount=%s)",
            created.id, actor.username, owner.username, created.amount,
        )
        return created

    async def list_for_actor(self, actor: Actor) -> list[MilkRecord]:
        """All records for administrators, otherwise only the actor's own."""
        if access_policy.is_admin(actor):
            return await self._records.get_all()
        return await self._records.get_by_owner(actor.id)

    async def list_by_owner(self, owner_user_id: int) -> list[MilkRecord]:
        return await self._records.get_by_owner(owner_user_id)

    async def get_record(self, record_id: int, actor: Actor) -> MilkRecord:
        record = await self._records.get_by_id(record_id)
        if record is None or not access_policy.can_view(actor, record):
            raise EntityNotFoundError("MilkRecord", record_id)
        return record

    async def list_by_type(self, milk_type: str, actor: Actor) -> list[MilkRecord]:
        records = await self._records.get_by_type(milk_type)
        return access_policy.visible_to(actor, records)

    async def list_by_entry_date_between(
        self, start: datetime, end: datetime, actor: Actor
    ) -> list[MilkRecord]:
        start, end = _as_utc(start), _as_utc(end)
        if start > end:
            raise InvalidFieldError("start", "Start date must not be after end date")
        records = await self._records.get_by_entry_date_between(start, end)
        return access_policy.visible_to(actor, records)

    async def update_record(
        self, record_id: int, data: MilkRecordUpdate, actor: Actor
    ) -> MilkRecord:
        record = await self.get_record(record_id, actor)
        _validate_measurements(data.milk_type, data.quantity, data.rate)

        record.revise(
            milk_type=data.milk_type.strip(),
            quantity=data.quantity,
            rate=data.rate,
            entry_date=_as_utc(data.entry_date) if data.entry_date else None,
        )
        updated = await self._records.update(record)
        logger.info(
            "Milk record %s updated by %s (amount=%s)", record_id, actor.username, updated.amount
        )
        return updated

    async def delete_record(self, record_id: int, actor: Actor) -> bool:
        await self.get_record(record_id, actor)
        deleted = await self._records.delete(record_id)
        logger.info("Milk record %s deleted by %s", record_id, actor.username)
        return deleted

    async def summarize(
        self,
        actor: Actor,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> MilkSummaryResponse:
        """Totals over the actor's visible records, optionally bounded by entry date."""
        if start is not None or end is not None:
            records = await self.list_by_entry_date_between(
                start or datetime.min.replace(tzinfo=timezone.utc),
                end or datetime.max.replace(tzinfo=timezone.utc),
                actor,
            )
        else:
            records = await self.list_for_actor(actor)

        total_quantity = sum(r.quantity for r in records)
        total_amount = sum((r.amount for r in records), Decimal("0"))
        average_rate = (
            (total_amount / total_quantity).quantize(_RATE_PRECISION)
            if total_quantity
            else Decimal("0")
        )

        by_type: dict[str, dict] = defaultdict(
            lambda: {"count": 0, "quantity": 0, "amount": Decimal("0")}
        )
        for r in records:
            bucket = by_type[r.milk_type]
            bucket["count"] += 1
            bucket["quantity"] += r.quantity
            bucket["amount"] += r.amount

        return MilkSummaryResponse(
            total_entries=len(records),
            total_quantity=total_quantity,
            total_amount=total_amount,
            average_rate=average_rate,
            by_type={k: MilkTypeTotals(**v) for k, v in by_type.items()},
        )

    async def owners_of(self, records: list[MilkRecord]) -> dict[int, User]:
        """Look up the owning accounts of the given records, keyed by user id."""
        owners: dict[int, User] = {}
        for owner_id in {r.owner_user_id for r in records}:
            user = await self._users.get_by_id(owner_id)
            if user is not None:
                owners[owner_id] = user
        return owners
