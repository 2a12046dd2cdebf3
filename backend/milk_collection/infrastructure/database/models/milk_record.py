"""SQLAlchemy ORM model for the MilkRecord entity."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from milk_collection.infrastructure.database.base import Base


class MilkRecordModel(Base):
    """ORM model — maps to the 'milk_records' table.

    The owner is a plain foreign key with no ORM relationship back to
    the user.
    """

    __tablename__ = "milk_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    milk_type: Mapped[str] = mapped_column(String(50), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    entry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_milk_records_owner", "owner_user_id"),
        Index("ix_milk_records_type", "milk_type"),
        Index("ix_milk_records_entry_date", "entry_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<MilkRecordModel(id={self.id}, owner={self.owner_user_id}, "
            f"type='{self.milk_type}', amount={self.amount})>"
        )
