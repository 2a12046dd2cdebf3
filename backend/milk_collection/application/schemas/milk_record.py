"""Pydantic DTOs (Data Transfer Objects) for the MilkRecord feature."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class MilkRecordCreate(BaseModel):
    """Schema for creating a milk record on behalf of a user.

    ``amount`` is accepted for compatibility but always recomputed as
    ``rate * quantity``.
    """

    milk_type: str = Field(..., min_length=1, max_length=50, examples=["cow"])
    quantity: int = Field(..., gt=0, examples=[10])
    rate: Decimal = Field(..., gt=0, max_digits=12, decimal_places=4, examples=["2.5"])
    amount: Decimal | None = Field(None, gt=0)
    entry_date: datetime | None = None
    user_id: int = Field(..., description="Owner of the new record")


class MilkRecordUpdate(BaseModel):
    """Schema for replacing the measured fields of a record.

    ``quantity`` and ``rate`` are required to recompute the amount; they are
    typed optional so a missing value is reported as a field error by the
    service rather than failing deep inside arithmetic. When ``entry_date``
    is omitted the stored entry date is kept. The owner never changes.
    """

    milk_type: str = Field(..., min_length=1, max_length=50)
    quantity: int | None = Field(None, gt=0)
    rate: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=4)
    amount: Decimal | None = None
    entry_date: datetime | None = None


class OwnerSummary(BaseModel):
    id: int
    username: str
    email: str


class MilkRecordResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    owner_user_id: int
    milk_type: str
    quantity: int
    rate: Decimal
    amount: Decimal
    entry_date: datetime
    created_at: datetime
    updated_at: datetime
    owner: OwnerSummary | None = None

    model_config = {"from_attributes": True}


class MilkTypeTotals(BaseModel):
    count: int
    quantity: int
    amount: Decimal


class MilkSummaryResponse(BaseModel):
    """Aggregates over the caller's visible records."""

    total_entries: int
    total_quantity: int
    total_amount: Decimal
    average_rate: Decimal
    by_type: dict[str, MilkTypeTotals]

    model_config = {"from_attributes": True}
