"""Domain entity for a single milk intake entry owned by one user."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


def compute_amount(rate: Decimal, quantity: int) -> Decimal:
    """Amount payable for an entry: rate times quantity, no rounding."""
    return rate * quantity


@dataclass
class MilkRecord:
    """Core domain entity for a milk collection entry.

    ``owner_user_id`` is fixed at creation. ``amount`` is always derived
    from ``rate`` and ``quantity``; callers never set it directly.
    """

    owner_user_id: int
    milk_type: str
    quantity: int
    rate: Decimal
    amount: Decimal = Decimal("0")
    entry_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.amount = compute_amount(self.rate, self.quantity)

    def revise(
        self,
        milk_type: str,
        quantity: int,
        rate: Decimal,
        entry_date: datetime | None = None,
    ) -> None:
        """Replace the measured fields, recompute amount and refresh updated_at."""
        self.milk_type = milk_type
        self.quantity = quantity
        self.rate = rate
        self.amount = compute_amount(rate, quantity)
        if entry_date is not None:
            self.entry_date = entry_date
        self.updated_at = datetime.now(timezone.utc)
