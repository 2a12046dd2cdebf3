"""Abstract repository interface (port) for MilkRecord persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from milk_collection.domain.entities import MilkRecord


class MilkRecordRepository(ABC):
    """Port for milk record persistence — implemented in the infrastructure layer.

    List methods return records in insertion order.
    """

    @abstractmethod
    async def get_by_id(self, record_id: int) -> MilkRecord | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[MilkRecord]:
        ...

    @abstractmethod
    async def get_by_owner(self, owner_user_id: int) -> list[MilkRecord]:
        ...

    @abstractmethod
    async def get_by_type(self, milk_type: str) -> list[MilkRecord]:
        ...

    @abstractmethod
    async def get_by_entry_date_between(
        self, start: datetime, end: datetime
    ) -> list[MilkRecord]:
        """Records whose entry_date lies within [start, end]."""
        ...

    @abstractmethod
    async def count_by_owner(self, owner_user_id: int) -> int:
        ...

    @abstractmethod
    async def create(self, record: MilkRecord) -> MilkRecord:
        """Persist a new record and return it with its generated id."""
        ...

    @abstractmethod
    async def update(self, record: MilkRecord) -> MilkRecord:
        ...

    @abstractmethod
    async def delete(self, record_id: int) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def delete_by_owner(self, owner_user_id: int) -> int:
        """Delete every record of one owner. Returns the number removed."""
        ...
