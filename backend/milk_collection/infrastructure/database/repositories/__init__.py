from .user_repository import SQLAlchemyUserRepository
from .milk_record_repository import SQLAlchemyMilkRecordRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyMilkRecordRepository",
]
