from .user_repository import UserRepository
from .milk_record_repository import MilkRecordRepository
from .password_hasher import PasswordHasher
from .token_provider import TokenProvider

__all__ = [
    "UserRepository",
    "MilkRecordRepository",
    "PasswordHasher",
    "TokenProvider",
]
