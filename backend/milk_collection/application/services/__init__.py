from .auth_service import AuthService
from .milk_record_service import MilkRecordService
from .user_service import UserService

__all__ = [
    "AuthService",
    "MilkRecordService",
    "UserService",
]
