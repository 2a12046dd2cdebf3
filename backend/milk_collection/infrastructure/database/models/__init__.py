from .user import UserModel, UserRoleModel
from .milk_record import MilkRecordModel

__all__ = [
    "UserModel",
    "UserRoleModel",
    "MilkRecordModel",
]
