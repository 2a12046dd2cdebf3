from .user import Role, User
from .actor import Actor
from .milk_record import MilkRecord, compute_amount

__all__ = [
    "Role",
    "User",
    "Actor",
    "MilkRecord",
    "compute_amount",
]
