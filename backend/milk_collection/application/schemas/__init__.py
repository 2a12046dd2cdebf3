from .envelope import ApiResponse, CountResponse, MessageResponse
from .milk_record import (
    MilkRecordCreate,
    MilkRecordUpdate,
    MilkRecordResponse,
    MilkSummaryResponse,
    MilkTypeTotals,
    OwnerSummary,
)
from .user import PasswordChangeRequest, UserResponse, UserUpdate
from .auth import SignInRequest, SignUpRequest, TokenResponse

__all__ = [
    "ApiResponse",
    "CountResponse",
    "MessageResponse",
    "MilkRecordCreate",
    "MilkRecordUpdate",
    "MilkRecordResponse",
    "MilkSummaryResponse",
    "MilkTypeTotals",
    "OwnerSummary",
    "PasswordChangeRequest",
    "UserResponse",
    "UserUpdate",
    "SignInRequest",
    "SignUpRequest",
    "TokenResponse",
]
