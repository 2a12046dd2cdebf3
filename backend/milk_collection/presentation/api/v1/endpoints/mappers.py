"""Domain entity → response schema mapping shared by the endpoints."""

from milk_collection.application.schemas import (
    MilkRecordResponse,
    OwnerSummary,
    UserResponse,
)
from milk_collection.domain.entities import MilkRecord, User


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        phone_number=user.phone_number,
        roles=sorted(user.roles),
        created_at=user.created_at,
    )


def record_to_response(record: MilkRecord, owner: User | None = None) -> MilkRecordResponse:
    response = MilkRecordResponse.model_validate(record, from_attributes=True)
    if owner is not None:
        response.owner = OwnerSummary(id=owner.id, username=owner.username, email=owner.email)
    return response
