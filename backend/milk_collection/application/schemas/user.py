"""Pydantic DTOs for user accounts."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from milk_collection.domain.entities import Role

EMAIL_MAX_LENGTH = 50


class UserUpdate(BaseModel):
    """Partial profile update. Only provided fields are applied."""

    username: str | None = Field(None, min_length=3, max_length=20)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=40)
    phone_number: str | None = Field(None, max_length=20)

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str | None) -> str | None:
        if value is not None and len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return value


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=40)
    confirm_password: str = Field(..., min_length=6, max_length=40)


class UserResponse(BaseModel):
    """Profile as returned to clients, without the password hash."""

    id: int
    username: str
    email: str
    phone_number: str | None
    roles: list[Role]
    created_at: datetime

    model_config = {"from_attributes": True}
