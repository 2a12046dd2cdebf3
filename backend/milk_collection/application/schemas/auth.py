"""Pydantic DTOs for sign-in and sign-up."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from milk_collection.domain.entities import Role
from milk_collection.application.schemas.user import EMAIL_MAX_LENGTH


class SignInRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignUpRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=20, examples=["alice"])
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=40)
    phone_number: str | None = Field(None, max_length=20)
    roles: list[Role] | None = None

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str) -> str:
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return value


class TokenResponse(BaseModel):
    """Issued bearer token plus the signed-in account's identity."""

    token: str
    type: str = "Bearer"
    id: int
    username: str
    email: str
    roles: list[Role]
