"""Response wrappers shared by several endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used by the milk endpoints: ``{status, message, data}``."""

    status: str = "success"
    message: str
    data: T | None = None


class MessageResponse(BaseModel):
    """Plain acknowledgement with a human-readable message."""

    message: str


class CountResponse(BaseModel):
    count: int
