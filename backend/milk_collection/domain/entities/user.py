"""Domain entity for user accounts."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Role(str, Enum):
    """Capability levels an account can hold."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass
class User:
    """An account that owns milk records and may sign in.

    ``password_hash`` is the output of the configured password hasher;
    the raw password never reaches this object.
    """

    username: str
    email: str
    password_hash: str
    phone_number: str | None = None
    roles: set[Role] = field(default_factory=lambda: {Role.USER})
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    def update(
        self,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
        phone_number: str | None = None,
    ) -> None:
        """Apply the non-null fields and refresh the updated_at timestamp."""
        if username is not None:
            self.username = username
        if email is not None:
            self.email = email
        if password_hash is not None:
            self.password_hash = password_hash
        if phone_number is not None:
            self.phone_number = phone_number
        self.updated_at = datetime.now(timezone.utc)
