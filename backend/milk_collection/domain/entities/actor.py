"""The authenticated identity on whose behalf an operation runs."""

from dataclasses import dataclass, field

from .user import Role, User


@dataclass(frozen=True)
class Actor:
    """Resolved caller identity, passed explicitly into every service call."""

    id: int
    username: str
    roles: frozenset[Role] = field(default_factory=lambda: frozenset({Role.USER}))

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        if user.id is None:
            raise ValueError("Cannot build an Actor from an unsaved user")
        return cls(id=user.id, username=user.username, roles=frozenset(user.roles))
