"""Abstract repository interface (port) for User persistence."""

from abc import ABC, abstractmethod

from milk_collection.domain.entities import User


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a single account by id."""
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[User]:
        """Retrieve every account in insertion order."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new account and return it with its generated id."""
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update an existing account."""
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete an account. Returns True if deleted, False if not found."""
        ...
