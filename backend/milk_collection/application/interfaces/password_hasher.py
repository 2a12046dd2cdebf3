"""Port for one-way password hashing."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Hashes raw passwords and checks them against stored hashes."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...
