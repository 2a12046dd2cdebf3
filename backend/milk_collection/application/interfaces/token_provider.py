"""Port for issuing and reading bearer access tokens."""

from abc import ABC, abstractmethod


class TokenProvider(ABC):
    """Issues signed access tokens for an account id and reads them back."""

    @abstractmethod
    def issue(self, subject: str) -> str:
        """Return a signed token whose subject is the given account id."""
        ...

    @abstractmethod
    def read_subject(self, token: str) -> str | None:
        """Return the token's subject, or None if it is invalid or expired."""
        ...
