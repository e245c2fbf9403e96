"""Session token storage."""

from dataclasses import dataclass
from typing import Protocol


class TokenStore(Protocol):
    """Interface for the stored auth session."""

    def get_token(self) -> str | None:
        """Return the bearer token, if signed in."""

    def clear(self) -> None:
        """Forget the stored session."""


@dataclass
class InMemoryTokenStore(TokenStore):
    """Token store holding the session for the process lifetime."""

    token: str | None = None

    def get_token(self) -> str | None:
        return self.token

    def set_token(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None
