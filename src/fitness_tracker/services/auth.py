"""Credential checks for the single-user API."""

import hmac
from dataclasses import dataclass
from typing import Protocol


class Authenticator(Protocol):
    """Interface for issuing and checking bearer tokens."""

    def login(self, username: str, password: str) -> str | None:
        """Return a token for valid credentials, else None."""

    def verify(self, token: str) -> bool:
        """Return true when the token grants access."""


@dataclass
class StaticCredentialAuthenticator(Authenticator):
    """One configured credential pair exchanging for one static token."""

    username: str
    password: str
    token: str

    def login(self, username: str, password: str) -> str | None:
        """Return the static token when both credentials match."""
        username_ok = hmac.compare_digest(username.encode(), self.username.encode())
        password_ok = hmac.compare_digest(password.encode(), self.password.encode())
        if username_ok and password_ok:
            return self.token
        return None

    def verify(self, token: str) -> bool:
        """Return true for the configured token."""
        return hmac.compare_digest(token.encode(), self.token.encode())
