"""Authentication interface."""

from typing import Protocol

from voicejournal.core.profile import UserProfile


class AuthenticationError(Exception):
    """Raised when credentials are rejected."""

    pass


class Authenticator(Protocol):
    """Interface for signing users in and up. Returns a fresh profile."""

    async def sign_in(self, email: str, password: str) -> UserProfile:
        """Authenticate an existing user."""
        ...

    async def sign_up(self, email: str, password: str) -> UserProfile:
        """Register a new user."""
        ...
