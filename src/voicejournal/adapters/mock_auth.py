"""Mock authentication adapter."""

import logging

from voicejournal.core.profile import UserProfile

logger = logging.getLogger(__name__)


class MockAuthenticator:
    """
    Accepts any credentials.

    Implements Authenticator protocol. The password is never inspected or
    kept; every call yields a brand-new default profile.
    """

    async def sign_in(self, email: str, password: str) -> UserProfile:
        """Authenticate an existing user."""
        logger.debug(f"Mock sign-in for {email}")
        return UserProfile.new(email)

    async def sign_up(self, email: str, password: str) -> UserProfile:
        """Register a new user."""
        logger.debug(f"Mock sign-up for {email}")
        return UserProfile.new(email)
