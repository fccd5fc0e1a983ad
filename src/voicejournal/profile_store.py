"""User profile store.

Holds at most one UserProfile and keeps it in sync with a KeyValueStore.

State machine::

    UNLOADED -> LOADING -> {NO_PROFILE, HAS_PROFILE}
    NO_PROFILE  -> HAS_PROFILE   (sign_in / sign_up)
    HAS_PROFILE -> HAS_PROFILE   (update_user, sign_in / sign_up)
    HAS_PROFILE -> NO_PROFILE    (sign_out)
"""

import asyncio
import logging
from enum import Enum
from typing import Callable

from .core.profile import UserProfile, find_goal
from .core.schema import SchemaError, decode_profile, encode_profile
from .ports.authenticator import Authenticator
from .ports.key_value import KeyValueStore, StorageError, StorageUnavailableError
from .subscriptions import Subscribers

logger = logging.getLogger(__name__)

PROFILE_KEY = "user"


class ProfileState(Enum):
    """Profile store state."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    NO_PROFILE = "no_profile"
    HAS_PROFILE = "has_profile"


class ProfileStore:
    """
    Single-user profile backed by a KeyValueStore.

    Authentication is delegated to an Authenticator; passwords never reach
    storage.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        authenticator: Authenticator,
        key: str = PROFILE_KEY,
    ):
        self.storage = storage
        self.authenticator = authenticator
        self.key = key
        self._user: UserProfile | None = None
        self._state = ProfileState.UNLOADED
        self._ready = asyncio.Event()
        self._write_lock = asyncio.Lock()
        self._subscribers: Subscribers[UserProfile | None] = Subscribers()

    @property
    def state(self) -> ProfileState:
        return self._state

    @property
    def user(self) -> UserProfile | None:
        return self._user

    @property
    def is_loading(self) -> bool:
        return self._state is ProfileState.LOADING

    @property
    def is_ready(self) -> bool:
        return self._state in (ProfileState.NO_PROFILE, ProfileState.HAS_PROFILE)

    @property
    def needs_onboarding(self) -> bool:
        return self._user is not None and not self._user.has_completed_onboarding

    async def wait_ready(self) -> None:
        """Block until the first load has finished."""
        await self._ready.wait()

    def subscribe(self, callback: Callable[[UserProfile | None], None]) -> Callable[[], None]:
        """Call `callback` with the new profile (or None) after every change."""
        return self._subscribers.add(callback)

    def _set_user(self, user: UserProfile | None) -> None:
        self._user = user
        self._state = ProfileState.HAS_PROFILE if user else ProfileState.NO_PROFILE

    def _require_ready(self) -> None:
        if not self.is_ready:
            raise RuntimeError("Profile store is not loaded. Call load() first.")

    async def load(self) -> None:
        """Read the persisted profile. Missing or unreadable data means no profile."""
        async with self._write_lock:
            self._state = ProfileState.LOADING
            try:
                raw = await self.storage.get(self.key)
            except StorageUnavailableError:
                self._state = ProfileState.UNLOADED
                raise
            except StorageError as e:
                logger.warning(f"Error loading user: {e}")
                raw = None

            user = None
            if raw:
                try:
                    user = decode_profile(raw)
                except SchemaError as e:
                    logger.warning(f"Discarding unreadable profile document: {e}")

            self._set_user(user)
            self._ready.set()

        self._subscribers.notify(self._user)

    async def _save(self, user: UserProfile) -> bool:
        try:
            await self.storage.set(self.key, encode_profile(user))
        except StorageUnavailableError:
            raise
        except StorageError as e:
            logger.error(f"Error saving user: {e}")
            return False
        self._set_user(user)
        return True

    async def _replace(self, user: UserProfile) -> UserProfile | None:
        async with self._write_lock:
            self._require_ready()
            saved = await self._save(user)
        if not saved:
            return None
        self._subscribers.notify(self._user)
        return self._user

    async def sign_in(self, email: str, password: str) -> UserProfile | None:
        """
        Sign in and make the returned profile the resident one.

        Returns None if the profile could not be persisted.
        AuthenticationError from the authenticator propagates.
        """
        self._require_ready()
        user = await self.authenticator.sign_in(email, password)
        return await self._replace(user)

    async def sign_up(self, email: str, password: str) -> UserProfile | None:
        """Register and make the new profile the resident one."""
        self._require_ready()
        user = await self.authenticator.sign_up(email, password)
        return await self._replace(user)

    async def sign_out(self) -> bool:
        """Forget the resident profile. Returns False if the delete failed."""
        async with self._write_lock:
            self._require_ready()
            try:
                await self.storage.remove(self.key)
            except StorageUnavailableError:
                raise
            except StorageError as e:
                logger.error(f"Error removing user: {e}")
                return False
            self._set_user(None)
        self._subscribers.notify(None)
        return True

    async def update_user(self, **updates) -> UserProfile | None:
        """
        Merge fields into the resident profile and persist.

        No-op returning None when no profile is loaded. Unknown field
        names raise ValueError.
        """
        async with self._write_lock:
            if self._user is None:
                return None
            updated = self._user.merged(updates)
            saved = await self._save(updated)
        if not saved:
            return None
        self._subscribers.notify(self._user)
        return self._user

    async def complete_onboarding(self, goal_ids: list[str]) -> UserProfile | None:
        """Record the chosen onboarding goals and mark onboarding done."""
        unknown = [g for g in goal_ids if find_goal(g) is None]
        if unknown:
            raise ValueError(f"Unknown onboarding goals: {', '.join(unknown)}")
        # Keep selection order, drop repeats
        goals = list(dict.fromkeys(goal_ids))
        return await self.update_user(has_completed_onboarding=True, onboarding_goals=goals)
