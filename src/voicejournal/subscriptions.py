"""Change notification shared by the stores."""

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscribers(Generic[T]):
    """Callbacks that receive a store's new state after every change."""

    def __init__(self):
        self._callbacks: list[Callable[[T], None]] = []

    def add(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback. Returns a function that unregisters it."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self, state: T) -> None:
        # A failing subscriber must not stop the others from seeing the change
        for callback in list(self._callbacks):
            try:
                callback(state)
            except Exception:
                logger.exception(f"Subscriber {callback!r} failed")

    def __len__(self) -> int:
        return len(self._callbacks)
