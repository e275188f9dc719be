"""Observer list shared by the session and its controllers.

BoardSession owns one ObserverManager and hands it to the paint
coordinator, layout codec, image projector and poller, so every board
event reaches the same observers (the TUI app, CLI listeners, tests).
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Ordered set of observers notified by callback name.

    An observer whose callback raises is logged and skipped; the rest are
    still notified. Callbacks run on a snapshot of the list, so they may
    register or unregister observers themselves.
    """

    def __init__(self, lock: Lock | None = None, observer_type_name: str = "observer"):
        self._observers: list[T] = []
        self._lock = lock or Lock()
        self._kind = observer_type_name

    def register(self, observer: T) -> None:
        """Add an observer; registering twice has no effect."""
        with self._lock:
            if observer in self._observers:
                return
            self._observers.append(observer)
        logger.info(f"Registered {self._kind} observer: {observer}")

    def unregister(self, observer: T) -> None:
        """Remove an observer, warning if it was never registered."""
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                logger.warning(f"Attempted to unregister unknown {self._kind} observer: {observer}")
                return
        logger.debug(f"Unregistered {self._kind} observer: {observer}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """Call ``callback_name(*args, **kwargs)`` on every observer."""
        with self._lock:
            snapshot = list(self._observers)

        for observer in snapshot:
            callback = getattr(observer, callback_name, None)
            if callback is None:
                logger.error(f"{self._kind} observer {observer} has no method '{callback_name}'")
                continue
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error notifying {self._kind} observer {observer} via {callback_name}: {e}",
                    exc_info=True,
                )

    def __contains__(self, observer: T) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)
