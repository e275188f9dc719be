"""Protocol definitions for observer patterns and interfaces."""

from .events import BoardEvent, PaintState
from .observers import BoardObserver

__all__ = [
    # Events
    "BoardEvent",
    # Observers
    "BoardObserver",
    "PaintState",
]
