"""Observer protocol definitions for domain-specific events."""

from typing import Any, Protocol, runtime_checkable

from .events import BoardEvent


@runtime_checkable
class BoardObserver(Protocol):
    """
    Observer that receives board events.

    Lets the UI react to matrix and device changes without the core
    knowing anything about widgets.
    """

    def on_board_event(self, event: BoardEvent, device_number: int | None, **data: Any) -> None:
        """
        Handle a board event.

        Args:
            event: The type of board event
            device_number: Logical device the event concerns, or None for
                events about the device list as a whole
            **data: Event-specific data (e.g. ``cell=`` for CELL_CHANGED,
                ``temperatures=`` for TEMPERATURES_UPDATED)
        """
        ...
