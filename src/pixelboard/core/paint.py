"""Paint interaction state machine: pointer gestures to LED writes."""

import asyncio
import logging
from collections.abc import Callable

from pixelboard.devices import DeviceCommands, DeviceRegistry
from pixelboard.model_manager import ObserverManager
from pixelboard.models import Color, LedCell, LedMatrix, Tool
from pixelboard.protocols import BoardEvent, BoardObserver, PaintState

logger = logging.getLogger(__name__)


class PaintCoordinator:
    """
    Turns pointer gestures into color writes.

    There is a single "pointer held" flag shared by every device window:
    pressing on any cell starts painting, and releasing the pointer
    anywhere stops painting everywhere.

    ::

        IDLE ──pointer_down──→ PAINTING ──pointer_enter──→ PAINTING (write)
         ↑                        │
         └────pointer_release─────┘

    Writes are optimistic: the matrix cell changes and observers hear
    about it before the update command reaches the board. A failed
    command is logged by DeviceCommands and the cell keeps its new color.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        commands: DeviceCommands,
        matrix_for: Callable[[int], LedMatrix],
        observers: ObserverManager[BoardObserver],
        default_color: Color | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            registry: Source of each device's active tool
            commands: Command router used to push writes
            matrix_for: Returns the visual matrix of a device
            observers: Observers notified of every cell change
            default_color: Color-picker value for devices that never picked one
        """
        self._registry = registry
        self._commands = commands
        self._matrix_for = matrix_for
        self._observers = observers
        self._default_color = default_color or Color(r=255, g=255, b=255)
        self._picker_colors: dict[int, Color] = {}
        self._state = PaintState.IDLE
        self._pending: set[asyncio.Task] = set()

    @property
    def state(self) -> PaintState:
        """Current state of the machine."""
        return self._state

    @property
    def is_painting(self) -> bool:
        """True while the pointer is held down."""
        return self._state is PaintState.PAINTING

    # =================================================================
    # Color picker
    # =================================================================

    def picker_color(self, device_number: int) -> Color:
        """Color-picker value of a device."""
        return self._picker_colors.get(device_number, self._default_color)

    def set_picker_color(self, device_number: int, color: Color) -> None:
        """Change a device's color-picker value."""
        self._picker_colors[device_number] = color
        logger.debug(f"Device {device_number} picker color set to {color.to_hex()}")

    def resolve_color(self, device_number: int) -> Color:
        """Color the active tool paints with: picker color for pencil, black for eraser."""
        if self._registry.tool_for(device_number) is Tool.ERASER:
            return Color.off()
        return self.picker_color(device_number)

    # =================================================================
    # Pointer events
    # =================================================================

    def pointer_down(self, device_number: int, row: int, col: int) -> LedCell:
        """Paint the pressed cell and start painting."""
        cell = self._write(device_number, row, col)
        self._state = PaintState.PAINTING
        return cell

    def pointer_enter(self, device_number: int, row: int, col: int) -> LedCell | None:
        """Paint the entered cell while the pointer is held; ignored otherwise."""
        if self._state is not PaintState.PAINTING:
            return None
        return self._write(device_number, row, col)

    def pointer_release(self) -> None:
        """Stop painting on every device."""
        if self._state is PaintState.PAINTING:
            logger.debug("Painting stopped")
        self._state = PaintState.IDLE

    def click(self, device_number: int, row: int, col: int) -> LedCell:
        """Paint one cell. Repeats the write pointer_down already made."""
        return self._write(device_number, row, col)

    async def drain(self) -> None:
        """Wait for every dispatched write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # =================================================================
    # Internals
    # =================================================================

    def _write(self, device_number: int, row: int, col: int) -> LedCell:
        color = self.resolve_color(device_number)
        cell = self._matrix_for(device_number).set_color(row, col, color)

        self._observers.notify(
            "on_board_event",
            BoardEvent.CELL_CHANGED,
            device_number,
            row=row,
            col=col,
            color=color,
        )
        self._dispatch(device_number, cell.hardware_index, color)
        return cell

    def _dispatch(self, device_number: int, index: int, color: Color) -> None:
        """Send the write without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No event loop running; LED {index} on device {device_number} not sent")
            return

        task = loop.create_task(self._commands.update_led_color(device_number, index, color))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
