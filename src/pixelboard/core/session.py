"""
Board session: the UI-agnostic coordinator behind every front end.

Owns the registry, one visual matrix per device and the components that
change them, and exposes the user-level actions:

- refresh the device list, register a device under a friendly name
- select a tool, pick a color, paint (via ``session.paint``)
- clear the board, save/load a layout, load an image
- read temperatures, update firmware

Observers registered here receive a ``BoardEvent`` for every visible
change, whichever component caused it.
"""

import logging
from pathlib import Path

from pixelboard.devices import DeviceBackend, DeviceCommands, DeviceRegistry
from pixelboard.exceptions import handle_errors
from pixelboard.model_manager import ObserverManager
from pixelboard.models import AppConfig, Color, DeviceInfo, DeviceRecord, LedMatrix, Tool
from pixelboard.protocols import BoardEvent, BoardObserver

from .image import ImageProjector
from .layout import LayoutCodec
from .paint import PaintCoordinator
from .poller import ConnectionPoller

logger = logging.getLogger(__name__)


class BoardSession:
    """Coordinator for every board in one running application."""

    def __init__(self, backend: DeviceBackend, config: AppConfig | None = None):
        """
        Initialize the session.

        Args:
            backend: Backend that talks to the boards
            config: Application configuration (defaults if None)
        """
        self.config = config or AppConfig()
        self.backend = backend
        self.registry = DeviceRegistry()
        self.commands = DeviceCommands(backend, self.registry)

        self._matrices: dict[int, LedMatrix] = {}
        self._observers = ObserverManager[BoardObserver](observer_type_name="board")
        self.discovered: list[DeviceInfo] = []

        self.paint = PaintCoordinator(
            self.registry,
            self.commands,
            self.matrix,
            self._observers,
            default_color=self.config.picker_default,
        )
        self.layouts = LayoutCodec(self.commands, self.matrix, self._observers)
        self.images = ImageProjector(self.commands, self.matrix, self._observers)
        self.poller = ConnectionPoller(
            backend, self.registry, self._observers, interval=self.config.poll_interval
        )
        logger.info("Board session initialized")

    # =================================================================
    # Observers & state
    # =================================================================

    def register_observer(self, observer: BoardObserver) -> None:
        """Register an observer for board events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: BoardObserver) -> None:
        """Unregister a board event observer."""
        self._observers.unregister(observer)

    def matrix(self, device_number: int) -> LedMatrix:
        """Visual matrix of a device, created dark on first use."""
        matrix = self._matrices.get(device_number)
        if matrix is None:
            matrix = LedMatrix.create_empty(self.config.matrix_width, self.config.matrix_height)
            self._matrices[device_number] = matrix
        return matrix

    @property
    def device_numbers(self) -> list[int]:
        """Device numbers that have a window: 1..total_devices."""
        return list(range(1, self.registry.total_devices + 1))

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self) -> None:
        """Start background polling."""
        self.poller.start()

    async def stop(self) -> None:
        """Stop polling and let in-flight work finish."""
        self.poller.stop()
        await self.poller.wait_idle()
        await self.paint.drain()
        logger.info("Board session stopped")

    # =================================================================
    # Devices
    # =================================================================

    async def refresh_devices(self) -> list[DeviceInfo]:
        """Ask the backend for connected boards."""
        devices = await self.commands.find_devices()
        if devices is None:
            return self.discovered

        self.discovered = list(devices)
        self.registry.set_expected_count(len(self.discovered))
        logger.info(f"Discovered {len(self.discovered)} device(s)")
        self._observers.notify(
            "on_board_event", BoardEvent.DEVICES_DISCOVERED, None, devices=self.discovered
        )
        return self.discovered

    async def register_device(
        self, device_number: int, serial_number: str, friendly_name: str
    ) -> DeviceRecord | None:
        """
        Name a discovered board and give it a device number.

        The friendly name is stored on the backend first; the device is
        only registered if that succeeds, and then connected.

        Returns:
            The new record, or None if the name was empty or the backend refused
        """
        friendly_name = friendly_name.strip()
        if not friendly_name:
            logger.warning(f"Not registering {serial_number}: a friendly name is required")
            return None

        if not await self.commands.set_friendly_name(serial_number, friendly_name):
            return None

        record = self.registry.register(device_number, serial_number, friendly_name)
        await self.commands.connect_serial(serial_number)
        self._observers.notify(
            "on_board_event", BoardEvent.DEVICE_REGISTERED, device_number, record=record
        )
        return record

    # =================================================================
    # Tools & painting
    # =================================================================

    def select_tool(self, device_number: int, tool: Tool) -> bool:
        """Make pencil or eraser the active tool of a device."""
        if not self.registry.set_tool(device_number, tool):
            return False
        self._observers.notify("on_board_event", BoardEvent.TOOL_CHANGED, device_number, tool=tool)
        return True

    def set_picker_color(self, device_number: int, color: Color) -> None:
        """Change the color the pencil paints with on a device."""
        self.paint.set_picker_color(device_number, color)

    async def clear_board(self, device_number: int) -> bool:
        """Black out a device's matrix, then clear the board."""
        self.matrix(device_number).clear()
        self._observers.notify("on_board_event", BoardEvent.BOARD_CLEARED, device_number)
        return await self.commands.clear_board(device_number)

    # =================================================================
    # Layouts & images
    # =================================================================

    async def save_layout(self, device_number: int, path: Path | None) -> bool:
        """Save a device's layout (None means cancelled)."""
        return await self.layouts.save(device_number, path)

    async def load_layout(self, device_number: int, path: Path | None) -> bool:
        """Load a layout onto a device (None means cancelled)."""
        return await self.layouts.load(device_number, path)

    async def load_image(self, device_number: int, path: Path | None) -> bool:
        """Project an image onto a device (None means cancelled)."""
        return await self.images.load_image(device_number, path)

    # =================================================================
    # Sensors & maintenance
    # =================================================================

    @handle_errors(operation_name="read temperatures", re_raise=False)
    async def read_temperatures(self, device_number: int) -> list[float] | None:
        """Read a device's temperature sensors now."""
        readings = await self.commands.get_temperature(device_number)
        if readings is not None:
            readings = [float(value) for value in readings]
            self._observers.notify(
                "on_board_event", BoardEvent.TEMPERATURES_UPDATED, device_number, temperatures=readings
            )
        return readings

    async def update_firmware(self, device_number: int) -> bool:
        """Flash new firmware onto a device."""
        updated = await self.commands.update_firmware(device_number)
        if updated:
            logger.info(f"Firmware updated on device {device_number}")
        return updated
