"""
Backend command surface and the call-site wrapper around it.

The backend owns the physical transport (USB control transfers on real
boards, in-memory buffers in the simulator). Everything above it talks
to boards only through the commands of ``DeviceBackend``:

::

    BoardSession / PaintCoordinator / LayoutCodec / ImageProjector
            │ device_number
            ↓
    DeviceCommands ── DeviceRegistry: device_number → serial_number
            │ serial_number
            ↓
    DeviceBackend (async commands)

``DeviceCommands`` applies the error policy: a failing command is
logged with its name and serial number and reported as ``None`` (or
``False``) instead of raising, and a device number with no serial
number never reaches the backend.
"""

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pixelboard.exceptions import wrap_backend_error
from pixelboard.models import Color, DeviceInfo, LedColor

from .registry import DeviceRegistry

logger = logging.getLogger(__name__)

# Sentinel for commands whose successful result is None
_FAILED = object()


@runtime_checkable
class DeviceBackend(Protocol):
    """Commands a board backend must provide. All I/O commands are coroutines."""

    async def find_devices(self) -> list[DeviceInfo]:
        """List connected boards."""
        ...

    async def connect_to_device(self, serial_number: str) -> bool:
        """Open (or re-validate) the connection to a board."""
        ...

    async def set_friendly_name(self, serial_number: str, friendly_name: str) -> None:
        """Store a user label for a board."""
        ...

    async def get_temperature(self, serial_number: str) -> list[float]:
        """Read every temperature sensor, in degrees Celsius."""
        ...

    async def update_led_color(self, serial_number: str, led_color: LedColor) -> None:
        """Set one LED and push the frame to the board."""
        ...

    async def clear_board(self, serial_number: str) -> None:
        """Turn every LED off."""
        ...

    async def save_led_layout(self, serial_number: str, path: Path) -> None:
        """Write the board's current frame to a layout document."""
        ...

    async def load_led_layout(self, serial_number: str, path: Path) -> list[int]:
        """Replace the board's frame with a layout document and return it."""
        ...

    async def process_image(
        self, serial_number: str, path: Path, width: int, height: int, testing: bool
    ) -> list[Color]:
        """Fit an image to the matrix, push it, and return the pixels in hardware order."""
        ...

    async def update_firmware(self, serial_number: str) -> None:
        """Flash new firmware onto the board."""
        ...

    def is_test_device(self, serial_number: str) -> bool:
        """True for boards that exist only in software."""
        ...


class DeviceCommands:
    """
    Routes commands to the right board and keeps failures local.

    Every method takes a logical device number, resolves it through the
    registry, and returns ``None``/``False`` when the device is
    unavailable or the backend raises.
    """

    def __init__(self, backend: DeviceBackend, registry: DeviceRegistry):
        """
        Initialize the command router.

        Args:
            backend: Backend that performs the commands
            registry: Registry used to resolve device numbers
        """
        self.backend = backend
        self.registry = registry

    async def _invoke(
        self, command: str, serial_number: str | None, *args: Any, method=None
    ) -> Any:
        """
        Run one backend command, logging and swallowing any failure.

        Returns ``_FAILED`` when the command raised, so callers can tell a
        failure apart from a command whose result is ``None``.
        """
        method = method or getattr(self.backend, command)
        try:
            if serial_number is None:
                return await method(*args)
            return await method(serial_number, *args)
        except Exception as e:
            error = wrap_backend_error(e, command, serial_number)
            logger.error(f"Error invoking {command}: {error.technical_message}")
            return _FAILED

    @staticmethod
    def _result_or_none(result: Any) -> Any:
        return None if result is _FAILED else result

    # ================================================================
    # DISCOVERY & REGISTRATION
    # ================================================================

    async def find_devices(self) -> list[DeviceInfo] | None:
        """List connected boards, or None if discovery failed."""
        return self._result_or_none(await self._invoke("find_devices", None))

    async def connect_serial(self, serial_number: str) -> bool:
        """Connect by serial number (used before a device number exists)."""
        return bool(self._result_or_none(await self._invoke("connect_to_device", serial_number)))

    async def set_friendly_name(self, serial_number: str, friendly_name: str) -> bool:
        """Store a friendly name on the backend side."""
        result = await self._invoke("set_friendly_name", serial_number, friendly_name)
        return result is not _FAILED

    # ================================================================
    # PER-DEVICE COMMANDS
    # ================================================================

    async def connect(self, device_number: int) -> bool:
        """Check whether a registered device is reachable."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return False
        return bool(self._result_or_none(await self._invoke("connect_to_device", serial_number)))

    async def get_temperature(self, device_number: int) -> list[float] | None:
        """Read a device's temperature sensors."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return None
        return self._result_or_none(await self._invoke("get_temperature", serial_number))

    async def update_led_color(self, device_number: int, index: int, color: Color) -> bool:
        """Push one LED color to a device."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return False
        led_color = LedColor(index=index, color=color)
        result = await self._invoke("update_led_color", serial_number, led_color)
        return result is not _FAILED

    async def clear_board(self, device_number: int) -> bool:
        """Turn off every LED on a device."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return False
        return await self._invoke("clear_board", serial_number) is not _FAILED

    async def save_led_layout(self, device_number: int, path: Path) -> bool:
        """Ask the backend to write a device's layout to a file."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return False
        return await self._invoke("save_led_layout", serial_number, path) is not _FAILED

    async def load_led_layout(self, device_number: int, path: Path) -> list[int] | None:
        """Ask the backend to load a layout file onto a device."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return None
        return self._result_or_none(await self._invoke("load_led_layout", serial_number, path))

    async def process_image(
        self, device_number: int, path: Path, width: int, height: int
    ) -> list[Color] | None:
        """Ask the backend to fit an image to a device and push it."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return None
        result = await self._invoke(
            "process_image", serial_number, path, width, height, method=self._process_image
        )
        return self._result_or_none(result)

    async def _process_image(
        self, serial_number: str, path: Path, width: int, height: int
    ) -> list[Color]:
        testing = self.backend.is_test_device(serial_number)
        return await self.backend.process_image(serial_number, path, width, height, testing)

    async def update_firmware(self, device_number: int) -> bool:
        """Flash firmware onto a device."""
        serial_number = self.registry.serial_number_for(device_number)
        if not serial_number:
            return False
        return await self._invoke("update_firmware", serial_number) is not _FAILED
