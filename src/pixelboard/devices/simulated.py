"""
In-process backend that behaves like a set of connected boards.

Each simulated board keeps the same GRB frame buffer a real board keeps
(3 bytes per LED in serpentine order), so layouts saved here load on
hardware and vice versa. Images are decoded with Pillow, gamma corrected
and placed in serpentine order exactly as the USB backend does.
"""

import asyncio
import logging
import random
from pathlib import Path

import numpy as np
from PIL import Image

from pixelboard.exceptions import BackendCommandError, DeviceNotFoundError, LayoutDocumentError
from pixelboard.mapping import led_index
from pixelboard.model_manager import PydanticPersistence
from pixelboard.models import (
    MATRIX_HEIGHT,
    MATRIX_WIDTH,
    Color,
    DeviceInfo,
    LayoutDocument,
    LedColor,
)

logger = logging.getLogger(__name__)

# First serial number handed out; matches the board used for bench testing
FIRST_SERIAL = 12345

MANUFACTURER = "Raspberry Pi"
PRODUCT = "Pico"

# 8-bit gamma table (gamma 2.8) applied to image pixels before display
GAMMA = 2.8
GAMMA_LUT = np.floor(((np.arange(256) / 255.0) ** GAMMA) * 255.0 + 0.5).astype(np.uint8)


class SimulatedBackend:
    """
    Backend for boards that exist only in memory.

    Example:
        ```python
        backend = SimulatedBackend(device_count=2)
        devices = await backend.find_devices()   # serials "12345", "12346"
        ```
    """

    def __init__(
        self,
        device_count: int = 1,
        width: int = MATRIX_WIDTH,
        height: int = MATRIX_HEIGHT,
        sensor_count: int = 4,
        latency: float = 0.0,
    ):
        """
        Initialize the simulated boards.

        Args:
            device_count: Number of boards to expose
            width: LED columns per board
            height: LED rows per board
            sensor_count: Temperature sensors per board
            latency: Artificial delay per command in seconds
        """
        self.width = width
        self.height = height
        self.sensor_count = sensor_count
        self.latency = latency

        serials = [str(FIRST_SERIAL + offset) for offset in range(max(0, device_count))]
        self._buffers: dict[str, bytearray] = {
            serial: bytearray(self.buffer_size) for serial in serials
        }
        self._friendly_names: dict[str, str] = {}
        self._unplugged: set[str] = set()
        self._rng = random.Random(FIRST_SERIAL)
        self.firmware_updates: dict[str, int] = {}

        logger.info(f"Simulated backend ready with {len(serials)} board(s) at {width}x{height}")

    @property
    def buffer_size(self) -> int:
        """Bytes in one frame buffer (3 per LED)."""
        return 3 * self.width * self.height

    @property
    def serial_numbers(self) -> list[str]:
        """Serial numbers of every simulated board, plugged in or not."""
        return list(self._buffers)

    # ================================================================
    # TEST HOOKS
    # ================================================================

    def unplug(self, serial_number: str) -> None:
        """Make a board unreachable until plug() is called."""
        self._unplugged.add(serial_number)
        logger.info(f"Simulated board {serial_number} unplugged")

    def plug(self, serial_number: str) -> None:
        """Make an unplugged board reachable again."""
        self._unplugged.discard(serial_number)
        logger.info(f"Simulated board {serial_number} plugged in")

    def frame(self, serial_number: str) -> bytes:
        """Copy of a board's GRB frame buffer."""
        return bytes(self._buffer(serial_number))

    def friendly_name(self, serial_number: str) -> str | None:
        """Friendly name stored for a board."""
        return self._friendly_names.get(serial_number)

    def is_test_device(self, serial_number: str) -> bool:
        """Every board of this backend is simulated."""
        return serial_number in self._buffers

    # ================================================================
    # COMMANDS
    # ================================================================

    async def find_devices(self) -> list[DeviceInfo]:
        await self._delay()
        devices = [
            DeviceInfo(manufacturer=MANUFACTURER, product=PRODUCT, serial_number=serial)
            for serial in self._buffers
            if serial not in self._unplugged
        ]
        logger.debug(f"Found {len(devices)} simulated board(s)")
        return devices

    async def connect_to_device(self, serial_number: str) -> bool:
        await self._delay()
        self._buffer(serial_number)
        return True

    async def set_friendly_name(self, serial_number: str, friendly_name: str) -> None:
        await self._delay()
        self._buffer(serial_number)
        self._friendly_names[serial_number] = friendly_name
        logger.info(f"Friendly name for {serial_number} set to {friendly_name!r}")

    async def get_temperature(self, serial_number: str) -> list[float]:
        await self._delay()
        buffer = self._buffer(serial_number)
        # Lit LEDs warm the board a little
        load = sum(buffer) / (255.0 * max(1, len(buffer)))
        return [
            round(24.0 + 8.0 * load + self._rng.uniform(-0.5, 0.5), 2)
            for _ in range(self.sensor_count)
        ]

    async def update_led_color(self, serial_number: str, led_color: LedColor) -> None:
        await self._delay()
        buffer = self._buffer(serial_number)
        if led_color.index >= self.width * self.height:
            raise BackendCommandError(
                "update_led_color",
                serial_number=serial_number,
                original_error=f"LED index {led_color.index} out of range",
            )
        base = led_color.index * 3
        color = led_color.color
        buffer[base:base + 3] = bytes((color.g, color.r, color.b))

    async def clear_board(self, serial_number: str) -> None:
        await self._delay()
        buffer = self._buffer(serial_number)
        buffer[:] = bytes(len(buffer))

    async def save_led_layout(self, serial_number: str, path: Path) -> None:
        await self._delay()
        document = LayoutDocument(list(self._buffer(serial_number)))
        PydanticPersistence.save_json(document, Path(path), indent=None, backup=False)
        logger.info(f"Saved layout of {serial_number} to {path}")

    async def load_led_layout(self, serial_number: str, path: Path) -> list[int]:
        await self._delay()
        buffer = self._buffer(serial_number)
        document = PydanticPersistence.load_json(Path(path), LayoutDocument)
        if not document.fits(self.width, self.height):
            raise LayoutDocumentError(
                f"expected {self.buffer_size} values, got {len(document)}", source=str(path)
            )
        buffer[:] = bytes(document.values)
        logger.info(f"Loaded layout {path} onto {serial_number}")
        return list(document.values)

    async def process_image(
        self, serial_number: str, path: Path, width: int, height: int, testing: bool
    ) -> list[Color]:
        await self._delay()
        buffer = self._buffer(serial_number)
        try:
            with Image.open(path) as img:
                pixels = np.array(
                    img.convert("RGB").resize((width, height), Image.Resampling.BILINEAR)
                )
        except (OSError, ValueError) as e:
            raise BackendCommandError(
                "process_image", serial_number=serial_number, original_error=f"Could not open the image file: {e}"
            ) from e

        corrected = GAMMA_LUT[pixels]
        led_data = [Color.off()] * (width * height)
        for y in range(height):
            for x in range(width):
                r, g, b = (int(v) for v in corrected[y, x])
                led_data[led_index(y, x, width, height)] = Color(r=r, g=g, b=b)

        if width == self.width and height == self.height:
            for index, color in enumerate(led_data):
                buffer[index * 3:index * 3 + 3] = bytes((color.g, color.r, color.b))

        logger.info(f"Projected {path} onto {serial_number} (testing={testing})")
        return led_data

    async def update_firmware(self, serial_number: str) -> None:
        await self._delay()
        self._buffer(serial_number)
        self.firmware_updates[serial_number] = self.firmware_updates.get(serial_number, 0) + 1
        logger.info(f"Simulated firmware update for {serial_number}")

    # ================================================================
    # INTERNALS
    # ================================================================

    def _buffer(self, serial_number: str) -> bytearray:
        """Frame buffer of a reachable board."""
        buffer = self._buffers.get(serial_number)
        if buffer is None or serial_number in self._unplugged:
            raise DeviceNotFoundError(serial_number)
        return buffer

    async def _delay(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        else:
            await asyncio.sleep(0)
