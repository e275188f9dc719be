"""
Device registry: logical device numbers to physical boards.

Every command sent to the backend is addressed by serial number, while
the UI works with small logical device numbers ("Device 1", "Device 2").
The registry is the single place that links the two:

::

    UI window "Device 2"
            │ device_number = 2
            ↓
    DeviceRegistry.serial_number_for(2)
            │ "E6614C311B4F2A2B"
            ↓
    backend.update_led_color("E6614C311B4F2A2B", ...)

It also stores the per-device paint tool, so color resolution never
has to look anything up in the UI.

A missing mapping is not an error: it is logged as a warning and
reported as ``None`` so callers can treat the device as unavailable.
"""

import logging
from collections.abc import Iterator

from pixelboard.models import DeviceRecord, Tool

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """
    Registry of the boards known to this session.

    Entries are created when the user confirms a friendly name for a
    discovered serial number and live until the process exits.
    """

    def __init__(self) -> None:
        self._records: dict[int, DeviceRecord] = {}
        self._expected_count = 0

    def register(
        self, device_number: int, serial_number: str, friendly_name: str | None = None
    ) -> DeviceRecord:
        """
        Insert or overwrite the entry for a device number.

        The current tool survives an overwrite; a new entry starts with
        the pencil.

        Args:
            device_number: Logical device number (1-based)
            serial_number: Hardware serial number reported by discovery
            friendly_name: User-assigned label

        Returns:
            The stored record

        Raises:
            ValueError: If the serial number is empty
        """
        if not serial_number:
            raise ValueError("Serial number must not be empty")

        previous = self._records.get(device_number)
        record = DeviceRecord(
            device_number=device_number,
            serial_number=serial_number,
            friendly_name=friendly_name,
            tool=previous.tool if previous else Tool.PENCIL,
        )
        self._records[device_number] = record

        if previous and previous.serial_number != serial_number:
            logger.info(
                f"Device {device_number} remapped from {previous.serial_number} to {serial_number}"
            )
        else:
            logger.info(f"Registered device {device_number}: {serial_number} ({record.display_name})")
        return record

    def get(self, device_number: int) -> DeviceRecord | None:
        """Get the record for a device number, if registered."""
        return self._records.get(device_number)

    def serial_number_for(self, device_number: int) -> str | None:
        """
        Resolve a device number to its serial number.

        Returns:
            Serial number, or None (with a warning) if the device is not registered
        """
        record = self._records.get(device_number)
        if record is None:
            logger.warning(f"No device found for device number {device_number}.")
            return None
        return record.serial_number

    def device_number_for(self, serial_number: str) -> int | None:
        """Reverse lookup: the device number a serial number is registered under."""
        for record in self._records.values():
            if record.serial_number == serial_number:
                return record.device_number
        return None

    def tool_for(self, device_number: int) -> Tool:
        """Get the active paint tool (pencil for unknown devices)."""
        record = self._records.get(device_number)
        return record.tool if record else Tool.PENCIL

    def set_tool(self, device_number: int, tool: Tool) -> bool:
        """
        Set the active paint tool.

        Returns:
            True if the device exists and the tool was stored
        """
        record = self._records.get(device_number)
        if record is None:
            logger.warning(f"Cannot select {tool.value} for unregistered device {device_number}")
            return False
        record.tool = tool
        logger.debug(f"Device {device_number} tool set to {tool.value}")
        return True

    def set_expected_count(self, count: int) -> None:
        """Record how many boards the last discovery reported."""
        self._expected_count = max(0, count)

    @property
    def total_devices(self) -> int:
        """
        Upper bound of the device-number range to sweep.

        The larger of the last discovery count and the highest registered
        device number, so a registered device is never skipped.
        """
        highest = max(self._records, default=0)
        return max(self._expected_count, highest)

    @property
    def device_numbers(self) -> list[int]:
        """Registered device numbers in ascending order."""
        return sorted(self._records)

    @property
    def records(self) -> list[DeviceRecord]:
        """Registered records ordered by device number."""
        return [self._records[number] for number in self.device_numbers]

    def __contains__(self, device_number: object) -> bool:
        return device_number in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DeviceRecord]:
        return iter(self.records)
