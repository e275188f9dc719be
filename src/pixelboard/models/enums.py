"""Enumerations for pixelboard."""

from enum import Enum


class Tool(str, Enum):
    """Paint tools available on every device window."""

    PENCIL = "pencil"  # Paint with the device's color-picker value
    ERASER = "eraser"  # Paint black


class ChannelOrder(str, Enum):
    """Per-cell channel order inside a layout document."""

    GRB = "grb"  # Wire order used by the board buffer and firmware
    RGB = "rgb"

    def pack(self, r: int, g: int, b: int) -> tuple[int, int, int]:
        """Order an (r, g, b) triple for the document."""
        if self is ChannelOrder.GRB:
            return (g, r, b)
        return (r, g, b)

    def unpack(self, first: int, second: int, third: int) -> tuple[int, int, int]:
        """Read a document triple back into (r, g, b)."""
        if self is ChannelOrder.GRB:
            return (second, first, third)
        return (first, second, third)


class ConnectionState(str, Enum):
    """Last known reachability of a registered device."""

    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
