"""Domain events for the observer pattern.

- Board events: Matrix contents, device list and connection changes
- Paint events: Pointer-driven state machine transitions
"""

from enum import Enum


class BoardEvent(Enum):
    """Events raised by a BoardSession for a single device (or all devices)."""

    CELL_CHANGED = "cell_changed"                  # One LED changed color
    BOARD_CLEARED = "board_cleared"                # Every LED turned off
    LAYOUT_LOADED = "layout_loaded"                # A layout document replaced the matrix
    IMAGE_PROJECTED = "image_projected"            # Image pixels replaced the matrix
    TOOL_CHANGED = "tool_changed"                  # Pencil/eraser selection changed
    DEVICE_REGISTERED = "device_registered"        # A serial number got a device number
    DEVICES_DISCOVERED = "devices_discovered"      # find-devices returned a fresh list
    CONNECTION_CHANGED = "connection_changed"      # Poller saw a device come or go
    TEMPERATURES_UPDATED = "temperatures_updated"  # Poller read new sensor values


class PaintState(Enum):
    """States of the paint interaction state machine."""

    IDLE = "idle"          # Pointer released
    PAINTING = "painting"  # Pointer held down over the matrix
