"""Data models for pixelboard."""

from .color import Color
from .config import AppConfig
from .device import DeviceInfo, DeviceRecord, LedColor
from .enums import ChannelOrder, ConnectionState, Tool
from .layout import LayoutDocument
from .matrix import MATRIX_HEIGHT, MATRIX_WIDTH, LedCell, LedMatrix

__all__ = [
    "MATRIX_HEIGHT",
    "MATRIX_WIDTH",
    "AppConfig",
    # Enums
    "ChannelOrder",
    # Models
    "Color",
    "ConnectionState",
    "DeviceInfo",
    "DeviceRecord",
    "LayoutDocument",
    "LedCell",
    "LedColor",
    "LedMatrix",
    "Tool",
]
