"""Reusable UI widgets for the TUI."""

from .device_panel import DevicePanel
from .led_matrix import LedCellWidget, LedMatrixWidget
from .status_bar import StatusBar

__all__ = [
    "DevicePanel",
    "LedCellWidget",
    "LedMatrixWidget",
    "StatusBar",
]
