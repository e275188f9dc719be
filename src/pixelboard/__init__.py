"""Pixelboard: paint, save and project images onto serpentine RGB LED boards."""

__version__ = "0.1.0"

# Core session
from .core import BoardSession

# Device access
from .devices import DeviceBackend, DeviceRegistry, SimulatedBackend

__all__ = [
    "BoardSession",
    "DeviceBackend",
    "DeviceRegistry",
    "SimulatedBackend",
]
