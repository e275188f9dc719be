"""Board access: registry, backend command surface and the simulated backend."""

from .backend import DeviceBackend, DeviceCommands
from .registry import DeviceRegistry
from .simulated import SimulatedBackend

__all__ = [
    "DeviceBackend",
    "DeviceCommands",
    "DeviceRegistry",
    "SimulatedBackend",
]
