"""Core board logic, independent of any user interface."""

from .image import ImageProjector
from .layout import LayoutCodec
from .paint import PaintCoordinator
from .poller import ConnectionPoller
from .session import BoardSession

__all__ = [
    "BoardSession",
    "ConnectionPoller",
    "ImageProjector",
    "LayoutCodec",
    "PaintCoordinator",
]
