"""CLI commands for pixelboard."""

from .devices import devices_group
from .layout import layout_group

__all__ = ["devices_group", "layout_group"]
