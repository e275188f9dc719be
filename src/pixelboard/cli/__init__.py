"""Command-line interface for pixelboard."""

from .main import cli

__all__ = ["cli"]
