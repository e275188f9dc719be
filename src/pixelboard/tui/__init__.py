"""Textual user interface."""

from .app import PixelBoardApp

__all__ = ["PixelBoardApp"]
