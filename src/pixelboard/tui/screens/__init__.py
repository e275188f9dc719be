"""Modal screens for dialogs."""

from .prompt import TextPromptScreen
from .register_device import RegisterDeviceScreen

__all__ = [
    "RegisterDeviceScreen",
    "TextPromptScreen",
]
