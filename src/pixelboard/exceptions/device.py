"""Errors from talking to LED boards through a backend."""

from .base import PixelBoardError


class DeviceError(PixelBoardError):
    """A board lookup or command failed; ``serial_number`` names the board if known."""

    def __init__(self, user_message: str, serial_number: str | None = None, **kwargs):
        super().__init__(user_message, **kwargs)
        self.serial_number = serial_number


class DeviceNotFoundError(DeviceError):
    """No connected board has the requested serial number."""

    def __init__(self, serial_number: str):
        super().__init__(
            user_message=f"Device with serial number {serial_number} not found.",
            serial_number=serial_number,
            recoverable=True,
            recovery_hint="Check the USB cable and run 'pixelboard devices list' to see connected boards.",
        )


class BackendCommandError(DeviceError):
    """A backend command raised (transport error, timeout, board error)."""

    def __init__(self, command: str, serial_number: str | None = None, original_error: str | None = None):
        technical = f"Backend command {command} failed for {serial_number or 'no device'}"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Command '{command}' failed.",
            technical_message=technical,
            serial_number=serial_number,
            recoverable=True,
        )
        self.command = command
        self.original_error = original_error
