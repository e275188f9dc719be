"""Errors raised while reading config.json and other JSON files."""

from typing import Any

from .base import PixelBoardError

# Extra hints for config fields people get wrong most often
_FIELD_HINTS = {
    "poll_interval": "The poll interval is in seconds and must be greater than 0",
    "matrix": "Boards in this family are 22 columns by 8 rows",
    "color": "Colors are hex strings such as '#FF8800'",
    "sensor_count": "Use 0 to hide the temperature readout",
}


class ConfigurationError(PixelBoardError):
    """A JSON file could not be loaded or saved."""


class ConfigFileInvalidError(ConfigurationError):
    """The file is not valid JSON (or is empty)."""

    def __init__(self, file_path: str, parse_error: str):
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = f"{file_path} has a trailing comma"
            recovery = "Remove the comma after the last item of the object or array"
        elif "empty" in lowered:
            user_msg = f"{file_path} is empty"
            recovery = "Delete the file to recreate it with default settings"
        else:
            user_msg = f"{file_path} is not valid JSON"
            recovery = (
                "Look for unquoted strings, unclosed braces or brackets, "
                "and trailing commas"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """The file parsed but a value is out of range or has the wrong type."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        hints = [f"Fix '{field}'" + (f" in {file_path}" if file_path else "")]
        hints.extend(hint for key, hint in _FIELD_HINTS.items() if key in field.lower())

        super().__init__(
            user_message=f"Invalid value for '{field}': {error_msg}",
            technical_message=f"Validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(hints),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
