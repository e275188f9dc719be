"""
Error handling helpers shared by the core, the CLI and the TUI.

Backend commands fail in many ways (USB pipe errors, unplugged boards,
bad files). The helpers here turn those failures into PixelBoardError
instances, log them once, and let the caller decide whether to keep going.

| Need | Helper |
|------|--------|
| Log and return a fallback | `@handle_errors(operation_name="clear board", re_raise=False)` |
| Log and re-raise | `@handle_errors(operation_name="load config")` |
| Keep sweeping boards after one fails | `collect_errors("poll devices")` |
| Show an error in the CLI | `format_error_for_display(error)` |
"""

import functools
import inspect
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from .base import PixelBoardError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import BackendCommandError, DeviceNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def _report(
    error: Exception,
    operation_name: str,
    log_level: int,
    user_notification: Optional[Callable[[str], None]],
) -> None:
    if isinstance(error, PixelBoardError):
        logger.log(log_level, f"Failed to {operation_name}: {error.technical_message}")
        message = error.get_full_message()
    else:
        logger.log(log_level, f"Unexpected error during {operation_name}: {error}", exc_info=True)
        message = f"Error: {error}"
    if user_notification:
        user_notification(message)


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorate a function so its failures are logged the same way everywhere.

    Works on coroutine functions too; the wrapper keeps the calling
    convention of the wrapped function.

    Args:
        operation_name: Short description used in log lines ("save layout")
        user_notification: Callback that shows a message to the user
        fallback_value: Returned instead of raising when re_raise is False
        re_raise: Re-raise after logging
        log_level: Level used for the log line
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _report(e, operation_name, log_level, user_notification)
                    if re_raise:
                        raise
                    return fallback_value

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _report(e, operation_name, log_level, user_notification)
                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


def _field_name(error: dict) -> str:
    return ".".join(str(part) for part in error.get('loc', ())) or "value"


def wrap_pydantic_error(error: Exception, file_path: str) -> PixelBoardError:
    """
    Turn a pydantic failure on a JSON file into a configuration error.

    Broken JSON becomes ConfigFileInvalidError; JSON that parses but holds
    bad values becomes ConfigValidationError naming the offending field(s).
    """
    from pydantic import ValidationError

    if not isinstance(error, ValidationError):
        return ConfigValidationError("unknown", None, str(error), file_path)

    problems = error.errors()
    json_problems = [p for p in problems if p.get('type') == 'json_invalid']
    if json_problems:
        detail = json_problems[0].get('ctx', {}).get('error') or json_problems[0].get('msg', '')
        return ConfigFileInvalidError(file_path, str(detail))

    if len(problems) == 1:
        problem = problems[0]
        return ConfigValidationError(
            _field_name(problem), problem.get('input'), problem.get('msg', 'invalid'), file_path
        )

    lines = "\n".join(f"  - {_field_name(p)}: {p.get('msg', 'invalid')}" for p in problems)
    return ConfigValidationError(
        "multiple fields", None, f"{len(problems)} validation errors:\n{lines}", file_path
    )


def wrap_backend_error(
    error: Exception, command: str, serial_number: Optional[str] = None
) -> PixelBoardError:
    """
    Turn whatever a backend command raised into a PixelBoardError.

    PixelBoardError instances are returned unchanged. A message mentioning
    "not found" for a known serial number means the board went away.
    """
    if isinstance(error, PixelBoardError):
        return error
    if serial_number and "not found" in str(error).lower():
        return DeviceNotFoundError(serial_number)
    return BackendCommandError(command, serial_number=serial_number, original_error=str(error))


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """Return ``(message, recovery_hint)`` for showing an error to a user."""
    if isinstance(error, PixelBoardError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None


class ErrorCollector:
    """
    Records failures across a batch (one entry per board) without stopping it.

    Use :meth:`try_operation` around each step; an ``Exception`` raised
    inside is stored and swallowed, anything else (cancellation) propagates.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @contextmanager
    def try_operation(self, step: str) -> Iterator[None]:
        """Run one step of the batch, recording its failure if it raises."""
        try:
            yield
        except Exception as e:
            self.errors.append((step, e))
        else:
            self.success_count += 1

    def get_summary(self) -> str:
        """One line per failed step, headed by the failure count."""
        if not self.errors:
            return f"{self.operation}: all {self.success_count} steps succeeded"

        total = self.error_count + self.success_count
        lines = [f"{self.operation}: {self.error_count} of {total} steps failed"]
        for step, error in self.errors:
            message = error.user_message if isinstance(error, PixelBoardError) else str(error)
            lines.append(f"  - {step}: {message}")
        return "\n".join(lines)


def collect_errors(operation: str) -> ErrorCollector:
    """Start collecting errors for a batch operation such as a poll sweep."""
    return ErrorCollector(operation)
