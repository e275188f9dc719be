"""Decorators for PixelBoardApp actions."""

from functools import wraps

from pixelboard.exceptions import handle_errors


def handle_action_errors(operation_name: str):
    """
    Log a failing action and show it as an error toast instead of crashing.

    Works for plain and coroutine actions; the action returns None on failure.

    Example:
        @handle_action_errors("load layout")
        async def _load_layout(self, path):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            guarded = handle_errors(
                operation_name=operation_name,
                user_notification=lambda msg: self.notify(msg, severity="error", timeout=5),
                re_raise=False,
            )(func)
            return guarded(self, *args, **kwargs)
        return wrapper
    return decorator


def require_device(func):
    """Skip an action, with a warning toast, when no device window has focus."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if self.focused_device is None:
            self.notify("Select a device first", severity="warning")
            return None
        return func(self, *args, **kwargs)
    return wrapper
