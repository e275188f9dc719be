"""Tests for the exception hierarchy and error handling utilities."""

import pytest

from pixelboard.exceptions import (
    BackendCommandError,
    DeviceNotFoundError,
    LayoutDocumentError,
    PixelBoardError,
    collect_errors,
    format_error_for_display,
    handle_errors,
    wrap_backend_error,
)


class TestExceptions:
    """User-facing messages and hints."""

    def test_layout_error_message(self):
        error = LayoutDocumentError("expected 528 values, got 12", source="smiley.json")
        assert error.user_message == "Invalid LED layout: expected 528 values, got 12"
        assert error.recovery_hint
        assert "smiley.json" in error.technical_message

    def test_full_message_includes_hint(self):
        error = DeviceNotFoundError("12345")
        assert "Suggestion:" in error.get_full_message()

    def test_format_for_display(self):
        assert format_error_for_display(ValueError("boom")) == ("ValueError: boom", None)
        message, hint = format_error_for_display(DeviceNotFoundError("1"))
        assert "not found" in message
        assert hint is not None


class TestWrapBackendError:
    """Conversion of raw backend failures."""

    def test_passthrough(self):
        error = DeviceNotFoundError("1")
        assert wrap_backend_error(error, "connect_to_device", "1") is error

    def test_not_found_message(self):
        wrapped = wrap_backend_error(RuntimeError("Device not found"), "clear_board", "42")
        assert isinstance(wrapped, DeviceNotFoundError)

    def test_generic(self):
        wrapped = wrap_backend_error(OSError("pipe error"), "update_led_color", "42")
        assert isinstance(wrapped, BackendCommandError)
        assert wrapped.command == "update_led_color"
        assert "pipe error" in wrapped.technical_message


class TestHandleErrors:
    """The handle_errors decorator on sync and async functions."""

    def test_sync_fallback(self, caplog):
        @handle_errors(operation_name="divide", re_raise=False, fallback_value=-1)
        def divide(a, b):
            return a / b

        assert divide(4, 2) == 2
        assert divide(1, 0) == -1
        assert "Unexpected error during divide" in caplog.text

    def test_sync_reraise(self):
        @handle_errors(operation_name="fail")
        def fail():
            raise PixelBoardError("nope")

        with pytest.raises(PixelBoardError):
            fail()

    @pytest.mark.asyncio
    async def test_async_fallback_and_notification(self):
        messages = []

        @handle_errors(operation_name="read", re_raise=False, user_notification=messages.append)
        async def read():
            raise DeviceNotFoundError("12345")

        assert await read() is None
        assert messages and "not found" in messages[0]


class TestErrorCollection:
    """Batch error collection."""

    def test_collector_continues(self):
        collector = collect_errors("poll devices")
        for number in (1, 2, 3):
            with collector.try_operation(f"device {number}"):
                if number == 2:
                    raise RuntimeError("stuck")

        assert collector.error_count == 1
        assert collector.success_count == 2
        assert "device 2: stuck" in collector.get_summary()
