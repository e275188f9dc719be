"""Tests for the generic observer manager."""

from unittest.mock import Mock

from pixelboard.model_manager import ObserverManager
from pixelboard.protocols import BoardEvent, BoardObserver


class TestObserverManager:
    """Registration and failure isolation."""

    def test_register_is_idempotent(self):
        manager = ObserverManager[BoardObserver]()
        observer = Mock(spec=BoardObserver)

        manager.register(observer)
        manager.register(observer)

        assert len(manager) == 1
        assert observer in manager

    def test_notify_passes_arguments(self):
        manager = ObserverManager[BoardObserver]()
        observer = Mock(spec=BoardObserver)
        manager.register(observer)

        manager.notify("on_board_event", BoardEvent.BOARD_CLEARED, 2)

        observer.on_board_event.assert_called_once_with(BoardEvent.BOARD_CLEARED, 2)

    def test_failing_observer_does_not_block_others(self, caplog):
        manager = ObserverManager[BoardObserver](observer_type_name="board")
        broken = Mock(spec=BoardObserver)
        broken.on_board_event.side_effect = RuntimeError("widget gone")
        healthy = Mock(spec=BoardObserver)
        manager.register(broken)
        manager.register(healthy)

        manager.notify("on_board_event", BoardEvent.TOOL_CHANGED, 1)

        healthy.on_board_event.assert_called_once()
        assert "Error notifying board observer" in caplog.text

    def test_missing_callback_is_logged(self, caplog):
        manager = ObserverManager[object]()
        manager.register(object())

        manager.notify("on_board_event", BoardEvent.TOOL_CHANGED, 1)

        assert "has no method 'on_board_event'" in caplog.text

    def test_unregister_during_notify(self):
        manager = ObserverManager[BoardObserver]()
        second = Mock(spec=BoardObserver)

        class OneShot:
            def on_board_event(self, event, device_number, **data):
                manager.unregister(self)

        first = OneShot()
        manager.register(first)
        manager.register(second)

        manager.notify("on_board_event", BoardEvent.BOARD_CLEARED, 1)

        second.on_board_event.assert_called_once()
        assert first not in manager
