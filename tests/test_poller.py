"""Tests for the connection and temperature poller."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from pixelboard.models import ConnectionState
from pixelboard.protocols import BoardEvent, BoardObserver


@pytest.mark.asyncio
class TestPollOnce:
    """A single sweep."""

    async def test_reads_every_connected_device(self, registered_session):
        session = registered_session
        await session.poller.poll_once()

        for number in (1, 2, 3):
            assert session.poller.state_for(number) is ConnectionState.CONNECTED
            readings = session.poller.temperatures_for(number)
            assert readings is not None
            assert len(readings) == 4

    async def test_one_failing_device_does_not_stop_sweep(self, registered_session, caplog):
        """Device 2 failing still updates devices 1 and 3."""
        session = registered_session
        real_get_temperature = session.backend.get_temperature

        async def flaky(serial_number):
            if serial_number == "12346":
                raise RuntimeError("sensor bus stuck")
            return await real_get_temperature(serial_number)

        session.backend.get_temperature = flaky
        await session.poller.poll_once()

        assert session.poller.temperatures_for(1) is not None
        assert session.poller.temperatures_for(2) is None
        assert session.poller.temperatures_for(3) is not None
        assert 2 in session.registry
        assert "device 2" in caplog.text

    async def test_unplugged_device_is_disconnected(self, registered_session):
        session = registered_session
        session.backend.unplug("12346")

        await session.poller.poll_once()

        assert session.poller.state_for(1) is ConnectionState.CONNECTED
        assert session.poller.state_for(2) is ConnectionState.DISCONNECTED
        assert session.poller.state_for(3) is ConnectionState.CONNECTED
        assert session.poller.temperatures_for(1) is not None
        assert session.poller.temperatures_for(2) is None
        assert session.poller.temperatures_for(3) is not None
        assert session.registry.serial_number_for(2) == "12346"

    async def test_missing_mapping_counts_as_disconnected(self, session):
        session.registry.set_expected_count(2)
        session.registry.register(2, "12346")

        await session.poller.poll_once()

        assert session.poller.state_for(1) is ConnectionState.DISCONNECTED
        assert session.poller.state_for(2) is ConnectionState.CONNECTED

    async def test_connection_change_is_published_once(self, registered_session):
        session = registered_session
        observer = Mock(spec=BoardObserver)
        session.register_observer(observer)

        await session.poller.poll_once()
        await session.poller.poll_once()

        changes = [
            call for call in observer.on_board_event.call_args_list
            if call.args[0] is BoardEvent.CONNECTION_CHANGED
        ]
        assert len(changes) == 3
        assert changes[0].args[1] == 1
        assert changes[0].kwargs == {"state": ConnectionState.CONNECTED}

    async def test_temperatures_are_published(self, registered_session):
        session = registered_session
        observer = Mock(spec=BoardObserver)
        session.register_observer(observer)

        await session.poller.poll_once()

        updates = [
            call for call in observer.on_board_event.call_args_list
            if call.args[0] is BoardEvent.TEMPERATURES_UPDATED
        ]
        assert [call.args[1] for call in updates] == [1, 2, 3]

    async def test_not_connected_skips_temperature(self, registered_session):
        session = registered_session
        session.backend.connect_to_device = AsyncMock(return_value=False)
        session.backend.get_temperature = AsyncMock()

        await session.poller.poll_once()

        session.backend.get_temperature.assert_not_called()
        assert session.poller.state_for(1) is ConnectionState.DISCONNECTED


@pytest.mark.asyncio
class TestPollerLifecycle:
    """Timer-driven sweeps."""

    async def test_start_sweeps_repeatedly(self, registered_session):
        poller = registered_session.poller
        poller.poll_once = AsyncMock()

        poller.start()
        await asyncio.sleep(poller.interval * 3.5)
        poller.stop()

        assert poller.poll_once.await_count >= 2
        assert not poller.is_running

    async def test_stop_prevents_new_sweeps(self, registered_session):
        poller = registered_session.poller
        poller.poll_once = AsyncMock()

        poller.start()
        await asyncio.sleep(0)
        poller.stop()
        # The sweep started before stop() still runs to completion
        await poller.wait_idle()
        count = poller.poll_once.await_count
        await asyncio.sleep(poller.interval * 3)

        assert count == 1
        assert poller.poll_once.await_count == count

    async def test_ticks_do_not_wait_for_slow_sweeps(self, registered_session):
        poller = registered_session.poller
        running = 0
        peak = 0

        async def slow_sweep():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(poller.interval * 3)
            running -= 1

        poller.poll_once = slow_sweep
        poller.start()
        await asyncio.sleep(poller.interval * 2.5)
        poller.stop()
        await poller.wait_idle()

        assert peak >= 2
        assert running == 0

    async def test_start_twice_is_harmless(self, registered_session):
        poller = registered_session.poller
        poller.poll_once = AsyncMock()
        poller.start()
        poller.start()
        assert poller.is_running
        poller.stop()
