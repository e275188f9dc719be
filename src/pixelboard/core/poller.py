"""Connection poller: periodic liveness check and temperature refresh."""

import asyncio
import logging

from pixelboard.devices import DeviceBackend, DeviceRegistry
from pixelboard.exceptions import collect_errors
from pixelboard.model_manager import ObserverManager
from pixelboard.models import ConnectionState
from pixelboard.protocols import BoardEvent, BoardObserver

logger = logging.getLogger(__name__)


class ConnectionPoller:
    """
    Sweeps every device number on a fixed interval.

    For each device in ``[1, registry.total_devices]`` the sweep checks the
    connection and, when connected, reads the temperature sensors. One
    device failing never stops the sweep and never unregisters anything.

    Ticks do not wait for each other: a slow sweep may still be running
    when the next one starts.
    """

    def __init__(
        self,
        backend: DeviceBackend,
        registry: DeviceRegistry,
        observers: ObserverManager[BoardObserver],
        interval: float = 1.0,
    ):
        """
        Initialize the poller.

        Args:
            backend: Backend queried for connection and temperatures
            registry: Registry that bounds and resolves the sweep
            observers: Observers notified of status and readings
            interval: Seconds between sweep starts
        """
        self._backend = backend
        self._registry = registry
        self._observers = observers
        self.interval = interval

        self._states: dict[int, ConnectionState] = {}
        self._temperatures: dict[int, list[float]] = {}
        self._scheduler: asyncio.Task | None = None
        self._sweeps: set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        """True while new sweeps are being scheduled."""
        return self._scheduler is not None and not self._scheduler.done()

    def state_for(self, device_number: int) -> ConnectionState:
        """Last known connection state of a device."""
        return self._states.get(device_number, ConnectionState.UNKNOWN)

    def temperatures_for(self, device_number: int) -> list[float] | None:
        """Last temperature readings of a device."""
        return self._temperatures.get(device_number)

    # =================================================================
    # Sweep
    # =================================================================

    async def poll_once(self) -> None:
        """Check every device number once, in order."""
        collector = collect_errors("poll devices")

        for device_number in range(1, self._registry.total_devices + 1):
            serial_number = self._registry.serial_number_for(device_number)
            if not serial_number:
                self._set_state(device_number, ConnectionState.DISCONNECTED)
                continue

            with collector.try_operation(f"device {device_number}"):
                try:
                    connected = bool(await self._backend.connect_to_device(serial_number))
                except Exception:
                    self._set_state(device_number, ConnectionState.DISCONNECTED)
                    raise

                self._set_state(
                    device_number,
                    ConnectionState.CONNECTED if connected else ConnectionState.DISCONNECTED,
                )
                if connected:
                    readings = list(await self._backend.get_temperature(serial_number))
                    self._temperatures[device_number] = readings
                    self._observers.notify(
                        "on_board_event",
                        BoardEvent.TEMPERATURES_UPDATED,
                        device_number,
                        temperatures=readings,
                    )

        if collector.has_errors:
            logger.error(collector.get_summary())

    def _set_state(self, device_number: int, state: ConnectionState) -> None:
        previous = self._states.get(device_number, ConnectionState.UNKNOWN)
        self._states[device_number] = state
        if previous is not state:
            logger.info(f"Device {device_number} is now {state.value}")
            self._observers.notify(
                "on_board_event", BoardEvent.CONNECTION_CHANGED, device_number, state=state
            )

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self) -> None:
        """Start scheduling sweeps. Must be called with an event loop running."""
        if self.is_running:
            logger.warning("Poller already running")
            return
        self._scheduler = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Poller started (every {self.interval}s)")

    def stop(self) -> None:
        """Stop scheduling sweeps. Sweeps already running finish on their own."""
        if self._scheduler is None:
            return
        self._scheduler.cancel()
        self._scheduler = None
        logger.info("Poller stopped")

    async def wait_idle(self) -> None:
        """Wait for in-flight sweeps to finish."""
        while self._sweeps:
            await asyncio.gather(*list(self._sweeps), return_exceptions=True)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            sweep = loop.create_task(self.poll_once())
            self._sweeps.add(sweep)
            sweep.add_done_callback(self._sweeps.discard)
            await asyncio.sleep(self.interval)
