"""Tests for the in-memory board backend."""

import json

import numpy as np
import pytest

from pixelboard.devices import DeviceBackend, SimulatedBackend
from pixelboard.devices.simulated import GAMMA_LUT
from pixelboard.exceptions import BackendCommandError, DeviceNotFoundError, LayoutDocumentError
from pixelboard.models import Color, LedColor


@pytest.mark.asyncio
class TestSimulatedBackend:
    """Command behavior of simulated boards."""

    async def test_satisfies_protocol(self, backend):
        assert isinstance(backend, DeviceBackend)

    async def test_find_devices(self, backend):
        devices = await backend.find_devices()
        assert [device.serial_number for device in devices] == ["12345", "12346", "12347"]
        assert devices[0].manufacturer == "Raspberry Pi"
        assert devices[0].product == "Pico"

    async def test_unplugged_board_disappears(self, backend):
        backend.unplug("12346")
        devices = await backend.find_devices()
        assert "12346" not in [device.serial_number for device in devices]

        with pytest.raises(DeviceNotFoundError):
            await backend.connect_to_device("12346")

        backend.plug("12346")
        assert await backend.connect_to_device("12346")

    async def test_unknown_serial(self, backend):
        with pytest.raises(DeviceNotFoundError):
            await backend.get_temperature("nope")

    async def test_friendly_name(self, backend):
        await backend.set_friendly_name("12345", "desk")
        assert backend.friendly_name("12345") == "desk"

    async def test_temperatures_per_sensor(self, backend):
        readings = await backend.get_temperature("12345")
        assert len(readings) == 4
        assert all(20.0 < value < 40.0 for value in readings)

    async def test_update_led_writes_grb(self, backend):
        await backend.update_led_color("12345", LedColor(index=2, color=Color(r=1, g=2, b=3)))
        assert backend.frame("12345")[6:9] == bytes((2, 1, 3))

    async def test_update_led_out_of_range(self, backend):
        with pytest.raises(BackendCommandError):
            await backend.update_led_color("12345", LedColor(index=176, color=Color.off()))

    async def test_clear_board(self, backend):
        await backend.update_led_color("12345", LedColor(index=0, color=Color(r=9, g=9, b=9)))
        await backend.clear_board("12345")
        assert backend.frame("12345") == bytes(backend.buffer_size)

    async def test_save_writes_frame(self, backend, temp_dir):
        await backend.update_led_color("12345", LedColor(index=1, color=Color(r=4, g=5, b=6)))
        path = temp_dir / "layout.json"

        await backend.save_led_layout("12345", path)

        data = json.loads(path.read_text())
        assert len(data) == 528
        assert data[3:6] == [5, 4, 6]

    async def test_load_replaces_frame(self, backend, temp_dir):
        path = temp_dir / "layout.json"
        values = [7] * 528
        path.write_text(json.dumps(values))

        assert await backend.load_led_layout("12346", path) == values
        assert backend.frame("12346") == bytes(values)

    async def test_load_wrong_length(self, backend, temp_dir):
        path = temp_dir / "short.json"
        path.write_text(json.dumps([0] * 9))

        with pytest.raises(LayoutDocumentError):
            await backend.load_led_layout("12345", path)
        assert backend.frame("12345") == bytes(backend.buffer_size)

    async def test_process_image_returns_hardware_order(self, backend, solid_image):
        pixels = await backend.process_image("12345", solid_image, 22, 8, True)

        assert len(pixels) == 176
        assert all(pixel == Color(r=255, g=255, b=255) for pixel in pixels)
        assert backend.frame("12345") == bytes([255] * 528)

    async def test_process_image_other_size_leaves_buffer(self, backend, solid_image):
        pixels = await backend.process_image("12345", solid_image, 4, 2, True)
        assert len(pixels) == 8
        assert backend.frame("12345") == bytes(backend.buffer_size)

    async def test_process_image_bad_file(self, backend, temp_dir):
        path = temp_dir / "broken.png"
        path.write_bytes(b"not a png")

        with pytest.raises(BackendCommandError) as exc_info:
            await backend.process_image("12345", path, 22, 8, True)
        assert "Could not open the image file" in exc_info.value.technical_message

    async def test_firmware_update_counted(self, backend):
        await backend.update_firmware("12347")
        await backend.update_firmware("12347")
        assert backend.firmware_updates == {"12347": 2}

    async def test_is_test_device(self, backend):
        assert backend.is_test_device("12345")
        assert not backend.is_test_device("99999")

    async def test_latency(self):
        slow = SimulatedBackend(device_count=1, latency=0.01)
        assert await slow.connect_to_device("12345")


class TestGamma:
    """The gamma table applied to images."""

    def test_endpoints(self):
        assert GAMMA_LUT[0] == 0
        assert GAMMA_LUT[255] == 255

    def test_monotonic(self):
        assert np.all(np.diff(GAMMA_LUT.astype(int)) >= 0)

    def test_darkens_midtones(self):
        assert GAMMA_LUT[128] < 64
