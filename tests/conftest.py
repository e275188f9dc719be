"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np
import pytest
import pytest_asyncio
from PIL import Image

from pixelboard.core import BoardSession
from pixelboard.devices import SimulatedBackend
from pixelboard.models import AppConfig, Color, LedMatrix


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    """Configuration that keeps layouts inside the temp directory."""
    return AppConfig(layouts_dir=temp_dir / "layouts", poll_interval=0.05)


@pytest.fixture
def backend():
    """Three simulated boards: serials 12345, 12346, 12347."""
    return SimulatedBackend(device_count=3)


@pytest.fixture
def session(backend, config):
    """Session with no registered devices."""
    return BoardSession(backend, config)


@pytest_asyncio.fixture
async def registered_session(session):
    """Session with every simulated board registered as device 1..3."""
    await session.refresh_devices()
    for number, serial in enumerate(session.backend.serial_numbers, start=1):
        await session.register_device(number, serial, f"board {number}")
    return session


@pytest.fixture
def matrix():
    """An empty 22x8 matrix."""
    return LedMatrix.create_empty()


@pytest.fixture
def red():
    return Color(r=255, g=0, b=0)


@pytest.fixture
def gradient_image(temp_dir):
    """A 44x16 PNG whose red channel grows left to right and green top to bottom."""
    height, width = 16, 44
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[..., 0] = np.linspace(0, 255, width, dtype=np.uint8)[np.newaxis, :]
    pixels[..., 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, np.newaxis]

    path = temp_dir / "gradient.png"
    Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def solid_image(temp_dir):
    """A 22x8 PNG filled with pure white."""
    path = temp_dir / "white.png"
    Image.new("RGB", (22, 8), (255, 255, 255)).save(path)
    return path
