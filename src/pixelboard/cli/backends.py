"""Backend selection for the command line."""

import importlib
import logging

import click

from pixelboard.devices import DeviceBackend, SimulatedBackend
from pixelboard.models import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "pixelboard.devices.simulated:SimulatedBackend"


def load_backend_factory(reference: str):
    """
    Resolve a ``module:attr`` reference to a backend class or factory.

    Raises:
        click.BadParameter: If the reference cannot be imported
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"Expected 'module:attr', got {reference!r}", param_hint="--backend")

    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"Cannot load backend {reference!r}: {e}", param_hint="--backend") from e


def create_backend(reference: str, device_count: int, config: AppConfig) -> DeviceBackend:
    """
    Build the backend named on the command line.

    The simulated backend gets its board count and geometry from the
    options and config; any other factory is called without arguments.
    """
    factory = load_backend_factory(reference)

    if isinstance(factory, type) and issubclass(factory, SimulatedBackend):
        backend = factory(
            device_count=device_count,
            width=config.matrix_width,
            height=config.matrix_height,
            sensor_count=config.sensor_count,
        )
    else:
        backend = factory()

    logger.info(f"Using backend {reference}")
    return backend
