"""Image projector: paints backend-produced pixels onto a device matrix."""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from pixelboard.devices import DeviceCommands
from pixelboard.model_manager import ObserverManager
from pixelboard.models import Color, LedMatrix
from pixelboard.protocols import BoardEvent, BoardObserver

logger = logging.getLogger(__name__)


class ImageProjector:
    """
    Loads images onto devices.

    The backend resizes the image, gamma corrects it, pushes it to the
    board and returns the pixels already in serpentine order. Walking the
    result with a row-major index ``k = row * width + col`` and giving
    pixel ``k`` to the cell whose hardware index is ``k`` therefore puts
    every pixel where the board shows it.
    """

    def __init__(
        self,
        commands: DeviceCommands,
        matrix_for: Callable[[int], LedMatrix],
        observers: ObserverManager[BoardObserver],
    ):
        self._commands = commands
        self._matrix_for = matrix_for
        self._observers = observers

    def project(self, device_number: int, pixels: Sequence[Color]) -> bool:
        """
        Show a pixel sequence on a device matrix without pushing it to the board.

        Returns:
            False if the sequence does not cover the matrix (it is ignored)
        """
        matrix = self._matrix_for(device_number)
        if len(pixels) != matrix.size:
            logger.error(
                f"Image for device {device_number} has {len(pixels)} pixels, expected {matrix.size}"
            )
            return False

        for row in range(matrix.height):
            for col in range(matrix.width):
                k = row * matrix.width + col
                matrix.set_color_at(k, pixels[k])

        self._observers.notify("on_board_event", BoardEvent.IMAGE_PROJECTED, device_number)
        return True

    async def load_image(self, device_number: int, path: Path | None) -> bool:
        """
        Fit an image to a device and show it.

        Returns:
            True if the image was projected. No path means the user
            cancelled, which is not an error.
        """
        if path is None:
            logger.info(f"Load image for device {device_number} cancelled")
            return False

        matrix = self._matrix_for(device_number)
        pixels = await self._commands.process_image(device_number, path, matrix.width, matrix.height)
        if pixels is None:
            return False

        projected = self.project(device_number, pixels)
        if projected:
            logger.info(f"Projected image {path} onto device {device_number}")
        return projected
