"""
Layout codec: a device matrix to and from a flat layout document.

A document is ``3 * width * height`` channel values, one triple per LED
in hardware (serpentine) order. Each triple uses the wire order of the
board, green first, unless another ChannelOrder is requested.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import ValidationError

from pixelboard.devices import DeviceCommands
from pixelboard.exceptions import LayoutDocumentError
from pixelboard.model_manager import ObserverManager
from pixelboard.models import ChannelOrder, Color, LayoutDocument, LedMatrix
from pixelboard.protocols import BoardEvent, BoardObserver

logger = logging.getLogger(__name__)


def validate_document(
    values: Sequence[int], width: int, height: int, source: str | None = None
) -> LayoutDocument:
    """Check a document against a matrix size, raising LayoutDocumentError."""
    try:
        document = LayoutDocument.model_validate(list(values), strict=True)
    except TypeError as e:
        raise LayoutDocumentError("document is not a sequence of channel values", source=source) from e
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise LayoutDocumentError(f"value {location}: {first['msg']}", source=source) from e

    expected = document.expected_length(width, height)
    if len(document) != expected:
        raise LayoutDocumentError(f"expected {expected} values, got {len(document)}", source=source)
    return document


def encode_matrix(matrix: LedMatrix, order: ChannelOrder = ChannelOrder.GRB) -> list[int]:
    """Flatten a matrix into channel values, walking hardware indices."""
    values: list[int] = []
    for cell in matrix.cells:
        values.extend(order.pack(*cell.color.to_rgb_tuple()))
    return values


def decode_matrix(
    values: Sequence[int],
    matrix: LedMatrix,
    order: ChannelOrder = ChannelOrder.GRB,
    source: str | None = None,
) -> None:
    """
    Write a document's colors onto a matrix.

    The whole document is validated before any cell changes, so a
    rejected document leaves the matrix as it was.

    Args:
        values: Channel values in hardware order
        matrix: Matrix to update
        order: Channel order of each triple
        source: Where the document came from, for error messages

    Raises:
        LayoutDocumentError: If the document is the wrong length or holds
            anything other than integers in 0-255
    """
    data = validate_document(values, matrix.width, matrix.height, source).values

    for row in range(matrix.height):
        for col in range(matrix.width):
            cell = matrix.cell(row, col)
            base = cell.hardware_index * 3
            r, g, b = order.unpack(data[base], data[base + 1], data[base + 2])
            cell.color = Color(r=r, g=g, b=b)


class LayoutCodec:
    """Encodes, decodes, saves and loads whole-matrix layouts for devices."""

    def __init__(
        self,
        commands: DeviceCommands,
        matrix_for: Callable[[int], LedMatrix],
        observers: ObserverManager[BoardObserver],
        order: ChannelOrder = ChannelOrder.GRB,
    ):
        self._commands = commands
        self._matrix_for = matrix_for
        self._observers = observers
        self.order = order

    def encode(self, matrix: LedMatrix) -> list[int]:
        return encode_matrix(matrix, self.order)

    def decode(self, values: Sequence[int], matrix: LedMatrix, source: str | None = None) -> None:
        decode_matrix(values, matrix, self.order, source)

    # =================================================================
    # Save / load
    # =================================================================

    async def save(self, device_number: int, path: Path | None) -> bool:
        """
        Save a device's layout.

        Returns:
            True if the backend wrote the file. No path means the user
            cancelled, which is not an error.
        """
        if path is None:
            logger.info(f"Save layout for device {device_number} cancelled")
            return False

        saved = await self._commands.save_led_layout(device_number, path)
        if saved:
            logger.info(f"Saved layout of device {device_number} to {path}")
        return saved

    async def load(self, device_number: int, path: Path | None) -> bool:
        """
        Load a layout file onto a device and its matrix.

        A backend failure or a rejected document is logged and leaves the
        matrix untouched.

        Returns:
            True if the matrix now shows the loaded layout
        """
        if path is None:
            logger.info(f"Load layout for device {device_number} cancelled")
            return False

        values = await self._commands.load_led_layout(device_number, path)
        if values is None:
            return False

        matrix = self._matrix_for(device_number)
        try:
            self.decode(values, matrix, source=str(path))
        except LayoutDocumentError as e:
            logger.error(f"Failed to load layout onto device {device_number}: {e.technical_message}")
            return False

        logger.info(f"Loaded layout {path} onto device {device_number}")
        self._observers.notify("on_board_event", BoardEvent.LAYOUT_LOADED, device_number, path=path)
        return True
