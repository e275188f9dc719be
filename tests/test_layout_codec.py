"""Tests for layout encoding, decoding, saving and loading."""

import json
import random
from unittest.mock import Mock

import pytest

from pixelboard.core.layout import decode_matrix, encode_matrix, validate_document
from pixelboard.exceptions import LayoutDocumentError
from pixelboard.models import ChannelOrder, Color, LedMatrix
from pixelboard.protocols import BoardEvent, BoardObserver


def random_matrix(seed: int = 7) -> LedMatrix:
    rng = random.Random(seed)
    matrix = LedMatrix.create_empty()
    for cell in matrix.cells:
        cell.color = Color(r=rng.randrange(256), g=rng.randrange(256), b=rng.randrange(256))
    return matrix


class TestCodec:
    """Pure encode/decode."""

    def test_document_length(self, matrix):
        assert len(encode_matrix(matrix)) == 3 * 22 * 8

    def test_grb_is_default_wire_order(self, matrix):
        matrix.set_color_at(0, Color(r=1, g=2, b=3))
        assert encode_matrix(matrix)[:3] == [2, 1, 3]

    def test_rgb_order(self, matrix):
        matrix.set_color_at(0, Color(r=1, g=2, b=3))
        assert encode_matrix(matrix, ChannelOrder.RGB)[:3] == [1, 2, 3]

    def test_document_indexed_by_hardware_position(self, matrix):
        """Visual (0, 1) is LED 8, so its triple starts at value 24."""
        matrix.set_color(0, 1, Color(r=9, g=0, b=0))
        values = encode_matrix(matrix)
        assert values[24:27] == [0, 9, 0]

    @pytest.mark.parametrize("order", list(ChannelOrder))
    def test_round_trip(self, order):
        original = random_matrix()
        restored = LedMatrix.create_empty()

        decode_matrix(encode_matrix(original, order), restored, order)

        assert restored.snapshot() == original.snapshot()

    def test_decode_sets_active(self, matrix):
        values = [0] * (3 * 176)
        values[0:3] = [255, 0, 0]  # green in GRB
        decode_matrix(values, matrix)
        assert matrix.cell(7, 0).color == Color(r=0, g=255, b=0)
        assert matrix.cell(7, 0).active
        assert len(matrix.active_cells) == 1


class TestMalformedDocuments:
    """Malformed documents are rejected and leave the matrix untouched."""

    @pytest.mark.parametrize(
        "values",
        [
            [0] * 12,
            [0] * (3 * 176 + 1),
            [256] + [0] * (3 * 176 - 1),
            [-1] + [0] * (3 * 176 - 1),
            ["12"] + [0] * (3 * 176 - 1),
            [1.5] + [0] * (3 * 176 - 1),
        ],
        ids=["short", "long", "too-big", "negative", "string", "float"],
    )
    def test_rejected(self, values):
        matrix = random_matrix()
        before = matrix.snapshot()

        with pytest.raises(LayoutDocumentError):
            decode_matrix(values, matrix)

        assert matrix.snapshot() == before

    def test_length_error_message(self):
        with pytest.raises(LayoutDocumentError) as exc_info:
            validate_document([0] * 12, 22, 8, source="smiley.json")
        assert "expected 528 values, got 12" in exc_info.value.user_message
        assert exc_info.value.source == "smiley.json"

    def test_not_a_sequence(self):
        with pytest.raises(LayoutDocumentError):
            validate_document(None, 22, 8)


@pytest.mark.asyncio
class TestSaveLoad:
    """Save/load through the session and the simulated backend."""

    async def test_save_clear_load_round_trip(self, registered_session, temp_dir):
        session = registered_session
        colors = {(0, 0): Color(r=255, g=0, b=0), (3, 7): Color(r=0, g=0, b=255), (7, 21): Color(r=1, g=2, b=3)}
        for (row, col), color in colors.items():
            session.set_picker_color(1, color)
            session.paint.click(1, row, col)
        await session.paint.drain()
        before = session.matrix(1).snapshot()

        path = temp_dir / "layout.json"
        assert await session.save_layout(1, path)
        assert await session.clear_board(1)
        assert not session.matrix(1).active_cells

        assert await session.load_layout(1, path)
        assert session.matrix(1).snapshot() == before

    async def test_saved_file_is_flat_grb_array(self, registered_session, temp_dir):
        session = registered_session
        session.set_picker_color(1, Color(r=10, g=20, b=30))
        session.paint.click(1, 7, 0)
        await session.paint.drain()

        path = temp_dir / "layout.json"
        await session.save_layout(1, path)

        data = json.loads(path.read_text())
        assert isinstance(data, list)
        assert len(data) == 528
        assert data[:3] == [20, 10, 30]

    async def test_load_notifies_observers(self, registered_session, temp_dir):
        session = registered_session
        path = temp_dir / "layout.json"
        await session.save_layout(1, path)

        observer = Mock(spec=BoardObserver)
        session.register_observer(observer)
        await session.load_layout(1, path)

        observer.on_board_event.assert_called_with(BoardEvent.LAYOUT_LOADED, 1, path=path)

    async def test_cancelled_save_is_noop(self, registered_session, temp_dir):
        assert await registered_session.save_layout(1, None) is False
        assert list(temp_dir.iterdir()) == []

    async def test_cancelled_load_is_noop(self, registered_session, red):
        session = registered_session
        session.set_picker_color(1, red)
        session.paint.click(1, 0, 0)
        before = session.matrix(1).snapshot()

        assert await session.load_layout(1, None) is False
        assert session.matrix(1).snapshot() == before

    async def test_malformed_file_leaves_matrix(self, registered_session, temp_dir, red):
        session = registered_session
        session.set_picker_color(1, red)
        session.paint.click(1, 0, 0)
        await session.paint.drain()
        before = session.matrix(1).snapshot()

        path = temp_dir / "bad.json"
        path.write_text(json.dumps([1, 2, 3]))

        assert await session.load_layout(1, path) is False
        assert session.matrix(1).snapshot() == before

    async def test_malformed_document_from_backend_is_rejected(self, registered_session, caplog):
        """A backend that returns a short document cannot corrupt the matrix."""
        session = registered_session

        async def short_layout(serial_number, path):
            return [0, 0, 0]

        session.backend.load_led_layout = short_layout
        assert await session.load_layout(1, session.config.layouts_dir / "x.json") is False
        assert "Failed to load layout onto device 1" in caplog.text

    async def test_unregistered_device(self, session, temp_dir):
        assert await session.save_layout(5, temp_dir / "layout.json") is False
        assert await session.load_layout(5, temp_dir / "layout.json") is False
