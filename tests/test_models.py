"""Tests for data models."""

import pytest
from pydantic import ValidationError

from pixelboard.models import (
    AppConfig,
    ChannelOrder,
    Color,
    DeviceInfo,
    DeviceRecord,
    LayoutDocument,
    LedCell,
    LedColor,
    LedMatrix,
    Tool,
)


class TestColor:
    """Test Color model."""

    def test_create_color(self):
        color = Color(r=255, g=128, b=0)
        assert color.to_rgb_tuple() == (255, 128, 0)

    def test_color_validation(self):
        with pytest.raises(ValidationError):
            Color(r=256, g=0, b=0)
        with pytest.raises(ValidationError):
            Color(r=0, g=-1, b=0)

    def test_off(self):
        assert Color.off().is_off
        assert not Color(r=0, g=0, b=1).is_off

    def test_hex_round_trip(self):
        assert Color(r=255, g=136, b=0).to_hex() == "#FF8800"
        assert Color.from_hex("#ff8800") == Color(r=255, g=136, b=0)
        assert Color.from_hex("00FF00") == Color(r=0, g=255, b=0)

    @pytest.mark.parametrize("value", ["", "#FFF", "#GGGGGG", "1234567"])
    def test_bad_hex(self, value):
        with pytest.raises(ValueError):
            Color.from_hex(value)

    def test_frozen(self):
        color = Color(r=1, g=2, b=3)
        with pytest.raises(ValidationError):
            color.r = 5
        assert {color: "x"}[Color(r=1, g=2, b=3)] == "x"


class TestChannelOrder:
    """Test document channel orders."""

    def test_grb(self):
        assert ChannelOrder.GRB.pack(1, 2, 3) == (2, 1, 3)
        assert ChannelOrder.GRB.unpack(2, 1, 3) == (1, 2, 3)

    def test_rgb(self):
        assert ChannelOrder.RGB.pack(1, 2, 3) == (1, 2, 3)
        assert ChannelOrder.RGB.unpack(1, 2, 3) == (1, 2, 3)


class TestLedMatrix:
    """Test LedMatrix model."""

    def test_default_size(self, matrix):
        assert matrix.width == 22
        assert matrix.height == 8
        assert matrix.size == 176
        assert len(matrix.cells) == 176

    def test_cells_in_hardware_order(self, matrix):
        for index, cell in enumerate(matrix.cells):
            assert cell.hardware_index == index

    def test_cell_lookup_uses_serpentine(self, matrix):
        assert matrix.cell(7, 0).hardware_index == 0
        assert matrix.cell(0, 0).hardware_index == 7
        assert matrix.cell(0, 1).hardware_index == 8
        assert matrix.cell(7, 1).hardware_index == 15

    def test_set_color(self, matrix, red):
        cell = matrix.set_color(3, 4, red)
        assert cell.active
        assert matrix.cell(3, 4).color == red
        assert matrix.cell_at(cell.hardware_index).color == red

    def test_cell_at_out_of_range(self, matrix):
        with pytest.raises(ValueError):
            matrix.cell_at(176)

    def test_clear(self, matrix, red):
        matrix.set_color(0, 0, red)
        matrix.clear()
        assert matrix.active_cells == []

    def test_rows_are_visual(self, matrix):
        rows = matrix.rows()
        assert len(rows) == 8
        assert [cell.position for cell in rows[0][:2]] == [(0, 0), (0, 1)]

    def test_custom_size(self):
        small = LedMatrix.create_empty(3, 2)
        assert small.cell(0, 0).hardware_index == 1
        assert small.cell(1, 0).hardware_index == 0

    def test_mismatched_cells_rejected(self):
        cells = [LedCell(row=0, col=0, hardware_index=0)]
        with pytest.raises(ValidationError):
            LedMatrix(width=2, height=1, cells=cells)


class TestDeviceModels:
    """Test device records and command payloads."""

    def test_record_defaults(self):
        record = DeviceRecord(device_number=1, serial_number="12345")
        assert record.tool is Tool.PENCIL
        assert record.display_name == "Device 1"

    def test_record_requires_serial(self):
        with pytest.raises(ValidationError):
            DeviceRecord(device_number=1, serial_number="")

    def test_device_info_str(self):
        info = DeviceInfo(manufacturer="Raspberry Pi", product="Pico", serial_number="12345")
        assert str(info) == "Raspberry Pi Pico (Serial: 12345)"

    def test_led_color_index_non_negative(self):
        with pytest.raises(ValidationError):
            LedColor(index=-1, color=Color.off())


class TestLayoutDocument:
    """Test the layout document model."""

    def test_fits(self):
        document = LayoutDocument([0] * 528)
        assert document.fits(22, 8)
        assert not document.fits(21, 8)

    def test_values_range(self):
        with pytest.raises(ValidationError):
            LayoutDocument([0, 256])


class TestAppConfig:
    """Test application configuration."""

    def test_defaults(self):
        config = AppConfig()
        assert config.poll_interval == 1.0
        assert config.matrix_width == 22
        assert config.matrix_height == 8
        assert config.picker_default == Color(r=255, g=255, b=255)

    def test_default_color_normalized(self):
        assert AppConfig(default_color="ff0000").default_color == "#FF0000"

    def test_bad_default_color(self):
        with pytest.raises(ValidationError):
            AppConfig(default_color="red")

    def test_poll_interval_positive(self):
        with pytest.raises(ValidationError):
            AppConfig(poll_interval=0)

    def test_save_and_load(self, temp_dir):
        path = temp_dir / "config.json"
        AppConfig(poll_interval=0.5, layouts_dir=temp_dir / "layouts").save(path)

        loaded = AppConfig.load_or_default(path)

        assert loaded.poll_interval == 0.5
        assert loaded.layouts_dir == temp_dir / "layouts"
        assert loaded.layouts_dir.is_dir()

