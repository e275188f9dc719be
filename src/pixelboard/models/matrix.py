"""LED matrix model representing one board's 22x8 grid."""

import logging

from pydantic import BaseModel, Field, model_validator

from pixelboard.mapping import led_index, led_position

from .color import Color

logger = logging.getLogger(__name__)


# Board family dimensions
MATRIX_WIDTH = 22
MATRIX_HEIGHT = 8


class LedCell(BaseModel):
    """A single diode on the matrix."""

    row: int = Field(ge=0, description="Visual row (0 = top)")
    col: int = Field(ge=0, description="Visual column (0 = left)")
    hardware_index: int = Field(ge=0, description="Position in the serpentine chain")
    color: Color = Field(default_factory=Color.off, description="Current color")

    @property
    def active(self) -> bool:
        """True if the LED is lit."""
        return not self.color.is_off

    @property
    def position(self) -> tuple[int, int]:
        """Get (row, col) position as tuple."""
        return (self.row, self.col)


class LedMatrix(BaseModel):
    """
    The visual state of one board.

    Cells are stored in hardware order, so ``cells[i].hardware_index == i``.
    Grid lookups go through the serpentine mapping.
    """

    width: int = Field(default=MATRIX_WIDTH, ge=1, description="Columns")
    height: int = Field(default=MATRIX_HEIGHT, ge=1, description="Rows")
    cells: list[LedCell] = Field(default_factory=list, description="Cells by hardware index")

    @model_validator(mode="after")
    def build_cells(self) -> "LedMatrix":
        """Create blank cells, or check that provided cells cover the chain."""
        size = self.width * self.height
        if not self.cells:
            self.cells = [
                LedCell(row=row, col=col, hardware_index=index)
                for index in range(size)
                for row, col in [led_position(index, self.width, self.height)]
            ]
            return self

        if len(self.cells) != size:
            raise ValueError(f"Matrix must have exactly {size} cells ({self.width}x{self.height})")
        for index, cell in enumerate(self.cells):
            if cell.hardware_index != index or led_index(cell.row, cell.col, self.width, self.height) != index:
                raise ValueError(f"Cell at position {index} does not match the serpentine mapping")
        return self

    @property
    def size(self) -> int:
        """Total number of LEDs."""
        return self.width * self.height

    def cell(self, row: int, col: int) -> LedCell:
        """Get the cell at a visual coordinate."""
        return self.cells[led_index(row, col, self.width, self.height)]

    def cell_at(self, index: int) -> LedCell:
        """Get the cell at a hardware index."""
        if not 0 <= index < self.size:
            raise ValueError(f"Invalid LED index: {index}. Must be 0-{self.size - 1}.")
        return self.cells[index]

    def set_color(self, row: int, col: int, color: Color) -> LedCell:
        """Set the color of the cell at a visual coordinate."""
        cell = self.cell(row, col)
        cell.color = color
        return cell

    def set_color_at(self, index: int, color: Color) -> LedCell:
        """Set the color of the cell at a hardware index."""
        cell = self.cell_at(index)
        cell.color = color
        return cell

    def clear(self) -> None:
        """Turn every LED off."""
        for cell in self.cells:
            cell.color = Color.off()

    @property
    def active_cells(self) -> list[LedCell]:
        """Get all lit cells."""
        return [cell for cell in self.cells if cell.active]

    def snapshot(self) -> dict[tuple[int, int], Color]:
        """Map every visual coordinate to its color."""
        return {cell.position: cell.color for cell in self.cells}

    def rows(self) -> list[list[LedCell]]:
        """Cells in visual row-major order (top row first)."""
        return [[self.cell(row, col) for col in range(self.width)] for row in range(self.height)]

    @classmethod
    def create_empty(cls, width: int = MATRIX_WIDTH, height: int = MATRIX_HEIGHT) -> "LedMatrix":
        """Create a new dark matrix."""
        return cls(width=width, height=height)
