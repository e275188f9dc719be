"""Address translation between the visual grid and the serpentine LED chain.

The boards are wired from one continuous strip that snakes up and down
the columns:

::

    visual row 0 (top)     col 0   col 1   col 2
                             7       8      23
                             6       9      22
                             .       .       .
                             1      14      17
    visual row 7 (bottom)    0      15      16
                             ^       v       ^

Even columns run bottom-to-top in hardware order, odd columns run
top-to-bottom. The UI's row 0 is the visual top while hardware index 0
is the physical bottom-left LED.
"""

from collections.abc import Iterator


def _check_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Invalid matrix size: {width}x{height}")


def led_index(row: int, col: int, width: int, height: int) -> int:
    """
    Convert a visual (row, col) coordinate to the hardware wire index.

    Args:
        row: Visual row, 0 is the top row
        col: Visual column, 0 is the leftmost column
        width: Number of columns in the matrix
        height: Number of rows in the matrix

    Returns:
        Position of the LED in the serpentine chain (0 to width*height - 1)

    Raises:
        ValueError: If the coordinate lies outside the matrix

    Example:
        >>> led_index(7, 0, 22, 8)
        0
        >>> led_index(0, 1, 22, 8)
        8
    """
    _check_dimensions(width, height)
    if not (0 <= row < height and 0 <= col < width):
        raise ValueError(
            f"Invalid coordinates: ({row}, {col}). Must be within {height} rows x {width} columns."
        )

    adjusted_row = (height - 1) - row
    if col % 2 == 0:
        return col * height + adjusted_row
    return col * height + row


def led_position(index: int, width: int, height: int) -> tuple[int, int]:
    """
    Convert a hardware wire index back to its visual (row, col) coordinate.

    Inverse of led_index(): the quotient of index // height is the column,
    and its parity decides which way the column runs.

    Args:
        index: Position in the serpentine chain
        width: Number of columns in the matrix
        height: Number of rows in the matrix

    Returns:
        (row, col) tuple

    Raises:
        ValueError: If the index lies outside the chain
    """
    _check_dimensions(width, height)
    if not 0 <= index < width * height:
        raise ValueError(f"Invalid LED index: {index}. Must be 0-{width * height - 1}.")

    col, offset = divmod(index, height)
    if col % 2 == 0:
        return (height - 1 - offset, col)
    return (offset, col)


class SerpentineMapper:
    """
    Bidirectional mapping for one matrix size.

    Thin convenience wrapper so callers can carry the dimensions around
    instead of passing width/height to every call.
    """

    def __init__(self, width: int = 22, height: int = 8):
        _check_dimensions(width, height)
        self.width = width
        self.height = height

    @property
    def size(self) -> int:
        """Total number of LEDs."""
        return self.width * self.height

    def index(self, row: int, col: int) -> int:
        """Visual coordinate -> hardware index."""
        return led_index(row, col, self.width, self.height)

    def position(self, index: int) -> tuple[int, int]:
        """Hardware index -> visual coordinate."""
        return led_position(index, self.width, self.height)

    def coordinates(self) -> Iterator[tuple[int, int]]:
        """Yield every (row, col) in row-major visual order."""
        for row in range(self.height):
            for col in range(self.width):
                yield (row, col)

    def __repr__(self) -> str:
        return f"SerpentineMapper(width={self.width}, height={self.height})"
