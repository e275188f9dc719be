"""Color model for LED control."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    Channel order here is always r, g, b. The wire order used by the
    board (green first) is applied only when a matrix is encoded into a
    layout document.

    The model is frozen so colors can be shared between cells and used
    as dict keys.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse a CSS hex color string ('#FF8800' or 'FF8800').

        Raises:
            ValueError: If the string is not a 6-digit hex color
        """
        text = value.strip().removeprefix("#")
        if len(text) != 6:
            raise ValueError(f"Expected a 6-digit hex color, got {value!r}")
        try:
            r, g, b = (int(text[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"Expected a 6-digit hex color, got {value!r}") from None
        return cls(r=r, g=g, b=b)

    @property
    def is_off(self) -> bool:
        """True if every channel is zero."""
        return self.r == 0 and self.g == 0 and self.b == 0

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Example:
            >>> Color(r=255, g=0, b=0).to_hex()
            '#FF0000'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
