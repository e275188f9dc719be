"""Layout document model.

A layout document is a bare JSON array of channel values, three per LED,
indexed by hardware position. There is no header: width and height are
known out of band.
"""

from typing import Annotated

from pydantic import Field, RootModel

ChannelValue = Annotated[int, Field(ge=0, le=255)]


class LayoutDocument(RootModel[list[ChannelValue]]):
    """Flat sequence of 8-bit channel values."""

    def __len__(self) -> int:
        return len(self.root)

    @property
    def values(self) -> list[int]:
        """The raw channel values."""
        return self.root

    def expected_length(self, width: int, height: int) -> int:
        """Number of values a full document for this matrix size holds."""
        return 3 * width * height

    def fits(self, width: int, height: int) -> bool:
        """True if the document covers exactly one matrix of this size."""
        return len(self.root) == self.expected_length(width, height)
