"""Device identity models and backend request/response shapes."""

from pydantic import BaseModel, Field

from .color import Color
from .enums import Tool


class DeviceRecord(BaseModel):
    """A board the user has registered under a logical device number."""

    device_number: int = Field(ge=1, description="Logical device number (1-based)")
    serial_number: str = Field(min_length=1, description="Hardware serial number")
    friendly_name: str | None = Field(default=None, description="User-assigned label")
    tool: Tool = Field(default=Tool.PENCIL, description="Active paint tool")

    @property
    def display_name(self) -> str:
        """Friendly name if set, otherwise 'Device N'."""
        return self.friendly_name or f"Device {self.device_number}"


class DeviceInfo(BaseModel):
    """One entry returned by the find-devices command."""

    manufacturer: str
    product: str
    serial_number: str

    def __str__(self) -> str:
        return f"{self.manufacturer} {self.product} (Serial: {self.serial_number})"


class LedColor(BaseModel):
    """Payload of the update-led-color command."""

    index: int = Field(ge=0, description="Hardware (serpentine) index")
    color: Color
