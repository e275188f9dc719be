"""Status bar widget showing the focused device, tool, color and paint state."""

from textual.widgets import Static

from pixelboard.models import Color, Tool
from pixelboard.protocols import PaintState


class StatusBar(Static):
    """Single-line summary of the painting context."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StatusBar.painting {
        background: $accent;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._device: str = "No device"
        self._tool = Tool.PENCIL
        self._color = Color(r=255, g=255, b=255)
        self._paint_state = PaintState.IDLE
        self._devices_found = 0

    def on_mount(self) -> None:
        self._update_display()

    def update_state(
        self,
        device: str,
        tool: Tool,
        color: Color,
        state: PaintState,
        devices_found: int,
    ) -> None:
        """
        Update all status information.

        Args:
            device: Display name of the focused device
            tool: Its active tool
            color: Its color-picker value
            state: Paint state machine state
            devices_found: Boards reported by the last discovery
        """
        self._device = device
        self._tool = tool
        self._color = color
        self._paint_state = state
        self._devices_found = devices_found
        self._update_display()

    def _update_display(self) -> None:
        self.set_class(self._paint_state is PaintState.PAINTING, "painting")

        tool_text = "✏ pencil" if self._tool is Tool.PENCIL else "⌫ eraser"
        hex_color = self._color.to_hex()
        parts = [
            self._device,
            tool_text,
            f"[{hex_color}]██[/] {hex_color}",
            f"{self._devices_found} board(s) found",
        ]
        self.update(" | ".join(parts))
