"""Panel for one device: title, matrix and sensor line."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Label

from pixelboard.models import ConnectionState, LedMatrix, Tool

from .led_matrix import LedMatrixWidget


class DevicePanel(Vertical):
    """Window for a single device."""

    DEFAULT_CSS = """
    DevicePanel {
        height: auto;
        border: solid $surface;
        padding: 0 1;
        margin-bottom: 1;
    }

    DevicePanel.focused {
        border: double $warning 80%;
    }

    DevicePanel.disconnected .title {
        color: $error;
    }

    DevicePanel .sensors {
        color: $text-muted;
    }
    """

    def __init__(self, device_number: int, matrix: LedMatrix) -> None:
        super().__init__(id=f"device-{device_number}")
        self.device_number = device_number
        self._matrix = matrix
        self._display_name = f"Device {device_number}"
        self._tool = Tool.PENCIL
        self._connection = ConnectionState.UNKNOWN
        self._temperatures: list[float] | None = None

    def compose(self) -> ComposeResult:
        yield Label(self._title_text(), classes="title")
        yield LedMatrixWidget(self.device_number, self._matrix)
        yield Label(self._sensor_text(), classes="sensors")

    @property
    def matrix_widget(self) -> LedMatrixWidget:
        return self.query_one(LedMatrixWidget)

    def set_name(self, name: str) -> None:
        self._display_name = name
        self._refresh_title()

    def set_tool(self, tool: Tool) -> None:
        self._tool = tool
        self._refresh_title()

    def set_connection(self, state: ConnectionState) -> None:
        self._connection = state
        self.set_class(state is ConnectionState.DISCONNECTED, "disconnected")
        self._refresh_title()

    def set_temperatures(self, temperatures: list[float]) -> None:
        self._temperatures = temperatures
        if self.is_mounted:
            self.query_one(".sensors", Label).update(self._sensor_text())

    def _refresh_title(self) -> None:
        if self.is_mounted:
            self.query_one(".title", Label).update(self._title_text())

    def _title_text(self) -> str:
        return f"[b]{self._display_name}[/b]  {self._tool.value}  [dim]{self._connection.value}[/dim]"

    def _sensor_text(self) -> str:
        if not self._temperatures:
            return "Temperatures: -"
        readings = "  ".join(f"T{i + 1} {value:.1f}°C" for i, value in enumerate(self._temperatures))
        return f"Temperatures: {readings}"
