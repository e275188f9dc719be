"""Modal for naming a discovered board and choosing its device number."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select

from pixelboard.models import DeviceInfo


class RegisterDeviceScreen(ModalScreen[tuple[str, int, str] | None]):
    """
    Register a board.

    Dismisses with ``(serial_number, device_number, friendly_name)`` or
    None when cancelled.
    """

    DEFAULT_CSS = """
    RegisterDeviceScreen {
        align: center middle;
    }

    RegisterDeviceScreen > Vertical {
        width: 70;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    RegisterDeviceScreen Select, RegisterDeviceScreen Input {
        margin-bottom: 1;
    }

    RegisterDeviceScreen Horizontal {
        height: auto;
        align: center middle;
    }

    RegisterDeviceScreen Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, devices: list[DeviceInfo], next_device_number: int) -> None:
        """
        Initialize the dialog.

        Args:
            devices: Boards from the last discovery
            next_device_number: Device number offered by default
        """
        super().__init__()
        self.devices = devices
        self.next_device_number = next_device_number

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("[b]Connect Device[/b]")
            yield Select(
                [(str(device), device.serial_number) for device in self.devices],
                prompt="Select a board",
                id="serial-select",
            )
            yield Input(placeholder="Enter friendly name", id="name-input")
            yield Input(
                value=str(self.next_device_number),
                placeholder="Enter device number",
                type="integer",
                id="number-input",
            )
            yield Label("", id="hint")
            with Horizontal():
                yield Button("Connect", id="connect-btn", variant="primary")
                yield Button("Cancel", id="cancel-btn", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "cancel-btn":
            self.dismiss(None)
            return

        serial = self.query_one("#serial-select", Select).value
        name = self.query_one("#name-input", Input).value.strip()
        number_text = self.query_one("#number-input", Input).value.strip()
        hint = self.query_one("#hint", Label)

        if serial is Select.BLANK:
            hint.update("[red]Please select a board.[/red]")
        elif not name:
            hint.update("[red]Please enter a friendly name.[/red]")
        elif not number_text.isdigit() or int(number_text) < 1:
            hint.update("[red]Device number must be 1 or more.[/red]")
        else:
            self.dismiss((str(serial), int(number_text), name))

    def action_cancel(self) -> None:
        self.dismiss(None)
