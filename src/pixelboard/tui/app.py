"""Main TUI application: one painting window per device."""

import logging
import os
from pathlib import Path
from typing import Any

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Footer, Header

from pixelboard.core import BoardSession
from pixelboard.models import Color, ConnectionState, DeviceRecord, Tool
from pixelboard.protocols import BoardEvent

from .decorators import handle_action_errors, require_device
from .screens import RegisterDeviceScreen, TextPromptScreen
from .widgets import DevicePanel, LedMatrixWidget, StatusBar

logger = logging.getLogger(__name__)


def resolve_prompt_path(value: str | None, suffix: str | None) -> Path | None:
    """
    Expand a path prompt answer into a file path.

    None stays None (the prompt was cancelled). ``suffix`` is added when
    the file name has none.

    Raises:
        ValueError: If the answer names a directory instead of a file
    """
    if value is None:
        return None
    path = Path(value.strip()).expanduser()
    folder = value.rstrip().endswith(("/", os.sep)) or path.is_dir()
    if folder or path.name in ("", ".."):
        raise ValueError(f"Choose a file, not a folder: {value}")
    if suffix and not path.suffix:
        path = path.with_suffix(suffix)
    return path


class PixelBoardApp(App):
    """
    Textual TUI for LED boards.

    This is a pure UI layer: every action goes through the BoardSession,
    and widgets are updated only from the session's board events
    (implements BoardObserver via structural subtyping).

    Mouse gestures on a matrix become pointer events for the session's
    PaintCoordinator. Releasing the mouse anywhere ends painting.
    """

    TITLE = "Pixel Board"

    BINDINGS = [
        Binding("p", "select_tool('pencil')", "Pencil", show=True),
        Binding("e", "select_tool('eraser')", "Eraser", show=True),
        Binding("k", "pick_color", "Color", show=True),
        Binding("c", "clear_board", "Clear", show=True),
        Binding("ctrl+s", "save_layout", "Save", show=True),
        Binding("ctrl+o", "load_layout", "Load", show=True),
        Binding("i", "load_image", "Image", show=True),
        Binding("t", "read_temperatures", "Temps", show=False),
        Binding("f", "update_firmware", "Firmware", show=False),
        Binding("r", "refresh_devices", "Refresh", show=True),
        Binding("n", "register_device", "Connect", show=True),
        Binding("d", "next_device", "Next Device", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    DEFAULT_CSS = """
    #devices {
        height: 1fr;
    }
    """

    def __init__(self, session: BoardSession, auto_register_test_devices: bool = True):
        """
        Initialize the TUI.

        Args:
            session: Session that owns all board state
            auto_register_test_devices: Register simulated boards on startup
        """
        super().__init__()
        self.session = session
        self.config = session.config
        self.auto_register_test_devices = auto_register_test_devices
        self.focused_device: int | None = None
        self.panels: dict[int, DevicePanel] = {}
        logger.info("PixelBoard TUI created")

    # =================================================================
    # Lifecycle
    # =================================================================

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield VerticalScroll(id="devices")
        yield StatusBar()
        yield Footer()

    async def on_mount(self) -> None:
        logger.info("TUI mounting")
        self.session.register_observer(self)
        await self.action_refresh_devices()
        if self.auto_register_test_devices:
            await self._register_test_devices()
        self.session.start()

    async def on_unmount(self) -> None:
        self.session.unregister_observer(self)
        await self.session.stop()
        logger.info("TUI unmounted")

    # =================================================================
    # BoardObserver
    # =================================================================

    def on_board_event(self, event: BoardEvent, device_number: int | None, **data: Any) -> None:
        """Apply a session change to the widgets."""
        if event is BoardEvent.DEVICES_DISCOVERED:
            self._sync_panels()
            self._update_status()
            return

        panel = self.panels.get(device_number) if device_number is not None else None

        if event is BoardEvent.DEVICE_REGISTERED:
            self._sync_panels()
            record: DeviceRecord = data["record"]
            if device_number in self.panels:
                self.panels[device_number].set_name(record.display_name)
        elif panel is None:
            return
        elif event is BoardEvent.CELL_CHANGED:
            panel.matrix_widget.update_cell(data["row"], data["col"], data["color"])
        elif event in (BoardEvent.BOARD_CLEARED, BoardEvent.LAYOUT_LOADED, BoardEvent.IMAGE_PROJECTED):
            panel.matrix_widget.refresh_all()
        elif event is BoardEvent.TOOL_CHANGED:
            panel.set_tool(data["tool"])
        elif event is BoardEvent.CONNECTION_CHANGED:
            panel.set_connection(data["state"])
        elif event is BoardEvent.TEMPERATURES_UPDATED:
            panel.set_temperatures(data["temperatures"])

        self._update_status()

    # =================================================================
    # Pointer events
    # =================================================================

    def on_led_matrix_widget_cell_pointer(self, message: LedMatrixWidget.CellPointer) -> None:
        """Route a cell gesture to the paint state machine."""
        self._focus_device(message.device_number)
        paint = self.session.paint
        if message.kind == "down":
            paint.pointer_down(message.device_number, message.row, message.col)
        elif message.kind == "enter":
            paint.pointer_enter(message.device_number, message.row, message.col)
        else:
            paint.click(message.device_number, message.row, message.col)
        self._update_status()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        """Releasing the mouse anywhere stops painting on every device."""
        self.session.paint.pointer_release()
        self._update_status()

    # =================================================================
    # Actions
    # =================================================================

    @require_device
    def action_select_tool(self, tool: str) -> None:
        self.session.select_tool(self.focused_device, Tool(tool))

    @require_device
    def action_pick_color(self) -> None:
        device_number = self.focused_device
        current = self.session.paint.picker_color(device_number)

        def handle_color(value: str | None) -> None:
            if value is None:
                return
            try:
                color = Color.from_hex(value)
            except ValueError as e:
                self.notify(str(e), severity="error")
                return
            self.session.set_picker_color(device_number, color)
            self._update_status()

        self._prompt("Pick Color", "Hex color for the pencil:", current.to_hex(), "#FF8800", handle_color)

    @require_device
    @handle_action_errors("clear board")
    async def action_clear_board(self) -> None:
        await self.session.clear_board(self.focused_device)

    @require_device
    def action_save_layout(self) -> None:
        device_number = self.focused_device

        async def handle_path(value: str | None) -> None:
            path = self._path_from_prompt(value, ".json")
            if await self.session.save_layout(device_number, path):
                self.notify(f"Saved layout to: {path}")
            elif path is not None:
                self.notify("Error saving layout (see log)", severity="error")

        default = str(self.config.layouts_dir / f"device-{device_number}.json")
        self._prompt("Save Layout", "Save layout to:", default, "layout.json", handle_path)

    @require_device
    def action_load_layout(self) -> None:
        device_number = self.focused_device

        async def handle_path(value: str | None) -> None:
            path = self._path_from_prompt(value, ".json")
            if await self.session.load_layout(device_number, path):
                self.notify(f"Loaded layout: {path.name}")
            elif path is not None:
                self.notify("Error loading layout file", severity="error")

        self._prompt("Load Layout", "Load layout from:", str(self.config.layouts_dir) + "/", "layout.json", handle_path)

    @require_device
    def action_load_image(self) -> None:
        device_number = self.focused_device

        async def handle_path(value: str | None) -> None:
            path = self._path_from_prompt(value, None)
            if await self.session.load_image(device_number, path):
                self.notify(f"Loaded image: {path.name}")
            elif path is not None:
                self.notify("Error loading image", severity="error")

        self._prompt("Load Image", "Image to show:", "", "picture.png", handle_path)

    @require_device
    async def action_read_temperatures(self) -> None:
        readings = await self.session.read_temperatures(self.focused_device)
        if readings is None:
            self.notify("Could not read temperatures", severity="warning")

    @require_device
    async def action_update_firmware(self) -> None:
        if await self.session.update_firmware(self.focused_device):
            self.notify("Firmware updated")
        else:
            self.notify("Firmware update failed (see log)", severity="error")

    @handle_action_errors("refresh devices")
    async def action_refresh_devices(self) -> None:
        devices = await self.session.refresh_devices()
        self.sub_title = f"{len(devices)} board(s) found"

    def action_register_device(self) -> None:
        if len(self.screen_stack) > 1:
            return
        if not self.session.discovered:
            self.notify("No boards found. Press r to refresh.", severity="warning")
            return

        async def handle_register(result: tuple[str, int, str] | None) -> None:
            if result is None:
                return
            serial_number, device_number, friendly_name = result
            record = await self.session.register_device(device_number, serial_number, friendly_name)
            if record:
                self.notify(f"Connected to {record.display_name}!")
                self._focus_device(device_number)
            else:
                self.notify("Failed to set friendly name.", severity="error")

        next_number = max(self.session.registry.device_numbers, default=0) + 1
        self.push_screen(RegisterDeviceScreen(self.session.discovered, next_number), handle_register)

    def action_next_device(self) -> None:
        numbers = sorted(self.panels)
        if not numbers:
            return
        if self.focused_device not in numbers:
            self._focus_device(numbers[0])
            return
        position = numbers.index(self.focused_device)
        self._focus_device(numbers[(position + 1) % len(numbers)])

    # =================================================================
    # Helpers
    # =================================================================

    def _prompt(self, title: str, prompt: str, value: str, placeholder: str, callback) -> None:
        # Don't open modal if one is already open
        if len(self.screen_stack) > 1:
            return
        self.push_screen(TextPromptScreen(title, prompt, value, placeholder), callback)

    def _path_from_prompt(self, value: str | None, suffix: str | None) -> Path | None:
        """Resolve a prompt answer, telling the user when it is not a file."""
        try:
            return resolve_prompt_path(value, suffix)
        except ValueError as e:
            self.notify(str(e), severity="error")
            return None

    async def _register_test_devices(self) -> None:
        """Register simulated boards so they can be painted right away."""
        for position, device in enumerate(self.session.discovered, start=1):
            serial_number = device.serial_number
            if not self.session.backend.is_test_device(serial_number):
                continue
            if self.session.registry.device_number_for(serial_number) is not None:
                continue
            if position in self.session.registry:
                continue
            name = "testing" if position == 1 else f"testing {position}"
            await self.session.register_device(position, serial_number, name)

        if self.focused_device is None and self.panels:
            self._focus_device(min(self.panels))

    def _sync_panels(self) -> None:
        """Make sure there is a panel for every device number in range."""
        container = self.query_one("#devices", VerticalScroll)
        for device_number in self.session.device_numbers:
            if device_number in self.panels:
                continue
            panel = DevicePanel(device_number, self.session.matrix(device_number))
            record = self.session.registry.get(device_number)
            if record:
                panel.set_name(record.display_name)
                panel.set_tool(record.tool)
            state = self.session.poller.state_for(device_number)
            if state is not ConnectionState.UNKNOWN:
                panel.set_connection(state)
            self.panels[device_number] = panel
            container.mount(panel)

    def _focus_device(self, device_number: int) -> None:
        if self.focused_device == device_number:
            return
        for number, panel in self.panels.items():
            panel.set_class(number == device_number, "focused")
        self.focused_device = device_number
        self._update_status()

    def _update_status(self) -> None:
        try:
            status_bar = self.query_one(StatusBar)
        except NoMatches:
            return
        device_number = self.focused_device
        if device_number is None:
            name = "No device"
        else:
            record = self.session.registry.get(device_number)
            name = record.display_name if record else f"Device {device_number}"
        status_bar.update_state(
            device=name,
            tool=self.session.registry.tool_for(device_number) if device_number else Tool.PENCIL,
            color=self.session.paint.picker_color(device_number) if device_number else self.config.picker_default,
            state=self.session.paint.state,
            devices_found=len(self.session.discovered),
        )
