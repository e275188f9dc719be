"""Grid widget showing one device's LED matrix."""

from textual import events
from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message
from textual.widgets import Static

from pixelboard.models import Color, LedMatrix


class LedCellWidget(Static):
    """
    One LED (presentation only).

    Turns raw mouse events into pointer messages for the matrix; painting
    decisions are made by the PaintCoordinator, not here.
    """

    DEFAULT_CSS = """
    LedCellWidget {
        width: 100%;
        height: 100%;
        background: #000000;
    }

    LedCellWidget.active {
        border: none;
    }
    """

    class PointerDown(Message):
        """Pointer pressed on this cell."""

        def __init__(self, row: int, col: int):
            super().__init__()
            self.row = row
            self.col = col

    class PointerEnter(Message):
        """Pointer moved onto this cell."""

        def __init__(self, row: int, col: int):
            super().__init__()
            self.row = row
            self.col = col

    class Clicked(Message):
        """Pointer pressed and released on this cell."""

        def __init__(self, row: int, col: int):
            super().__init__()
            self.row = row
            self.col = col

    def __init__(self, row: int, col: int, hardware_index: int) -> None:
        super().__init__(" ")
        self.row = row
        self.col = col
        self.hardware_index = hardware_index
        self.tooltip = f"({row}, {col}) LED {hardware_index}"

    def show_color(self, color: Color) -> None:
        """Render a color."""
        self.styles.background = color.to_hex()
        self.set_class(not color.is_off, "active")

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self.post_message(self.PointerDown(self.row, self.col))

    def on_enter(self, event: events.Enter) -> None:
        self.post_message(self.PointerEnter(self.row, self.col))

    def on_click(self, event: events.Click) -> None:
        self.post_message(self.Clicked(self.row, self.col))


class LedMatrixWidget(Container):
    """
    Grid of LED cells for one device, in visual order (row 0 at the top).

    Cell messages are re-posted with the device number attached so the
    app can route them to the PaintCoordinator.
    """

    DEFAULT_CSS = """
    LedMatrixWidget {
        layout: grid;
        grid-gutter: 0 1;
        height: auto;
        width: auto;
        padding: 0 1;
    }

    LedMatrixWidget > LedCellWidget {
        width: 2;
        height: 1;
    }
    """

    class CellPointer(Message):
        """A pointer message from one of this device's cells."""

        def __init__(self, device_number: int, kind: str, row: int, col: int):
            super().__init__()
            self.device_number = device_number
            self.kind = kind  # "down", "enter" or "click"
            self.row = row
            self.col = col

    def __init__(self, device_number: int, matrix: LedMatrix, **kwargs) -> None:
        """
        Initialize the grid.

        Args:
            device_number: Device this grid belongs to
            matrix: Matrix to render (read only)
        """
        super().__init__(**kwargs)
        self.device_number = device_number
        self._matrix = matrix
        self.cell_widgets: dict[tuple[int, int], LedCellWidget] = {}
        self.styles.grid_size_columns = matrix.width
        self.styles.grid_size_rows = matrix.height

    def compose(self) -> ComposeResult:
        for row in self._matrix.rows():
            for cell in row:
                widget = LedCellWidget(cell.row, cell.col, cell.hardware_index)
                self.cell_widgets[cell.position] = widget
                yield widget

    def on_mount(self) -> None:
        self.refresh_all()

    def update_cell(self, row: int, col: int, color: Color) -> None:
        """Repaint one cell."""
        widget = self.cell_widgets.get((row, col))
        if widget is not None:
            widget.show_color(color)

    def refresh_all(self) -> None:
        """Repaint every cell from the matrix."""
        for cell in self._matrix.cells:
            self.update_cell(cell.row, cell.col, cell.color)

    def on_led_cell_widget_pointer_down(self, message: LedCellWidget.PointerDown) -> None:
        message.stop()
        self.post_message(self.CellPointer(self.device_number, "down", message.row, message.col))

    def on_led_cell_widget_pointer_enter(self, message: LedCellWidget.PointerEnter) -> None:
        message.stop()
        self.post_message(self.CellPointer(self.device_number, "enter", message.row, message.col))

    def on_led_cell_widget_clicked(self, message: LedCellWidget.Clicked) -> None:
        message.stop()
        self.post_message(self.CellPointer(self.device_number, "click", message.row, message.col))
