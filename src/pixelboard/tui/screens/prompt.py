"""Modal prompt for a single line of text (file paths, colors)."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class TextPromptScreen(ModalScreen[str | None]):
    """
    Ask for one value.

    Dismisses with the stripped text, or None when cancelled (Escape,
    Cancel, or an empty submit), which callers treat as "nothing chosen".
    """

    DEFAULT_CSS = """
    TextPromptScreen {
        align: center middle;
    }

    TextPromptScreen > Vertical {
        width: 70;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    TextPromptScreen Label {
        margin-bottom: 1;
    }

    TextPromptScreen Input {
        margin-bottom: 1;
    }

    TextPromptScreen Horizontal {
        height: auto;
        align: center middle;
    }

    TextPromptScreen Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, title: str, prompt: str, value: str = "", placeholder: str = "") -> None:
        """
        Initialize the prompt.

        Args:
            title: Dialog title
            prompt: Question shown above the input
            value: Initial input value
            placeholder: Placeholder shown while the input is empty
        """
        super().__init__()
        self.title_text = title
        self.prompt = prompt
        self.initial_value = value
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(f"[b]{self.title_text}[/b]")
            yield Label(self.prompt)
            yield Input(value=self.initial_value, placeholder=self.placeholder, id="prompt-input")
            with Horizontal():
                yield Button("OK", id="ok-btn", variant="primary")
                yield Button("Cancel", id="cancel-btn", variant="default")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value.strip() or None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "ok-btn":
            self.dismiss(self.query_one(Input).value.strip() or None)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
