"""Modal screens for the TUI.

This module hides the design decisions about:
- Confirmation dialog appearance (CSS, layout)
- Button styling and variants
- Keyboard shortcuts for dialogs

To change how confirmations look, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

DIALOG_CSS = """
    align: center middle;
    background: $background 70%;

    #dialog {
        width: 60;
        height: auto;
        max-height: 20;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #dialog-title {
        width: 100%;
        height: auto;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #dialog-prompt {
        width: 100%;
        height: auto;
        text-align: center;
        padding: 1 2;
        background: $panel;
        border: round $border;
        color: $foreground;
        margin-bottom: 1;
    }

    #dialog-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #dialog-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
"""


class ConfirmationScreen(ModalScreen[bool]):
    """Modal yes/no dialog for destructive actions.

    Dismisses with True when the user confirms.
    """

    CSS = "ConfirmationScreen {" + DIALOG_CSS + "}"

    BINDINGS = [
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, title: str, prompt: str, confirm_label: str = "Delete") -> None:
        super().__init__()
        self._title = title
        self._prompt = prompt
        self._confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(self._title, id="dialog-title")
            yield Static(self._prompt, id="dialog-prompt")
            with Horizontal(id="dialog-buttons"):
                yield Button("Cancel", id="btn-cancel", variant="primary")
                yield Button(self._confirm_label, id="btn-confirm", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class RenameScreen(ModalScreen[str | None]):
    """Modal prompt for a new session title.

    Dismisses with the entered title, or None if cancelled.
    """

    CSS = "RenameScreen {" + DIALOG_CSS + "}"

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, current_title: str) -> None:
        super().__init__()
        self._current_title = current_title

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static("Rename Chat", id="dialog-title")
            yield Input(value=self._current_title, id="rename-input")
            with Horizontal(id="dialog-buttons"):
                yield Button("Cancel", id="btn-cancel", variant="primary")
                yield Button("Save", id="btn-save", variant="success")

    def on_mount(self) -> None:
        self.query_one("#rename-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self.dismiss(self.query_one("#rename-input", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
