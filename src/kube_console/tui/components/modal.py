"""Confirmation dialog for destructive actions.

The dialog reports the user's answer through a callback and leaves its own
teardown to the caller, so the confirmation workflow decides when the modal
goes away.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

CONFIRM = "confirm"
CANCEL = "cancel"

ButtonVariant = Literal["default", "primary", "success", "warning", "error"]


class ConfirmDialog(ModalScreen[None]):
    """A centered Cancel / Confirm dialog.

    Keyboard Navigation:
    - Tab / Shift+Tab: Move between buttons
    - Enter: Activate focused button
    - Escape: Cancel

    The Cancel button is focused first. The callback is invoked at most once
    with either ``CONFIRM`` or ``CANCEL``.
    """

    DEFAULT_CSS = """
    ConfirmDialog {
        align: center middle;
    }

    ConfirmDialog > Container {
        width: auto;
        max-width: 80%;
        min-width: 40;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $error;
        padding: 1 2;
    }

    ConfirmDialog .dialog-title {
        text-style: bold;
        text-align: center;
        width: 100%;
        margin-bottom: 1;
        color: $text;
    }

    ConfirmDialog .dialog-body {
        width: 100%;
        height: auto;
        margin-bottom: 1;
        padding: 1;
        color: $accent;
    }

    ConfirmDialog .dialog-buttons {
        width: 100%;
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    ConfirmDialog .dialog-buttons Button {
        margin: 0 1;
        min-width: 10;
    }

    ConfirmDialog .dialog-buttons Button:focus {
        text-style: bold reverse;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
        Binding("tab", "focus_next", "Next", show=False),
        Binding("shift+tab", "focus_previous", "Previous", show=False),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        on_answer: Callable[[str], None],
        *,
        confirm_label: str = "OK",
        cancel_label: str = "Cancel",
        confirm_variant: ButtonVariant = "error",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the dialog.

        Args:
            title: Title displayed at the top of the dialog.
            message: The question being asked.
            on_answer: Called once with CONFIRM or CANCEL.
            confirm_label: Label of the confirm button.
            cancel_label: Label of the cancel button.
            confirm_variant: Button variant of the confirm button.
            name: Widget name.
            id: Widget ID.
            classes: CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._title = title
        self._message = message
        self._on_answer = on_answer
        self._confirm_label = confirm_label
        self._cancel_label = cancel_label
        self._confirm_variant = confirm_variant
        self._answered = False

    @property
    def message(self) -> str:
        return self._message

    @property
    def answered(self) -> bool:
        return self._answered

    def compose(self) -> ComposeResult:
        """Compose the dialog layout."""
        with Container():
            yield Label(self._title, classes="dialog-title")
            with Vertical(classes="dialog-body"):
                yield Static(self._message, markup=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button(self._cancel_label, id=f"dialog-btn-{CANCEL}", variant="default")
                yield Button(
                    self._confirm_label,
                    id=f"dialog-btn-{CONFIRM}",
                    variant=self._confirm_variant,
                )

    def on_mount(self) -> None:
        """Focus the cancel button when mounted."""
        self.query_one(f"#dialog-btn-{CANCEL}", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Translate the pressed button into an answer."""
        event.stop()
        choice = CONFIRM if event.button.id == f"dialog-btn-{CONFIRM}" else CANCEL
        self.answer(choice)

    def action_cancel(self) -> None:
        """Handle escape key - cancel."""
        self.answer(CANCEL)

    def answer(self, choice: str) -> None:
        """Deliver the answer to the callback, once."""
        if self._answered:
            return
        self._answered = True
        self._on_answer(choice)
