"""ConfirmModal - confirmation dialog for destructive actions."""

from typing import Optional

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from shelfdesk.logger import get_logger

logger = get_logger("confirm_modal")


def progressive(action: str) -> str:
    """``"delete"`` -> ``"Deleting..."``, ``"issue"`` -> ``"Issuing..."``."""
    stem = action[:-1] if action.endswith("e") else action
    return f"{stem.capitalize()}ing..."


class ConfirmModal(ModalScreen[bool]):
    """Asks the user to confirm an action on a named item.

    Dismisses with True on confirm and False on cancel or escape.
    """

    DEFAULT_CSS = """
    ConfirmModal {
        align: center middle;
    }

    ConfirmModal #confirm-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $error 60%;
        background: $surface;
    }

    ConfirmModal #confirm-title {
        text-style: bold;
        margin-bottom: 1;
    }

    ConfirmModal #confirm-buttons {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    ConfirmModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
    ]

    def __init__(
        self,
        item_name: str,
        item_type: str = "item",
        action: str = "delete",
        title: str = "",
        confirm_text: Optional[str] = None,
        loading: bool = False,
    ) -> None:
        super().__init__()
        self.item_name = item_name
        self.item_type = item_type
        self.verb = action
        self.dialog_title = title
        self.confirm_text = confirm_text or f"{action.capitalize()} {item_type}"
        self.busy = loading

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            if self.dialog_title:
                yield Static(self.dialog_title, id="confirm-title")
            yield Static(
                f"Are you sure you want to {self.verb} [b]{escape(self.item_name)}[/b]? This action cannot be undone.",
                id="confirm-message",
            )
            with Horizontal(id="confirm-buttons"):
                yield Button("Cancel", id="btn-cancel")
                yield Button(self._confirm_label(), id="btn-confirm", variant="error", disabled=self.busy)

    def _confirm_label(self) -> str:
        return progressive(self.verb) if self.busy else self.confirm_text

    def set_loading(self, loading: bool) -> None:
        """Disable the confirm button while the action runs."""
        self.busy = loading
        button = self.query_one("#btn-confirm", Button)
        button.disabled = loading
        button.label = self._confirm_label()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        logger.info(f"Confirm dialog button pressed: {event.button.id}")
        if event.button.id == "btn-confirm":
            self.dismiss(True)
        elif event.button.id == "btn-cancel":
            self.dismiss(False)

    def action_cancel(self) -> None:
        self.dismiss(False)
