"""Placeholder shown when a list has nothing to display."""

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Button, Static


class EmptyState(Vertical):
    """Icon, title, description and an optional call-to-action button."""

    DEFAULT_CSS = """
    EmptyState {
        height: auto;
        align: center middle;
        padding: 1 2;
    }

    EmptyState Static {
        width: 100%;
        content-align: center middle;
    }

    EmptyState #empty-title {
        text-style: bold;
    }

    EmptyState #empty-description {
        color: $text-muted;
    }
    """

    class ActionPressed(Message):
        """Message emitted when the action button is pressed."""

    def __init__(
        self,
        title: str,
        description: str,
        icon: Optional[str] = None,
        action_label: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.heading = title
        self.detail = description
        self.icon = icon
        self.action_label = action_label

    def compose(self) -> ComposeResult:
        if self.icon:
            yield Static(self.icon, id="empty-icon")
        yield Static(self.heading, id="empty-title")
        yield Static(self.detail, id="empty-description")
        if self.action_label:
            yield Button(self.action_label, id="empty-action", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "empty-action":
            event.stop()
            self.post_message(self.ActionPressed())
