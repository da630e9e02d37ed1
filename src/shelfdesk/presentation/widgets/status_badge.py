"""Coloured badges for user roles and statuses."""

from typing import Optional

from rich.text import Text
from textual.widgets import Static

DEFAULT_STYLE = "#1f2937 on #f3f4f6"

ROLE_STYLES = {
    "admin": "#991b1b on #fee2e2",
    "librarian": "#1e40af on #dbeafe",
    "member": "#166534 on #dcfce7",
}

STATUS_STYLES = {
    "active": "#166534 on #dcfce7",
    "inactive": "#854d0e on #fef9c3",
    "suspended": "#991b1b on #fee2e2",
    "pending": "#9a3412 on #ffedd5",
}


def badge_style(status: str, kind: str = "status", custom: Optional[str] = None) -> str:
    """Rich style for a badge; ``custom`` wins, unknown values are grey."""
    if custom:
        return custom
    styles = ROLE_STYLES if kind == "role" else STATUS_STYLES
    return styles.get(status.lower(), DEFAULT_STYLE)


class StatusBadge(Static):
    """Pill showing a role or status."""

    DEFAULT_CSS = """
    StatusBadge {
        width: auto;
        height: 1;
    }
    """

    def __init__(
        self,
        status: str,
        text: Optional[str] = None,
        kind: str = "status",
        custom_style: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.status = status
        self.label_text = text or status
        self.kind = kind
        self.custom_style = custom_style
        self.update(self.render_badge())

    def render_badge(self) -> Text:
        return Text(f" {self.label_text} ", style=f"bold {badge_style(self.status, self.kind, self.custom_style)}")
