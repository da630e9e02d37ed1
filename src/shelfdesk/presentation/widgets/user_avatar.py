"""Avatar for user rows: image link when available, initials otherwise."""

from typing import Optional

from rich.style import Style
from rich.text import Text
from textual.widgets import Static

from shelfdesk.utils import initials

AVATAR_WIDTHS = {"sm": 4, "md": 6, "lg": 8}


class UserAvatar(Static):
    """Compact avatar sized ``sm``, ``md`` or ``lg``."""

    DEFAULT_CSS = """
    UserAvatar {
        height: 1;
        content-align: center middle;
    }
    """

    def __init__(self, name: str, src: Optional[str] = None, size: str = "md", **kwargs) -> None:
        super().__init__(**kwargs)
        if size not in AVATAR_WIDTHS:
            raise ValueError(f"Unknown avatar size {size!r}; expected one of {sorted(AVATAR_WIDTHS)}")
        self.name_text = name
        self.src = src
        self.avatar_size = size
        self.styles.width = AVATAR_WIDTHS[size]
        self.tooltip = Text(name)
        self.update(self.render_avatar())

    def render_avatar(self) -> Text:
        if self.src:
            return Text("◉", style=Style(bold=True, link=self.src))
        return Text(initials(self.name_text), style="bold #4b5563 on #d1d5db")
