"""Pagination controls for paged tables."""

from typing import Union

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Static

from shelfdesk.logger import get_logger

logger = get_logger("pagination")

ELLIPSIS = "..."

PageLabel = Union[int, str]


def visible_pages(current_page: int, total_pages: int, delta: int = 2) -> list[PageLabel]:
    """
    Page numbers to show around the current page.

    The first and last pages are always shown; pages further than ``delta``
    from the current page collapse into an ellipsis.

    Args:
        current_page: 1-based current page
        total_pages: Number of pages
        delta: Pages shown on each side of the current page

    Returns:
        1-based page numbers and ELLIPSIS markers, e.g. ``[1, "...", 4, 5, 6, 7, 8, "...", 20]``
    """
    if total_pages <= 0:
        return []

    middle = list(range(max(2, current_page - delta), min(total_pages - 1, current_page + delta) + 1))

    pages: list[PageLabel] = [1]
    if current_page - delta > 2:
        pages.append(ELLIPSIS)
    pages.extend(middle)
    if current_page + delta < total_pages - 1:
        pages.extend([ELLIPSIS, total_pages])
    elif total_pages > 1:
        pages.append(total_pages)
    return pages


class Pagination(Horizontal):
    """Previous/next buttons plus a window of page buttons.

    Pages are 0-based in the API (``current_page``, ``PageChanged.page``) and
    1-based on screen. Hidden when there is at most one page.
    """

    DEFAULT_CSS = """
    Pagination {
        height: auto;
        width: 100%;
        margin-top: 1;
    }

    Pagination #pagination-summary {
        width: 1fr;
        content-align: left middle;
        color: $text-muted;
    }

    Pagination Button {
        min-width: 5;
        margin: 0 0 0 1;
    }

    Pagination Button.-current {
        background: $primary;
        text-style: bold;
    }
    """

    class PageChanged(Message):
        """Message emitted when the user asks for another page."""

        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    def __init__(self, current_page: int = 0, total_pages: int = 1, **kwargs) -> None:
        super().__init__(**kwargs)
        self.current_page = current_page
        self.total_pages = total_pages

    def compose(self) -> ComposeResult:
        self.display = self.total_pages > 1
        yield Static(f"Showing page {self.current_page + 1} of {self.total_pages}", id="pagination-summary")
        yield Button("Previous", id="page-prev", disabled=self.current_page == 0)
        for label in visible_pages(self.current_page + 1, self.total_pages):
            if label == ELLIPSIS:
                yield Button(ELLIPSIS, classes="page-ellipsis", disabled=True)
            else:
                button = Button(str(label), id=f"page-{label}", classes="page-number")
                if label == self.current_page + 1:
                    button.add_class("-current")
                yield button
        yield Button("Next", id="page-next", disabled=self.current_page >= self.total_pages - 1)

    def update_pages(self, current_page: int, total_pages: int) -> None:
        """Show a new page window."""
        self.current_page = current_page
        self.total_pages = total_pages
        self.refresh(recompose=True)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id or ""
        if button_id == "page-prev":
            page = max(0, self.current_page - 1)
        elif button_id == "page-next":
            page = min(self.total_pages - 1, self.current_page + 1)
        elif button_id.startswith("page-"):
            page = int(button_id.removeprefix("page-")) - 1
        else:
            return
        logger.debug(f"Page requested: {page}")
        self.post_message(self.PageChanged(page))
