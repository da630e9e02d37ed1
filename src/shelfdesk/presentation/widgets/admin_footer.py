"""Footer line of the admin console."""

from textual.widgets import Static

from shelfdesk.utils import current_year


class AdminFooter(Static):
    """Copyright line with the current year."""

    DEFAULT_CSS = """
    AdminFooter {
        dock: bottom;
        height: 1;
        color: $text-muted;
        background: $panel;
        padding: 0 1;
    }
    """

    def __init__(self, product: str = "Library Management System", **kwargs) -> None:
        super().__init__(f"© {current_year()} {product} • All rights reserved", **kwargs)
