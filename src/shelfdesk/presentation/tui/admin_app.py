"""
ShelfdeskApp - Textual admin console for the library backend.

Layout:
┌──────────────────────────────────────────────────────────┐
│                        Header                            │
├─────────────────────────────┬────────────────────────────┤
│  Issue Book                 │  Users                     │
│   user select (dynamic)     │   avatar  name  role status│
│   copy select (dynamic)     │   ...                      │
│   loan period (filtered)    │                            │
│   notes                     │   pagination               │
│   [Issue Book]              │                            │
├─────────────────────────────┴────────────────────────────┤
│                        Footer                            │
└──────────────────────────────────────────────────────────┘
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

from rich.markup import escape
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.errors import NoWidget
from textual.widgets import Button, Header, Input, Label, Static

from shelfdesk.application.subscription import OutsideInteractionMonitor
from shelfdesk.config import SelectConfig
from shelfdesk.domain.option import Option
from shelfdesk.domain.protocols import SearchProvider
from shelfdesk.logger import get_logger
from shelfdesk.presentation.widgets import (
    AdminFooter,
    ConfirmModal,
    EmptyState,
    Pagination,
    SearchableSelect,
    StatusBadge,
    UserAvatar,
)

logger = get_logger("admin_app")

USERS_PAGE_SIZE = 3

LOAN_PERIODS = [
    Option("7", "1 week"),
    Option("14", "2 weeks"),
    Option("21", "3 weeks"),
    Option("30", "1 month"),
]


@dataclass(frozen=True)
class IssueRequest:
    """What the issue-book form submits."""

    user_id: str
    book_copy_id: str
    loan_days: str
    notes: str = ""


class UserRow(Horizontal):
    """One user line: avatar, name, email, role and status badges."""

    DEFAULT_CSS = """
    UserRow {
        height: 1;
        margin-bottom: 1;
    }

    UserRow .user-name {
        width: 1fr;
        padding: 0 1;
    }

    UserRow StatusBadge {
        margin-left: 1;
    }
    """

    def __init__(self, user: Mapping[str, Any], **kwargs) -> None:
        super().__init__(**kwargs)
        self.user = user

    def compose(self) -> ComposeResult:
        yield UserAvatar(self.user.get("name", ""), src=self.user.get("profileImage"), size="sm")
        name = escape(str(self.user.get("name", "")))
        email = escape(str(self.user.get("email", "")))
        yield Static(f"{name} [dim]{email}[/]", classes="user-name")
        yield StatusBadge(str(self.user.get("role", "member")), kind="role")
        yield StatusBadge(str(self.user.get("status", "active")))


class ShelfdeskApp(App):
    """The admin console."""

    TITLE = "shelfdesk"
    SUB_TITLE = "Library administration"

    CSS = """
    #main {
        height: 1fr;
    }

    #issue-form {
        width: 1fr;
        padding: 1 2;
        border: round $primary;
    }

    #users-panel {
        width: 1fr;
        padding: 1 2;
        border: round $secondary;
    }

    .section-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .field-label {
        margin-top: 1;
        text-style: bold;
    }

    #btn-issue {
        margin-top: 1;
    }

    #issue-status {
        margin-top: 1;
        color: $text-muted;
    }

    #users-list {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+e", "issue", "Issue Book", priority=True),
    ]

    def __init__(
        self,
        user_provider: Optional[SearchProvider],
        copy_provider: Optional[SearchProvider],
        users: Sequence[Mapping[str, Any]] = (),
        select_config: Optional[SelectConfig] = None,
        on_issue: Optional[Callable[[IssueRequest], None]] = None,
    ):
        """
        Initialize the console.

        Args:
            user_provider: Search capability for the user select
            copy_provider: Search capability for the book copy select
            users: User records listed in the users panel
            select_config: Shared configuration of the selects
            on_issue: Called with the confirmed IssueRequest
        """
        super().__init__()
        self.user_provider = user_provider
        self.copy_provider = copy_provider
        self.users = list(users)
        self.select_config = select_config or SelectConfig()
        self.on_issue = on_issue
        self.outside_interactions = OutsideInteractionMonitor()
        self.form: dict[str, str] = {"user_id": "", "book_copy_id": "", "loan_days": "14", "notes": ""}
        self.issued: list[IssueRequest] = []
        self.users_page = 0

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            with Vertical(id="issue-form"):
                yield Static("Issue Book", classes="section-title")
                yield Label("Select User", classes="field-label")
                yield SearchableSelect(
                    value=self.form["user_id"],
                    dynamic_search=True,
                    on_search=self.user_provider,
                    placeholder="Choose a user to issue the book to",
                    search_placeholder="Search users by name or email...",
                    config=self.select_config,
                    id="user-select",
                )
                yield Label("Select Book Copy", classes="field-label")
                yield SearchableSelect(
                    value=self.form["book_copy_id"],
                    dynamic_search=True,
                    on_search=self.copy_provider,
                    placeholder="Choose an available book copy",
                    search_placeholder="Search books by title, author, ISBN, or barcode...",
                    config=self.select_config,
                    id="copy-select",
                )
                yield Label("Loan Period", classes="field-label")
                yield SearchableSelect(
                    LOAN_PERIODS,
                    value=self.form["loan_days"],
                    searchable=True,
                    config=self.select_config,
                    id="period-select",
                )
                yield Label("Notes (Optional)", classes="field-label")
                yield Input(placeholder="Notes", id="notes")
                yield Button("Issue Book", id="btn-issue", variant="primary")
                yield Static("", id="issue-status")
            with Vertical(id="users-panel"):
                yield Static("Users", classes="section-title")
                yield Vertical(id="users-list")
                yield Pagination(0, self._total_user_pages(), id="users-pagination")
        yield AdminFooter()

    def on_mount(self) -> None:
        self._render_users()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        try:
            target, _ = self.screen.get_widget_at(event.screen_x, event.screen_y)
        except NoWidget:
            target = None
        self.outside_interactions.notify(target)

    # Issue form

    def on_searchable_select_changed(self, message: SearchableSelect.Changed) -> None:
        field = {
            "user-select": "user_id",
            "copy-select": "book_copy_id",
            "period-select": "loan_days",
        }.get(message.select.id or "")
        if field:
            self.form[field] = message.value
            logger.debug(f"Form field {field} = {message.value!r}")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "notes":
            self.form["notes"] = event.value

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-issue":
            self.action_issue()

    def action_issue(self) -> None:
        if not self.form["user_id"] or not self.form["book_copy_id"]:
            self._set_status("[red]Select a user and a book copy first.[/]")
            return

        copy_select = self.query_one("#copy-select", SearchableSelect)
        copy_label = copy_select.selected_option.label if copy_select.selected_option else self.form["book_copy_id"]
        self.push_screen(
            ConfirmModal(copy_label, item_type="book", action="issue", title="Issue Book"),
            self._on_issue_confirmed,
        )

    def _on_issue_confirmed(self, confirmed: Optional[bool]) -> None:
        if not confirmed:
            self._set_status("Issue cancelled.")
            return
        request = IssueRequest(
            user_id=self.form["user_id"],
            book_copy_id=self.form["book_copy_id"],
            loan_days=self.form["loan_days"],
            notes=self.form["notes"],
        )
        self.issued.append(request)
        logger.info(f"Issued copy {request.book_copy_id} to user {request.user_id} for {request.loan_days} days")
        if self.on_issue:
            self.on_issue(request)
        self._set_status("[green]Book issued.[/]")

    def _set_status(self, markup: str) -> None:
        self.query_one("#issue-status", Static).update(markup)

    # Users panel

    def _total_user_pages(self) -> int:
        return max(1, -(-len(self.users) // USERS_PAGE_SIZE))

    def _render_users(self) -> None:
        container = self.query_one("#users-list", Vertical)
        container.remove_children()
        if not self.users:
            container.mount(EmptyState("No users found", "Users you add will appear here.", icon="👥"))
            return
        start = self.users_page * USERS_PAGE_SIZE
        container.mount_all(UserRow(user) for user in self.users[start : start + USERS_PAGE_SIZE])

    def on_pagination_page_changed(self, message: Pagination.PageChanged) -> None:
        self.users_page = message.page
        self.query_one("#users-pagination", Pagination).update_pages(self.users_page, self._total_user_pages())
        self._render_users()
