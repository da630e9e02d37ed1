"""
SearchableSelect - dropdown with static, filtered and server-backed modes.

The widget is a thin dispatcher: user intents (trigger press, typing, picking
an option, escape, clicking elsewhere) are forwarded to a SelectController and
every state change re-renders the dropdown.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Button, Input, Static

from shelfdesk.application.option_resolver import SelectMode
from shelfdesk.application.selection import CloseReason, SelectController, SelectionState
from shelfdesk.application.subscription import OutsideInteractionMonitor, ScopedSubscription
from shelfdesk.config import SelectConfig
from shelfdesk.domain.option import Option
from shelfdesk.domain.protocols import SearchProvider
from shelfdesk.logger import get_logger

logger = get_logger("searchable_select")


class OptionItem(Static):
    """Clickable option row."""

    class Picked(Message):
        """Message emitted when an option row is clicked."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, option: Option, current: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.option = option
        self.current = current
        if current:
            self.add_class("-current")

        text = Text()
        if option.icon:
            text.append_text(Text.from_markup(option.icon))
            text.append(" ")
        text.append(option.label)
        if current:
            text.append("  ✓", style="bold blue")
        self.update(text)

    def on_click(self) -> None:
        self.post_message(self.Picked(self.option.value))


class SearchableSelect(Vertical):
    """
    Selection control.

    Modes:
    - static: the supplied options as-is
    - filtered (``searchable=True``): options whose label contains the search text
    - dynamic (``dynamic_search=True``): debounced ``on_search`` lookups, at most
      three results with the selected option pinned first

    The host owns ``value``. Selecting posts :class:`SearchableSelect.Changed`
    (and calls ``on_change`` when given); opening and closing post
    :class:`SearchableSelect.OpenChanged`.
    """

    DEFAULT_CSS = """
    SearchableSelect {
        height: auto;
        width: 100%;
    }

    SearchableSelect #select-trigger {
        width: 100%;
        content-align: left middle;
    }

    SearchableSelect.-open #select-trigger {
        border: tall $accent;
    }

    SearchableSelect #select-dropdown {
        display: none;
        height: auto;
        max-height: 16;
        border: round $primary;
        background: $surface;
    }

    SearchableSelect.-open #select-dropdown {
        display: block;
    }

    SearchableSelect #select-options {
        height: auto;
        overflow-y: auto;
    }

    SearchableSelect OptionItem {
        padding: 0 1;
    }

    SearchableSelect OptionItem:hover {
        background: $primary 20%;
    }

    SearchableSelect OptionItem.-current {
        color: $accent;
        text-style: bold;
    }

    SearchableSelect .select-status {
        color: $text-muted;
        content-align: center middle;
        width: 100%;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
    ]

    value = reactive("", init=False)

    class Changed(Message):
        """Message emitted once per confirmed selection."""

        def __init__(self, select: "SearchableSelect", value: str) -> None:
            super().__init__()
            self.select = select
            self.value = value

        @property
        def control(self) -> "SearchableSelect":
            return self.select

    class OpenChanged(Message):
        """Message emitted on every open/closed transition."""

        def __init__(self, select: "SearchableSelect", is_open: bool) -> None:
            super().__init__()
            self.select = select
            self.is_open = is_open

        @property
        def control(self) -> "SearchableSelect":
            return self.select

    def __init__(
        self,
        options: Sequence[Option] = (),
        value: str = "",
        *,
        searchable: bool = False,
        dynamic_search: bool = False,
        on_search: Optional[SearchProvider] = None,
        on_change: Optional[Callable[[str], None]] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
        placeholder: Optional[str] = None,
        search_placeholder: Optional[str] = None,
        disabled: bool = False,
        loading: bool = False,
        config: Optional[SelectConfig] = None,
        monitor: Optional[OutsideInteractionMonitor] = None,
        name: Optional[str] = None,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Initialize the select.

        Args:
            options: Options for static/filtered modes
            value: Initial value held by the host
            searchable: Show a search box that filters ``options``
            dynamic_search: Search through ``on_search`` instead of filtering
            on_search: Async search capability used in dynamic mode
            on_change: Optional callback in addition to the Changed message
            on_open_change: Optional callback in addition to the OpenChanged message
            placeholder: Trigger text when nothing is selected
            search_placeholder: Search box placeholder
            disabled: Prevent opening
            loading: Show a loading marker on the trigger
            config: Timing, limits and texts; placeholders above override it
            monitor: Outside-interaction monitor; defaults to the app's ``outside_interactions``
        """
        super().__init__(name=name, id=id, classes=classes)
        config = config or SelectConfig()
        text_overrides = {}
        if placeholder is not None:
            text_overrides["placeholder"] = placeholder
        if search_placeholder is not None:
            text_overrides["search_placeholder"] = search_placeholder
        if text_overrides:
            config = replace(config, **text_overrides)

        self.searchable = searchable or dynamic_search
        self._host_on_change = on_change
        self._host_on_open_change = on_open_change
        self._monitor = monitor
        self._rendered_open = False
        self.controller = SelectController(
            options=options,
            value=value,
            on_change=self._handle_change,
            on_open_change=self._handle_open_change,
            on_search=on_search,
            mode=SelectMode.from_flags(searchable=searchable, dynamic_search=dynamic_search),
            disabled=disabled,
            loading=loading,
            config=config,
            outside_interactions=self._subscribe_outside,
            on_state_change=self._render_state,
        )
        self.set_reactive(SearchableSelect.value, value)

    def compose(self) -> ComposeResult:
        yield Button(self._trigger_text(), id="select-trigger", disabled=self.controller.disabled)
        with Vertical(id="select-dropdown"):
            if self.searchable:
                yield Input(placeholder=self.controller.config.search_placeholder, id="select-search")
            yield Vertical(id="select-options")

    def on_mount(self) -> None:
        self._render_state(self.controller.state)

    def on_unmount(self) -> None:
        self.controller.dispose()

    # Public API

    @property
    def is_open(self) -> bool:
        return self.controller.is_open

    @property
    def selected_option(self) -> Optional[Option]:
        return self.controller.selected_option

    def open(self) -> bool:
        return self.controller.open()

    def close(self) -> bool:
        """External close request."""
        return self.controller.close(CloseReason.EXTERNAL)

    def pick(self, value: str) -> None:
        """Select ``value`` as if its row had been clicked."""
        self.controller.select(value)

    def set_options(self, options: Sequence[Option]) -> None:
        self.controller.set_options(options)

    def set_disabled(self, disabled: bool) -> None:
        self.controller.set_disabled(disabled)

    def set_loading(self, loading: bool) -> None:
        self.controller.set_loading(loading)

    def watch_value(self, value: str) -> None:
        self.controller.set_value(value)

    # Event handlers

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "select-trigger":
            event.stop()
            self.controller.toggle()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "select-search":
            event.stop()
            self.controller.type_query(event.value)

    def on_option_item_picked(self, message: OptionItem.Picked) -> None:
        message.stop()
        self.controller.select(message.value)

    def action_close(self) -> None:
        self.close()

    # Controller callbacks

    def _handle_change(self, value: str) -> None:
        self.value = value
        self.post_message(self.Changed(self, value))
        if self._host_on_change:
            self._host_on_change(value)

    def _handle_open_change(self, is_open: bool) -> None:
        self.post_message(self.OpenChanged(self, is_open))
        if self._host_on_open_change:
            self._host_on_open_change(is_open)

    def _subscribe_outside(self, callback: Callable[[], None]) -> ScopedSubscription:
        monitor = self._monitor or getattr(self.app, "outside_interactions", None)
        if monitor is None:
            return ScopedSubscription(lambda: None, name="unmonitored select")
        return monitor.subscribe(self._contains, callback)

    def _contains(self, target: object) -> bool:
        return isinstance(target, Widget) and (target is self or self in target.ancestors)

    # Rendering

    def _trigger_text(self) -> Text:
        text = Text()
        selected = self.controller.selected_option
        if selected is not None and selected.icon:
            text.append_text(Text.from_markup(selected.icon))
            text.append(" ")
        if selected is not None or self.controller.value:
            text.append(self.controller.display_text)
        else:
            text.append(self.controller.display_text, style="dim")
        if self.controller.loading:
            text.append(" …", style="dim")
        text.append("  ▲" if self.controller.is_open else "  ▼", style="dim")
        return text

    def _render_state(self, state: SelectionState) -> None:
        if not self.is_mounted:
            return

        self.set_class(state.open, "-open")
        trigger = self.query_one("#select-trigger", Button)
        trigger.label = self._trigger_text()
        trigger.disabled = self.controller.disabled

        if self.searchable:
            search = self.query_one("#select-search", Input)
            if search.value != state.search_text:
                with search.prevent(Input.Changed):
                    search.value = state.search_text
            if state.open and not self._rendered_open:
                search.focus()
        self._rendered_open = state.open

        container = self.query_one("#select-options", Vertical)
        container.remove_children()
        if not state.open:
            return

        config = self.controller.config
        if state.search_in_flight:
            container.mount(Static(config.searching_text, classes="select-status select-searching"))
        elif not state.resolved_options:
            container.mount(Static(self.controller.empty_text, classes="select-status select-empty"))
        else:
            container.mount_all(
                OptionItem(option, current=option.value == self.controller.value)
                for option in state.resolved_options
            )
