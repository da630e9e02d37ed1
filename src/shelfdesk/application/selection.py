"""
Selection state machine for searchable selects.

The controller owns everything a select needs between renders: open/closed,
search text, the resolved selected option and the dynamic result buffer. The
host stays the authority for the selected value; the controller only mirrors
it to keep ``selected_option`` in sync.

States:
    CLOSED -> OPEN_IDLE            open() unless disabled
    OPEN_IDLE -> OPEN_SEARCHING    dynamic debounce timer fires
    OPEN_SEARCHING -> OPEN_IDLE    current lookup result (or failure) applied
    OPEN_* -> CLOSED               select(), outside interaction, close()
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from shelfdesk.application.option_resolver import SelectMode, resolve_options
from shelfdesk.application.search_scheduler import SearchScheduler
from shelfdesk.application.subscription import ScopedSubscription, SubscriptionSource
from shelfdesk.config import SelectConfig
from shelfdesk.domain.option import Option, find_option
from shelfdesk.domain.protocols import SearchProvider
from shelfdesk.logger import get_logger

logger = get_logger("selection")


class SelectPhase(str, Enum):
    CLOSED = "closed"
    OPEN_IDLE = "open-idle"
    OPEN_SEARCHING = "open-searching"


class CloseReason(str, Enum):
    SELECTED = "selected"
    OUTSIDE = "outside"
    EXTERNAL = "external"


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of a select handed to the presentation layer."""

    open: bool = False
    search_text: str = ""
    selected_option: Optional[Option] = None
    resolved_options: tuple[Option, ...] = ()
    search_in_flight: bool = False

    @property
    def query(self) -> str:
        """The trimmed search text."""
        return self.search_text.strip()

    @property
    def phase(self) -> SelectPhase:
        if not self.open:
            return SelectPhase.CLOSED
        return SelectPhase.OPEN_SEARCHING if self.search_in_flight else SelectPhase.OPEN_IDLE


class SelectController:
    """
    Drives one selection control.

    All methods must be called from the UI event loop. Host callbacks are
    invoked synchronously from the transition that triggers them.
    """

    def __init__(
        self,
        options: Sequence[Option] = (),
        value: str = "",
        on_change: Optional[Callable[[str], None]] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
        on_search: Optional[SearchProvider] = None,
        mode: SelectMode = SelectMode.STATIC,
        disabled: bool = False,
        loading: bool = False,
        config: Optional[SelectConfig] = None,
        outside_interactions: Optional[SubscriptionSource] = None,
        on_state_change: Optional[Callable[[SelectionState], None]] = None,
    ):
        """
        Initialize the controller in the closed state.

        Args:
            options: Host options (static and filtered modes, label lookup in dynamic mode)
            value: Current value held by the host
            on_change: Called once per confirmed selection
            on_open_change: Called on every closed/open transition
            on_search: Search capability, required for dynamic mode to return anything
            mode: Option source
            disabled: Suppresses the open transition
            loading: Presentation flag only
            config: Timing, limits and texts
            outside_interactions: Registers a listener for interactions outside the control
            on_state_change: Re-render hook, receives a fresh SelectionState
        """
        self.config = config or SelectConfig()
        self.mode = mode
        self.disabled = disabled
        self.loading = loading
        self._options: tuple[Option, ...] = tuple(options)
        self._value = value
        self._on_change = on_change
        self._on_open_change = on_open_change
        self._on_state_change = on_state_change
        self._outside_interactions = outside_interactions
        self._outside: Optional[ScopedSubscription] = None

        self._open = False
        self._search_text = ""
        self._dynamic_results: tuple[Option, ...] = ()
        self._selected: Optional[Option] = None
        self._disposed = False

        if mode is SelectMode.DYNAMIC and on_search is None:
            logger.warning("Dynamic select created without a search provider; results will stay empty")

        self.scheduler = SearchScheduler(
            on_search,
            on_results=self._apply_results,
            on_searching=self._on_searching,
            delay=self.config.debounce_delay,
        )
        self._reconcile_selected()

    # Read-only views

    @property
    def value(self) -> str:
        return self._value

    @property
    def options(self) -> tuple[Option, ...]:
        return self._options

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def selected_option(self) -> Optional[Option]:
        return self._selected

    @property
    def dynamic_results(self) -> tuple[Option, ...]:
        return self._dynamic_results

    @property
    def resolved_options(self) -> list[Option]:
        return resolve_options(
            self.mode,
            self._options,
            search_text=self._search_text,
            dynamic_results=self._dynamic_results,
            selected=self._selected,
            limit=self.config.dynamic_limit,
        )

    @property
    def selection_pending(self) -> bool:
        """True while a value is set whose option has not been resolved yet."""
        return bool(self._value) and self._selected is None

    @property
    def display_text(self) -> str:
        """Trigger text: selected label, else the raw value, else the placeholder."""
        if self._selected is not None:
            return self._selected.label
        return self._value or self.config.placeholder

    @property
    def empty_text(self) -> str:
        return self.config.no_results_text if self._search_text else self.config.no_options_text

    @property
    def state(self) -> SelectionState:
        return SelectionState(
            open=self._open,
            search_text=self._search_text,
            selected_option=self._selected,
            resolved_options=tuple(self.resolved_options),
            search_in_flight=self.scheduler.is_searching,
        )

    @property
    def phase(self) -> SelectPhase:
        return self.state.phase

    # User intents

    def open(self) -> bool:
        """Open the control. Returns False when disabled or disposed."""
        if self._disposed or self.disabled:
            logger.debug("Open suppressed (disabled or disposed)")
            return False
        if self._open:
            return True

        self._open = True
        if self._outside_interactions is not None:
            self._outside = self._outside_interactions(self._on_outside_interaction)
        logger.debug("Select opened")
        if self._on_open_change:
            self._on_open_change(True)
        self._notify()
        return True

    def toggle(self) -> bool:
        """Flip between open and closed, like pressing the trigger button."""
        if self._open:
            self.close(CloseReason.EXTERNAL)
            return False
        return self.open()

    def close(self, reason: CloseReason = CloseReason.EXTERNAL) -> bool:
        """Close the control, dropping search text and dynamic results.

        Returns:
            True if the control was open
        """
        if not self._open:
            return False

        self._open = False
        self._search_text = ""
        self._dynamic_results = ()
        self.scheduler.cancel()
        self._release_outside()
        logger.debug(f"Select closed ({reason.value})")
        if self._on_open_change:
            self._on_open_change(False)
        self._notify()
        return True

    def type_query(self, text: str) -> None:
        """Update the search text; dynamic mode schedules a lookup."""
        if not self._open:
            logger.debug("Ignoring search text while closed")
            return
        self._search_text = text
        if self.mode is SelectMode.DYNAMIC:
            self.scheduler.schedule(text)
        self._notify()

    def select(self, value: str) -> None:
        """
        Confirm ``value`` as the selection and close.

        Selecting the current value again is allowed and reports the same
        value to ``on_change`` once more.
        """
        if self._disposed:
            return
        option = find_option(self.resolved_options, value) or self._lookup(value)
        self._value = value
        if option is not None:
            self._selected = option
        elif self._selected is not None and self._selected.value != value:
            self._selected = None
        logger.info(f"Option selected: {value!r}")
        if self._on_change:
            self._on_change(value)
        if not self.close(CloseReason.SELECTED):
            self._notify()

    # Host updates

    def set_value(self, value: str) -> None:
        """Mirror a new host value and re-resolve the selected option."""
        if value == self._value:
            return
        self._value = value
        self._reconcile_selected()
        self._notify()

    def set_options(self, options: Sequence[Option]) -> None:
        self._options = tuple(options)
        self._reconcile_selected()
        self._notify()

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = disabled
        self._notify()

    def set_loading(self, loading: bool) -> None:
        self.loading = loading
        self._notify()

    def set_mode(self, mode: SelectMode) -> None:
        """Switch the option source.

        The tracked selected option survives the switch while its value is
        still the host value, so dynamic mode keeps pinning it.
        """
        if mode is self.mode:
            return
        if self.mode is SelectMode.DYNAMIC:
            self.scheduler.cancel()
            self._dynamic_results = ()
        self.mode = mode

        found = self._lookup(self._value)
        if found is not None:
            self._selected = found
        elif self._selected is not None and self._selected.value != self._value:
            self._selected = None
        logger.debug(f"Select mode switched to {mode.value}")

        if mode is SelectMode.DYNAMIC and self._open and self._search_text:
            self.scheduler.schedule(self._search_text)
        self._notify()

    def dispose(self) -> None:
        """Unmount: cancel the timer, stale the lookup and drop listeners.

        Host callbacks are not invoked. Safe to call more than once.
        """
        if self._disposed:
            return
        self._disposed = True
        self._open = False
        self._search_text = ""
        self._dynamic_results = ()
        self.scheduler.dispose()
        self._release_outside()
        logger.debug("Select disposed")

    # Internals

    def _lookup(self, value: str) -> Optional[Option]:
        if self.mode is SelectMode.DYNAMIC:
            return find_option(self._dynamic_results, value) or find_option(self._options, value)
        return find_option(self._options, value)

    def _reconcile_selected(self) -> None:
        found = self._lookup(self._value)
        if found is not None:
            self._selected = found
        elif self.mode is SelectMode.DYNAMIC and self._selected is not None and self._selected.value == self._value:
            # Keep the tracked option; it may have come from an earlier search
            pass
        else:
            # Dynamic mode: pending until a result containing the value arrives
            self._selected = None

    def _apply_results(self, results: list[Option]) -> None:
        if self._disposed:
            return
        self._dynamic_results = tuple(results)
        self._reconcile_selected()
        self._notify()

    def _on_searching(self, searching: bool) -> None:
        if not self._disposed:
            self._notify()

    def _on_outside_interaction(self) -> None:
        self.close(CloseReason.OUTSIDE)

    def _release_outside(self) -> None:
        if self._outside is not None:
            self._outside.release()
            self._outside = None

    def _notify(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.state)
