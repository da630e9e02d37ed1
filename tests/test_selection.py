"""Tests for the selection state machine."""

import pytest

from shelfdesk.application.option_resolver import SelectMode
from shelfdesk.application.selection import CloseReason, SelectController, SelectionState, SelectPhase
from shelfdesk.application.subscription import OutsideInteractionMonitor
from shelfdesk.config import SelectConfig
from shelfdesk.domain.option import Option

from tests.conftest import GatedProvider, StaticProvider, settle

ALPHA, BRAVO, CHARLIE, DELTA = (
    Option("A", "Alpha"),
    Option("B", "Bravo"),
    Option("C", "Charlie"),
    Option("D", "Delta"),
)


class Recorder:
    """Collects host callbacks."""

    def __init__(self):
        self.changes: list[str] = []
        self.open_changes: list[bool] = []
        self.states: list[SelectionState] = []

    def controller(self, **kwargs) -> SelectController:
        return SelectController(
            on_change=self.changes.append,
            on_open_change=self.open_changes.append,
            on_state_change=self.states.append,
            **kwargs,
        )


class TestStaticSelection:
    def test_starts_closed_with_resolved_selection(self, phonetic):
        controller = Recorder().controller(options=phonetic, value="C")

        assert controller.phase is SelectPhase.CLOSED
        assert controller.selected_option == CHARLIE
        assert controller.display_text == "Charlie"

    def test_unknown_value_is_shown_raw(self, phonetic):
        controller = Recorder().controller(options=phonetic, value="Z")

        assert controller.selected_option is None
        assert controller.display_text == "Z"

    def test_placeholder_without_value(self, phonetic):
        controller = Recorder().controller(options=phonetic)
        assert controller.display_text == "Select option"

    def test_open_and_close_report_transitions(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic)

        assert controller.open() is True
        assert controller.phase is SelectPhase.OPEN_IDLE
        assert controller.open() is True
        assert controller.close() is True
        assert controller.close() is False

        assert recorder.open_changes == [True, False]

    def test_toggle(self, phonetic):
        controller = Recorder().controller(options=phonetic)

        assert controller.toggle() is True
        assert controller.is_open
        assert controller.toggle() is False
        assert not controller.is_open

    def test_disabled_control_never_opens(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic, disabled=True)

        assert controller.open() is False
        assert controller.toggle() is False
        assert recorder.open_changes == []
        assert controller.phase is SelectPhase.CLOSED

    def test_loading_does_not_block_opening(self, phonetic):
        controller = Recorder().controller(options=phonetic, loading=True)
        assert controller.open() is True

    def test_select_reports_change_and_closes(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic, value="A")
        controller.open()

        controller.select("D")

        assert recorder.changes == ["D"]
        assert recorder.open_changes == [True, False]
        assert controller.selected_option == DELTA
        assert controller.value == "D"
        assert not controller.is_open

    def test_selecting_current_value_is_idempotent(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic, value="B")

        controller.open()
        controller.select("B")
        first = controller.state
        controller.open()
        reopened = controller.resolved_options
        controller.select("B")

        assert recorder.changes == ["B", "B"]
        assert recorder.open_changes == [True, False, True, False]
        assert controller.state == first
        assert reopened == phonetic

    def test_all_options_shown_when_open(self, phonetic):
        controller = Recorder().controller(options=phonetic)
        controller.open()
        assert controller.state.resolved_options == tuple(phonetic)

    def test_set_value_while_closed_re_resolves(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic, value="A")

        controller.set_value("C")

        assert controller.selected_option == CHARLIE
        assert recorder.changes == []

    def test_set_value_to_unknown_clears_selection(self, phonetic):
        controller = Recorder().controller(options=phonetic, value="A")
        controller.set_value("Z")
        assert controller.selected_option is None

    def test_set_options_re_resolves(self):
        controller = Recorder().controller(options=[ALPHA], value="D")
        assert controller.selected_option is None

        controller.set_options([ALPHA, DELTA])

        assert controller.selected_option == DELTA

    def test_state_change_hook_receives_snapshots(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic)

        controller.open()
        controller.close()

        assert [state.open for state in recorder.states] == [True, False]


class TestFilteredSelection:
    def test_search_text_filters_labels(self, phonetic):
        controller = Recorder().controller(options=phonetic, mode=SelectMode.FILTERED)
        controller.open()

        controller.type_query("ha")

        assert [o.label for o in controller.resolved_options] == ["Alpha", "Charlie"]
        assert controller.state.query == "ha"

    def test_typing_while_closed_is_ignored(self, phonetic):
        controller = Recorder().controller(options=phonetic, mode=SelectMode.FILTERED)
        controller.type_query("ha")
        assert controller.search_text == ""

    def test_close_clears_search_text(self, phonetic):
        controller = Recorder().controller(options=phonetic, mode=SelectMode.FILTERED)
        controller.open()
        controller.type_query("zulu")
        assert controller.resolved_options == []
        assert controller.empty_text == "No options found"

        controller.close()
        controller.open()

        assert controller.search_text == ""
        assert controller.resolved_options == phonetic

    def test_empty_state_text_without_options(self):
        controller = Recorder().controller(options=[], mode=SelectMode.FILTERED)
        controller.open()
        assert controller.empty_text == "No options available"


class TestOutsideInteraction:
    def test_listener_lives_only_while_open(self, phonetic):
        monitor = OutsideInteractionMonitor()
        recorder = Recorder()
        controller = recorder.controller(
            options=phonetic,
            outside_interactions=lambda callback: monitor.subscribe(lambda target: target == "inside", callback),
        )

        assert len(monitor) == 0
        controller.open()
        assert len(monitor) == 1

        monitor.notify("inside")
        assert controller.is_open

        monitor.notify("elsewhere")
        assert not controller.is_open
        assert len(monitor) == 0
        assert recorder.open_changes == [True, False]

    def test_close_releases_listener(self, phonetic):
        monitor = OutsideInteractionMonitor()
        controller = Recorder().controller(
            options=phonetic,
            outside_interactions=lambda callback: monitor.subscribe(lambda target: False, callback),
        )

        controller.open()
        controller.close(CloseReason.EXTERNAL)

        assert len(monitor) == 0


class TestDynamicSelection:
    @pytest.mark.asyncio
    async def test_scenario_selected_value_pinned_first(self, fast_config):
        provider = StaticProvider([ALPHA, BRAVO, CHARLIE])
        controller = Recorder().controller(
            options=[DELTA], value="D", mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config
        )
        controller.open()

        controller.type_query("a")
        await settle()

        assert [o.value for o in controller.resolved_options] == ["D", "A", "B"]

    @pytest.mark.asyncio
    async def test_results_limited_to_three(self, fast_config):
        many = [Option(str(i), f"Book {i}") for i in range(10)]
        controller = Recorder().controller(
            mode=SelectMode.DYNAMIC, on_search=StaticProvider(many), config=fast_config
        )
        controller.open()

        controller.type_query("book")
        await settle()

        assert len(controller.dynamic_results) == 10
        assert [o.value for o in controller.resolved_options] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_host_options_ignored_once_query_active(self, phonetic, fast_config):
        controller = Recorder().controller(
            options=phonetic,
            mode=SelectMode.DYNAMIC,
            on_search=StaticProvider([Option("X", "X-ray")]),
            config=fast_config,
        )
        controller.open()

        controller.type_query("x")
        await settle()

        assert [o.value for o in controller.resolved_options] == ["X"]

    @pytest.mark.asyncio
    async def test_phase_moves_through_searching(self, fast_config):
        provider = GatedProvider({"a": [ALPHA]})
        recorder = Recorder()
        controller = recorder.controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)
        controller.open()

        controller.type_query("a")
        assert controller.phase is SelectPhase.OPEN_IDLE
        await settle()
        assert controller.phase is SelectPhase.OPEN_SEARCHING

        provider.release("a")
        await settle()
        assert controller.phase is SelectPhase.OPEN_IDLE
        assert controller.resolved_options == [ALPHA]
        assert SelectPhase.OPEN_SEARCHING in [state.phase for state in recorder.states]

    @pytest.mark.asyncio
    async def test_unresolved_value_pending_until_result_contains_it(self, fast_config):
        provider = GatedProvider({"a": [ALPHA, CHARLIE], "b": [ALPHA, BRAVO, CHARLIE]})
        controller = Recorder().controller(value="B", mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)

        assert controller.selected_option is None
        assert controller.selection_pending

        controller.open()
        controller.type_query("a")
        await settle()
        provider.release("a")
        await settle()
        assert controller.selected_option is None

        controller.type_query("b")
        await settle()
        provider.release("b")
        await settle()

        assert controller.selected_option == BRAVO
        assert not controller.selection_pending
        assert controller.resolved_options == [ALPHA, BRAVO, CHARLIE]

    @pytest.mark.asyncio
    async def test_selected_option_survives_close_and_new_searches(self, fast_config):
        results = {"d": [DELTA], "a": [ALPHA, BRAVO, CHARLIE]}
        provider = GatedProvider(results)
        recorder = Recorder()
        controller = recorder.controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)

        controller.open()
        controller.type_query("d")
        await settle()
        provider.release("d")
        await settle()
        controller.select("D")

        assert controller.dynamic_results == ()
        assert controller.selected_option == DELTA

        controller.open()
        assert controller.resolved_options == [DELTA]
        controller.type_query("a")
        await settle()
        provider.release("a")
        await settle()

        assert [o.value for o in controller.resolved_options] == ["D", "A", "B"]

    @pytest.mark.asyncio
    async def test_set_value_keeps_tracked_option_with_same_value(self, fast_config):
        controller = Recorder().controller(
            options=[DELTA], value="D", mode=SelectMode.DYNAMIC, on_search=StaticProvider([]), config=fast_config
        )
        controller.set_options([])
        assert controller.selected_option == DELTA

        controller.set_value("A")
        assert controller.selected_option is None
        assert controller.display_text == "A"

    @pytest.mark.asyncio
    async def test_clearing_query_empties_results_without_lookup(self, fast_config):
        provider = StaticProvider([ALPHA, BRAVO])
        controller = Recorder().controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)
        controller.open()

        controller.type_query("a")
        await settle()
        assert controller.resolved_options == [ALPHA, BRAVO]

        controller.type_query("")
        assert controller.resolved_options == []
        await settle()

        assert provider.calls == ["a"]

    @pytest.mark.asyncio
    async def test_stale_response_does_not_reach_display(self, fast_config):
        provider = GatedProvider({"x": [ALPHA], "xy": [BRAVO]})
        controller = Recorder().controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)
        controller.open()

        controller.type_query("x")
        await settle()
        controller.type_query("xy")
        await settle()
        provider.release("xy")
        await settle()
        provider.release("x")
        await settle()

        assert controller.resolved_options == [BRAVO]

    @pytest.mark.asyncio
    async def test_close_cancels_pending_timer_and_stales_lookup(self, fast_config):
        provider = GatedProvider({"a": [ALPHA]})
        controller = Recorder().controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)
        controller.open()

        controller.type_query("a")
        await settle()
        controller.close()
        provider.release("a")
        await settle()

        assert controller.dynamic_results == ()
        assert controller.search_text == ""
        assert not controller.scheduler.is_searching

        controller.open()
        controller.type_query("b")
        controller.close()
        await settle()
        assert provider.calls == ["a"]

    @pytest.mark.asyncio
    async def test_lookup_from_before_close_ignored_when_same_text_retyped(self):
        provider = GatedProvider({"x": [Option("OLD", "Old result")]})
        controller = Recorder().controller(
            mode=SelectMode.DYNAMIC, on_search=provider, config=SelectConfig(debounce_delay=0.2)
        )
        controller.open()
        controller.type_query("x")
        await settle(0.3)
        assert controller.scheduler.is_searching

        controller.close()
        controller.open()
        controller.type_query("x")
        provider.release("x")
        await settle()

        assert controller.scheduler.ticket.pending
        assert controller.dynamic_results == ()
        assert controller.resolved_options == []

        await settle(0.3)
        assert provider.calls == ["x", "x"]

    @pytest.mark.asyncio
    async def test_dispose_blocks_late_results_and_callbacks(self, fast_config):
        provider = GatedProvider({"a": [ALPHA]})
        recorder = Recorder()
        controller = recorder.controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)
        controller.open()
        controller.type_query("a")
        await settle()

        controller.dispose()
        controller.dispose()
        provider.release("a")
        await settle()

        assert controller.dynamic_results == ()
        assert recorder.open_changes == [True]
        assert controller.open() is False

    @pytest.mark.asyncio
    async def test_dynamic_without_provider_stays_empty(self, fast_config):
        controller = Recorder().controller(mode=SelectMode.DYNAMIC, config=fast_config)
        controller.open()
        controller.type_query("a")
        await settle()
        assert controller.resolved_options == []


class TestModeSwitch:
    @pytest.mark.asyncio
    async def test_option_picked_in_static_mode_pinned_after_switch_to_dynamic(self, phonetic, fast_config):
        recorder = Recorder()
        controller = recorder.controller(
            options=phonetic, on_search=StaticProvider([ALPHA, BRAVO, CHARLIE]), config=fast_config
        )
        controller.open()
        controller.select("D")

        controller.set_mode(SelectMode.DYNAMIC)
        assert recorder.states[-1].selected_option == DELTA

        controller.open()
        controller.type_query("a")
        await settle()

        assert [o.value for o in controller.resolved_options] == ["D", "A", "B"]

    @pytest.mark.asyncio
    async def test_option_from_search_kept_after_switch_to_static(self, fast_config):
        xray = Option("X", "X-ray")
        controller = Recorder().controller(
            options=[ALPHA], mode=SelectMode.DYNAMIC, on_search=StaticProvider([xray]), config=fast_config
        )
        controller.open()
        controller.type_query("x")
        await settle()
        controller.select("X")

        controller.set_mode(SelectMode.STATIC)

        assert controller.selected_option == xray
        assert controller.display_text == "X-ray"
        assert controller.resolved_options == [ALPHA]

    @pytest.mark.asyncio
    async def test_leaving_dynamic_mode_stales_in_flight_lookup(self, fast_config):
        provider = GatedProvider({"a": [ALPHA]})
        controller = Recorder().controller(mode=SelectMode.DYNAMIC, on_search=provider, config=fast_config)
        controller.open()
        controller.type_query("a")
        await settle()

        controller.set_mode(SelectMode.FILTERED)
        provider.release("a")
        await settle()

        assert controller.dynamic_results == ()
        assert not controller.scheduler.is_searching

    def test_same_mode_is_a_no_op(self, phonetic):
        recorder = Recorder()
        controller = recorder.controller(options=phonetic)

        controller.set_mode(SelectMode.STATIC)

        assert recorder.states == []
