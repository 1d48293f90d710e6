"""Unit tests for the interaction controller.

The controller is pure: events in, commands out. These tests drive it
directly without a terminal. The input widget edits itself, so here it is
replaced by a stand-in holding whatever the user "typed".
"""

from itertools import product

import pytest

from trustcheck_tui.controller import (
    TRANSITIONS,
    ControllerOptions,
    InteractionController,
)
from trustcheck_tui.events import (
    EVENT_KINDS,
    FetchCompleted,
    IssueFetch,
    KeyPressed,
    Quit,
    ScheduleTick,
    SpinnerTick,
    WindowResized,
)
from trustcheck_tui.models import Failure, Success, TrustReport, TrustSignal
from trustcheck_tui.state import AfterResultPolicy, InteractionState
from trustcheck_tui.widgets.entry import QueryInput

# =============================================================================
# Fixtures
# =============================================================================


class StubEntry:
    """Stands in for the input widget handle."""

    def __init__(self, text: str = ""):
        self.text = text
        self.cleared = 0

    def value(self) -> str:
        return self.text

    def clear(self) -> None:
        self.text = ""
        self.cleared += 1


@pytest.fixture
def report():
    """A decoded trust report."""
    return TrustReport(
        host="example.com",
        trustscore=87,
        trustsignal=TrustSignal(domain=90, ownership=70, encryption=100, website=88),
    )


def make_controller(**options) -> InteractionController:
    return InteractionController(ControllerOptions(**options), entry=StubEntry())


@pytest.fixture
def controller():
    """Controller with a known terminal size."""
    controller = make_controller()
    controller.update(WindowResized(120, 40))
    return controller


def submit(controller, text="example.com"):
    controller.entry.text = text
    return controller.update(KeyPressed("enter"))


# =============================================================================
# Transition table
# =============================================================================


def test_every_state_and_event_kind_has_a_transition():
    """Every (state, event kind) pair must be defined, including no-ops."""
    for state, kind in product(InteractionState, EVENT_KINDS):
        assert (state, kind) in TRANSITIONS, f"missing {state.value} x {kind.__name__}"


def test_unknown_event_kind_is_rejected(controller):
    with pytest.raises(TypeError):
        controller.update(object())


# =============================================================================
# AwaitingInput
# =============================================================================


class TestAwaitingInput:
    """Typing and submitting."""

    def test_initial_state(self):
        controller = InteractionController()
        snap = controller.snapshot
        assert snap.state == InteractionState.AWAITING_INPUT
        assert snap.result == ""
        assert snap.error is None
        assert snap.width is None and snap.height is None

    def test_default_entry_is_a_query_input(self):
        controller = InteractionController(ControllerOptions(placeholder="Host name"))
        widget = controller.entry.widget
        assert isinstance(widget, QueryInput)
        assert widget.placeholder == "Host name"
        assert controller.entry.value() == ""

    def test_edit_keys_leave_state_and_entry_alone(self, controller):
        controller.entry.text = "exampel"
        for key in ("a", "backspace", "home", "left", "ctrl+w"):
            assert controller.update(KeyPressed(key)) == []

        assert controller.state == InteractionState.AWAITING_INPUT
        assert controller.entry.value() == "exampel"

    def test_confirm_moves_to_pending_with_one_request(self, controller):
        commands = submit(controller, "example.com")

        assert controller.state == InteractionState.PENDING
        fetches = [c for c in commands if isinstance(c, IssueFetch)]
        assert fetches == [IssueFetch("example.com")]
        assert controller.snapshot.query == "example.com"

    def test_empty_query_is_still_submitted(self, controller):
        commands = submit(controller, "")
        assert IssueFetch("") in commands

    def test_confirm_starts_the_spinner(self, controller):
        commands = submit(controller)

        ticks = [c for c in commands if isinstance(c, ScheduleTick)]
        assert len(ticks) == 1
        spinner = controller.snapshot.spinner
        assert spinner is not None
        assert ticks[0].tick == SpinnerTick(spinner.id, spinner.tag)

    def test_confirm_does_not_clear_the_entry(self, controller):
        submit(controller, "example.com")
        assert controller.entry.value() == "example.com"
        assert controller.entry.cleared == 0

    def test_tick_is_a_no_op(self, controller):
        controller.entry.text = "abc"
        before = (controller.state, controller.entry.value(), controller.snapshot.result)

        assert controller.update(SpinnerTick(spinner_id=1, tag=0)) == []
        assert (controller.state, controller.entry.value(), controller.snapshot.result) == before

    def test_result_is_ignored(self, controller, report):
        assert controller.update(FetchCompleted(Success(report))) == []
        assert controller.state == InteractionState.AWAITING_INPUT
        assert controller.snapshot.result == ""


# =============================================================================
# Pending
# =============================================================================


class TestPending:
    """Spinner ticks and request completion."""

    def test_tick_advances_spinner_and_schedules_next(self, controller):
        commands = submit(controller)
        first = next(c for c in commands if isinstance(c, ScheduleTick))
        spinner = controller.snapshot.spinner

        follow_up = controller.update(first.tick)

        assert controller.state == InteractionState.PENDING
        assert spinner.frame == 1
        assert len(follow_up) == 1
        assert follow_up[0].tick.tag == first.tick.tag + 1
        assert follow_up[0].delay == spinner.interval

    def test_stale_tick_is_dropped(self, controller):
        submit(controller)
        spinner = controller.snapshot.spinner

        assert controller.update(SpinnerTick(spinner.id + 1000, spinner.tag)) == []
        assert spinner.frame == 0

    def test_success_moves_to_displaying(self, controller, report):
        submit(controller)

        commands = controller.update(FetchCompleted(Success(report)))

        assert commands == []
        snap = controller.snapshot
        assert snap.state == InteractionState.DISPLAYING
        assert snap.result == report.model_dump_json(indent=1)
        assert snap.error is None
        assert snap.spinner is None

    def test_success_result_is_indented_json(self, controller, report):
        submit(controller)
        controller.update(FetchCompleted(Success(report)))

        lines = controller.snapshot.result.splitlines()
        assert lines[0] == "{"
        assert lines[1] == ' "host": "example.com",'
        assert '  "domain": 90,' in lines

    def test_failure_shows_message_verbatim(self, controller):
        submit(controller)

        controller.update(FetchCompleted(Failure("404 Not Found")))

        snap = controller.snapshot
        assert snap.state == InteractionState.DISPLAYING
        assert snap.result == "404 Not Found"
        assert snap.error == "404 Not Found"

    def test_other_keys_produce_no_commands(self, controller):
        submit(controller)
        assert controller.update(KeyPressed("backspace")) == []
        assert controller.update(KeyPressed("x", "x")) == []
        assert controller.state == InteractionState.PENDING

    def test_confirm_again_does_not_issue_second_request(self, controller):
        submit(controller)
        commands = controller.update(KeyPressed("enter"))
        assert not any(isinstance(c, IssueFetch) for c in commands)
        assert controller.state == InteractionState.PENDING


# =============================================================================
# Displaying
# =============================================================================


class TestDisplaying:
    """Late and duplicate completions, and the after-result policy."""

    def test_duplicate_results_do_not_change_display(self, controller, report):
        submit(controller)
        controller.update(FetchCompleted(Success(report)))
        shown = controller.snapshot.result

        controller.update(FetchCompleted(Failure("boom")))
        controller.update(FetchCompleted(Success(report.model_copy(update={"host": "other.org"}))))

        assert controller.state == InteractionState.DISPLAYING
        assert controller.snapshot.result == shown
        assert controller.snapshot.error is None

    def test_late_tick_is_a_no_op(self, controller, report):
        commands = submit(controller)
        tick = next(c for c in commands if isinstance(c, ScheduleTick)).tick
        controller.update(FetchCompleted(Success(report)))
        shown = controller.snapshot.result

        assert controller.update(tick) == []
        assert controller.state == InteractionState.DISPLAYING
        assert controller.snapshot.result == shown

    def test_single_shot_confirm_stays(self, controller, report):
        submit(controller)
        controller.update(FetchCompleted(Success(report)))

        assert controller.update(KeyPressed("enter")) == []
        assert controller.state == InteractionState.DISPLAYING
        assert controller.entry.cleared == 0

    def test_reset_policy_returns_to_input(self, report):
        controller = make_controller(after_result=AfterResultPolicy.RESET)
        controller.update(WindowResized(80, 24))
        submit(controller)
        controller.update(FetchCompleted(Failure("timeout")))

        commands = controller.update(KeyPressed("enter"))

        snap = controller.snapshot
        assert commands == []
        assert snap.state == InteractionState.AWAITING_INPUT
        assert snap.result == ""
        assert snap.error is None
        assert controller.entry.cleared == 1
        assert controller.entry.value() == ""

    def test_reset_policy_ignores_ticks_from_previous_cycle(self, report):
        controller = make_controller(after_result=AfterResultPolicy.RESET)
        old_tick = next(c for c in submit(controller, "a.com") if isinstance(c, ScheduleTick)).tick
        controller.update(FetchCompleted(Success(report)))
        controller.update(KeyPressed("enter"))
        submit(controller, "b.com")
        spinner = controller.snapshot.spinner

        assert controller.update(old_tick) == []
        assert spinner.frame == 0


# =============================================================================
# Any state
# =============================================================================


class TestAnyState:
    """Quit and resize behave the same everywhere."""

    def test_quit_from_awaiting_input(self, controller):
        controller.entry.text = "abc"
        assert controller.update(KeyPressed("ctrl+c")) == [Quit()]
        assert controller.entry.value() == "abc"

    def test_quit_from_pending(self, controller):
        submit(controller)
        assert controller.update(KeyPressed("ctrl+c")) == [Quit()]

    def test_quit_from_displaying(self, controller):
        submit(controller)
        controller.update(FetchCompleted(Failure("x")))
        assert controller.update(KeyPressed("ctrl+c")) == [Quit()]

    @pytest.mark.parametrize("steps", [0, 1, 2])
    def test_resize_only_changes_dimensions(self, steps, report):
        controller = make_controller()
        if steps >= 1:
            submit(controller)
        if steps >= 2:
            controller.update(FetchCompleted(Success(report)))
        state, result = controller.state, controller.snapshot.result

        assert controller.update(WindowResized(100, 30)) == []
        assert (controller.snapshot.width, controller.snapshot.height) == (100, 30)
        assert (controller.state, controller.snapshot.result) == (state, result)
