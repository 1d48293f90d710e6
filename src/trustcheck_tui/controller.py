"""Interaction controller - the form's state machine.

Multiplexes keyboard/window events, the single outstanding request, and
the busy indicator's ticks into one update step. The controller never
performs I/O: `update()` mutates the snapshot and returns commands for the
runtime driver to execute, and `render()` is a pure function of the
snapshot.

States:
    AWAITING_INPUT --enter--> PENDING --result--> DISPLAYING
                                                      |
                      (AfterResultPolicy.RESET) --enter--> AWAITING_INPUT

Every (state, event kind) pair is listed in the transition table, including
the deliberate no-ops. A tick or a result that arrives outside PENDING is
dropped there, so late timers and duplicate completions cannot corrupt a
displayed result.

Text editing is not a transition: the input widget receives keys from
Textual directly, and the controller only reads its value on confirm.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rich.console import RenderableType

from .events import (
    CONFIRM_KEY,
    QUIT_KEY,
    Command,
    Event,
    FetchCompleted,
    IssueFetch,
    KeyPressed,
    Quit,
    SpinnerTick,
    WindowResized,
)
from .models import Failure, Success
from .state import AfterResultPolicy, ControllerSnapshot, InteractionState
from .styles import StyleConfig
from .view import render_frame
from .widgets.busy import BusyIndicator
from .widgets.entry import TextEntry

logger = logging.getLogger(__name__)


# Handler signature: (controller, event) -> commands
Handler = Callable[..., list[Command]]


@dataclass
class ControllerOptions:
    """Construction options for InteractionController."""

    title: str = "Website check"
    placeholder: str = "Enter url"
    spinner: str = "monkey"
    char_limit: int | None = None
    after_result: AfterResultPolicy = AfterResultPolicy.SINGLE_SHOT
    styles: StyleConfig = field(default_factory=StyleConfig)


class InteractionController:
    """Owns the snapshot and implements update/render.

    Usage:
        controller = InteractionController()
        commands = controller.update(WindowResized(120, 40))
        commands = controller.update(KeyPressed("enter"))
        frame = controller.render()
    """

    def __init__(
        self,
        options: ControllerOptions | None = None,
        entry: TextEntry | None = None,
    ) -> None:
        self.options = options or ControllerOptions()
        entry = entry or TextEntry(
            placeholder=self.options.placeholder,
            char_limit=self.options.char_limit,
        )
        self.snapshot = ControllerSnapshot(entry=entry)

    @property
    def state(self) -> InteractionState:
        return self.snapshot.state

    @property
    def entry(self) -> TextEntry:
        return self.snapshot.entry

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update(self, event: Event) -> list[Command]:
        """Apply one event and return the commands it produced.

        Raises:
            TypeError: If the event is not one of the known event kinds
        """
        handler = TRANSITIONS.get((self.snapshot.state, type(event)))
        if handler is None:
            state = self.snapshot.state.value
            raise TypeError(f"No transition for {type(event).__name__} in {state}")
        return handler(self, event)

    def _set_state(self, state: InteractionState) -> None:
        logger.debug(f"State: {self.snapshot.state.value} -> {state.value}")
        self.snapshot.state = state

    # Keys -------------------------------------------------------------------

    def _on_key(self, event: KeyPressed) -> list[Command]:
        if event.key == QUIT_KEY:
            logger.info("Quit requested")
            return [Quit()]

        if event.key == CONFIRM_KEY:
            if self.snapshot.state == InteractionState.AWAITING_INPUT:
                return self._submit()
            if (
                self.snapshot.state == InteractionState.DISPLAYING
                and self.options.after_result == AfterResultPolicy.RESET
            ):
                self._reset()

        return []

    def _submit(self) -> list[Command]:
        snap = self.snapshot
        snap.query = snap.entry.value()
        logger.info(f"input: {snap.query}")

        snap.spinner = BusyIndicator(self.options.spinner, style=self.options.styles.accent)
        self._set_state(InteractionState.PENDING)
        return [snap.spinner.start(), IssueFetch(snap.query)]

    def _reset(self) -> None:
        snap = self.snapshot
        snap.entry.clear()
        snap.query = ""
        snap.result = ""
        snap.error = None
        self._set_state(InteractionState.AWAITING_INPUT)

    # Window -----------------------------------------------------------------

    def _on_resize(self, event: WindowResized) -> list[Command]:
        self.snapshot.width = event.width
        self.snapshot.height = event.height
        return []

    # Ticks ------------------------------------------------------------------

    def _on_tick(self, event: SpinnerTick) -> list[Command]:
        spinner = self.snapshot.spinner
        if spinner is None:
            return []
        follow_up = spinner.update(event)
        return [follow_up] if follow_up else []

    def _ignore_tick(self, event: SpinnerTick) -> list[Command]:
        return []

    # Results ----------------------------------------------------------------

    def _on_result(self, event: FetchCompleted) -> list[Command]:
        snap = self.snapshot
        result = event.result
        if isinstance(result, Success):
            snap.result = result.payload.to_text()
            snap.error = None
        elif isinstance(result, Failure):
            logger.info(f"Request failed: {result.message}")
            snap.error = result.message
            snap.result = result.message
        else:
            raise TypeError(f"Unknown fetch result: {result!r}")

        snap.spinner = None
        self._set_state(InteractionState.DISPLAYING)
        return []

    def _ignore_result(self, event: FetchCompleted) -> list[Command]:
        logger.debug(f"Discarding result received in {self.snapshot.state.value}")
        return []

    # -------------------------------------------------------------------------
    # Render
    # -------------------------------------------------------------------------

    def render(self) -> RenderableType:
        """Build the frame for the current snapshot."""
        return render_frame(self.snapshot, self.options.styles, self.options.title)


_S = InteractionState

TRANSITIONS: dict[tuple[InteractionState, type], Handler] = {
    (_S.AWAITING_INPUT, KeyPressed): InteractionController._on_key,
    (_S.AWAITING_INPUT, WindowResized): InteractionController._on_resize,
    (_S.AWAITING_INPUT, SpinnerTick): InteractionController._ignore_tick,
    (_S.AWAITING_INPUT, FetchCompleted): InteractionController._ignore_result,
    (_S.PENDING, KeyPressed): InteractionController._on_key,
    (_S.PENDING, WindowResized): InteractionController._on_resize,
    (_S.PENDING, SpinnerTick): InteractionController._on_tick,
    (_S.PENDING, FetchCompleted): InteractionController._on_result,
    (_S.DISPLAYING, KeyPressed): InteractionController._on_key,
    (_S.DISPLAYING, WindowResized): InteractionController._on_resize,
    (_S.DISPLAYING, SpinnerTick): InteractionController._ignore_tick,
    (_S.DISPLAYING, FetchCompleted): InteractionController._ignore_result,
}
