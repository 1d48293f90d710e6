"""Controller state types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .widgets.busy import BusyIndicator
from .widgets.entry import TextEntry


class InteractionState(str, Enum):
    """Where the form is in its request cycle."""

    AWAITING_INPUT = "awaiting_input"
    PENDING = "pending"
    DISPLAYING = "displaying"


class AfterResultPolicy(str, Enum):
    """What the confirm key does once a result is on screen."""

    SINGLE_SHOT = "single-shot"  # DISPLAYING is terminal
    RESET = "reset"  # clear everything and accept a new query


@dataclass
class ControllerSnapshot:
    """Complete mutable state of the controller.

    result is non-empty only while DISPLAYING; error is set only when the
    last completed request failed. width/height stay None until the first
    WindowResized event. spinner exists only while PENDING. entry is a
    handle on the input widget, which edits itself.
    """

    entry: TextEntry
    state: InteractionState = InteractionState.AWAITING_INPUT
    spinner: BusyIndicator | None = None
    query: str = ""
    result: str = ""
    error: str | None = None
    width: int | None = None
    height: int | None = None

    @property
    def has_size(self) -> bool:
        return bool(self.width) and bool(self.height)
