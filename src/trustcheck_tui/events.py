"""Events consumed by the controller and commands it emits.

Events flow in from the runtime driver (keyboard, window, timers, finished
requests). Commands flow out and are executed by the driver; their
results come back as events. Nothing here holds behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import FetchResult

CONFIRM_KEY = "enter"
QUIT_KEY = "ctrl+c"

# =============================================================================
# Inbound events
# =============================================================================


@dataclass(frozen=True)
class KeyPressed:
    """A key press.

    Attributes:
        key: Textual key name ("enter", "ctrl+c", "a", "full_stop", ...)
        character: Printable character for the key, if any
    """

    key: str
    character: str | None = None


@dataclass(frozen=True)
class WindowResized:
    """Terminal dimensions changed (or were reported for the first time)."""

    width: int
    height: int


@dataclass(frozen=True)
class SpinnerTick:
    """Periodic tick addressed to one busy indicator instance."""

    spinner_id: int
    tag: int


@dataclass(frozen=True)
class FetchCompleted:
    """The outstanding request finished."""

    result: FetchResult


Event = KeyPressed | WindowResized | SpinnerTick | FetchCompleted

EVENT_KINDS: tuple[type, ...] = (KeyPressed, WindowResized, SpinnerTick, FetchCompleted)


# =============================================================================
# Outbound commands
# =============================================================================


@dataclass(frozen=True)
class ScheduleTick:
    """Deliver `tick` back to the controller after `delay` seconds."""

    tick: SpinnerTick
    delay: float = 0.0


@dataclass(frozen=True)
class IssueFetch:
    """Run one request for `query` off the event loop."""

    query: str


@dataclass(frozen=True)
class Quit:
    """Terminate the application immediately."""


Command = ScheduleTick | IssueFetch | Quit
