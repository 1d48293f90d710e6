"""Tick-driven busy indicator.

Frames are borrowed from rich's spinner table, but unlike rich's own
Spinner (which picks a frame from wall-clock time) this one only moves
when it is handed a tick addressed to it. Each accepted tick produces the
command that schedules the next one, so the indicator keeps itself
animated for as long as somebody keeps feeding its ticks back in.
"""

from __future__ import annotations

import itertools

from rich.spinner import Spinner
from rich.text import Text

from ..events import ScheduleTick, SpinnerTick

_ids = itertools.count(1)


class BusyIndicator:
    """Animated placeholder shown while a request is outstanding.

    Ticks carry the indicator id and a tag. A tick is accepted only if both
    match; anything else is a leftover timer and is dropped.
    """

    def __init__(self, name: str = "monkey", style: str | None = None) -> None:
        spinner = Spinner(name)
        self.name = name
        self.style = style
        self.frames: list[str] = list(spinner.frames)
        self.interval = spinner.interval / 1000.0
        self.id = next(_ids)
        self.tag = 0
        self.frame = 0

    def start(self) -> ScheduleTick:
        """Command for the first tick, delivered immediately."""
        return ScheduleTick(SpinnerTick(self.id, self.tag), delay=0.0)

    def update(self, tick: SpinnerTick) -> ScheduleTick | None:
        """Advance one frame if the tick is ours; return the follow-up tick."""
        if tick.spinner_id != self.id or tick.tag != self.tag:
            return None

        self.frame = (self.frame + 1) % len(self.frames)
        self.tag += 1
        return ScheduleTick(SpinnerTick(self.id, self.tag), delay=self.interval)

    def render(self) -> Text:
        return Text(self.frames[self.frame], style=self.style or "")
