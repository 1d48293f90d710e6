"""Frame rendering.

`render_frame` is a pure function of the controller snapshot: it reads
the state and builds a rich renderable, nothing more. The runtime driver
decides when to paint it.

While awaiting input the frame is only the title line; the app stacks the
input widget under it and centres the pair:

    ┌──────────────────────── terminal ────────────────────────┐
    │                                                          │
    │                      Website check         <- frame      │
    │        ┌──────────────────────────────────────┐          │
    │        │ example.com                          │ <- input │
    │        └──────────────────────────────────────┘          │
    │                                                          │
    └──────────────────────────────────────────────────────────┘
"""

from __future__ import annotations

from rich.align import Align
from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from .state import ControllerSnapshot, InteractionState
from .styles import PanelTemplate, StyleConfig

PLACEHOLDER = "Loading..."


def framed(
    template: PanelTemplate,
    content: RenderableType,
    accent: str,
    max_width: int,
    max_height: int,
) -> Panel:
    """Wrap content in a bordered box described by template."""
    if template.center:
        content = Align.center(content, vertical="middle")
    height = min(template.height, max_height) if template.height else None
    return Panel(
        content,
        box=template.box,
        border_style=accent,
        padding=template.padding,
        width=min(template.width, max_width),
        height=height,
    )


def render_frame(
    snapshot: ControllerSnapshot,
    styles: StyleConfig,
    title: str = "",
) -> RenderableType:
    """Build the displayable frame for a snapshot.

    Returns the placeholder string until the terminal size is known. While
    awaiting input, the centred title line. Otherwise the state's panel
    centred in the full terminal area.
    """
    if not snapshot.has_size:
        return PLACEHOLDER

    width, height = snapshot.width, snapshot.height

    if snapshot.state == InteractionState.AWAITING_INPUT:
        return Align.center(Text(title, style="bold"), width=width)

    if snapshot.state == InteractionState.PENDING:
        frame = snapshot.spinner.render() if snapshot.spinner else Text("")
        body = framed(styles.busy, frame, styles.accent, width, height)
    else:
        body = framed(styles.result, Text(snapshot.result), styles.accent, width, height)

    return Align(body, align="center", vertical="middle", width=width, height=height)
