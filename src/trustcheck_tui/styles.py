"""Panel styles for the rendered frames.

Everything is parameterised by one accent colour, used for borders. The
input box is a Textual widget and takes the same accent (see app.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.box import ROUNDED, Box

DEFAULT_ACCENT = "color(36)"


@dataclass(frozen=True)
class PanelTemplate:
    """Border and sizing for one bordered box."""

    box: Box = ROUNDED
    padding: int = 1
    width: int = 80
    height: int | None = None
    center: bool = False  # center content horizontally and vertically


@dataclass(frozen=True)
class StyleConfig:
    """Named templates sharing one accent colour.

    result  - rounded box around the result text
    busy    - rounded box with the spinner centered inside
    """

    accent: str = DEFAULT_ACCENT
    result: PanelTemplate = field(default_factory=lambda: PanelTemplate(height=20))
    busy: PanelTemplate = field(default_factory=lambda: PanelTemplate(height=20, center=True))
