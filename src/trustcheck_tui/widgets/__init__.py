"""Input and busy-indicator widgets used by the controller."""

from .busy import BusyIndicator
from .entry import QueryInput, TextEntry

__all__ = [
    "BusyIndicator",
    "QueryInput",
    "TextEntry",
]
