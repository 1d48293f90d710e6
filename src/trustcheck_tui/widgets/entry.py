"""Query input.

The text entry is Textual's own Input; cursor movement, deletion and the
clipboard are handled by the widget and its bindings. This module adds:

- QueryInput, which intercepts Enter so confirming goes through the
  controller instead of Input's submit action
- TextEntry, the handle the controller holds. It reads the value and
  clears the widget, and never looks further inside it

    ┌──────────────────────────────────────────────┐
    │ example.com                                  │
    └──────────────────────────────────────────────┘
"""

from __future__ import annotations

from textual import events
from textual.color import Color
from textual.message import Message
from textual.widgets import Input

from ..events import CONFIRM_KEY


class QueryInput(Input):
    """Single-line input with Enter to confirm.

    Keyboard:
        Enter       - Confirm the query
        other keys  - Input's own editing bindings
    """

    DEFAULT_CSS = """
    QueryInput {
        width: 80;
        max-width: 100%;
        border: solid $primary;
        padding: 0 1;
    }
    """

    class Confirmed(Message):
        """Fired when user presses Enter."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def _on_key(self, event: events.Key) -> None:
        """Handle key events - intercept Enter."""
        if event.key == CONFIRM_KEY:
            event.prevent_default()
            event.stop()
            self.post_message(self.Confirmed(self.value))

    def set_accent(self, color: Color) -> None:
        """Draw the border in the accent colour, focused or not."""
        self.styles.border = ("solid", color)


class TextEntry:
    """Controller-side handle on the query input.

    Keys reach the widget through Textual's focus chain, so there is
    nothing to replay here. While the widget is disabled (any state other
    than awaiting input) it receives no keys at all.
    """

    def __init__(
        self,
        placeholder: str = "",
        char_limit: int | None = None,
        widget: QueryInput | None = None,
    ) -> None:
        self.widget = widget or QueryInput(
            placeholder=placeholder,
            max_length=char_limit or 0,
            select_on_focus=False,
            id="entry",
        )

    def value(self) -> str:
        """Current input contents."""
        return self.widget.value

    def clear(self) -> None:
        self.widget.clear()
