"""TrustCheck TUI - Main Application.

The Textual app is the runtime driver for the interaction controller. It
owns the event loop and does three things:

- Translates Textual key/resize events into controller events
- Executes the commands the controller returns (timers, the request
  thread, quitting)
- Paints the controller's frame after every update

    ┌──────────────────────────────────────────────────────────┐
    │                      Website check                       │
    │        ┌──────────────────────────────────────┐          │
    │        │ example.com                          │          │
    │        └──────────────────────────────────────┘          │
    └──────────────────────────────────────────────────────────┘

The request runs on a daemon thread so that quitting never waits for it.
Its only way back into the app is a FetchFinished message, handled on the
event loop like any other event.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from typing import TYPE_CHECKING

from rich.color import Color as RichColor
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.color import Color
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Static

from .client import RequestClient
from .controller import InteractionController
from .events import (
    CONFIRM_KEY,
    QUIT_KEY,
    Command,
    Event,
    FetchCompleted,
    IssueFetch,
    KeyPressed,
    Quit,
    ScheduleTick,
    WindowResized,
)
from .models import FetchResult
from .state import InteractionState
from .view import PLACEHOLDER
from .widgets.entry import QueryInput

if TYPE_CHECKING:
    from .settings import Settings

logger = logging.getLogger(__name__)


class TrustCheckApp(App):
    """Single-query form: type a host, press Enter, read the report.

    Keyboard:
        Enter       - Submit the query
        Ctrl+C      - Quit (also Ctrl+Q)
        other keys  - Edit the query
    """

    CSS = """
    Screen {
        align: center middle;
        overflow: hidden hidden;
    }

    #frame {
        width: 100%;
        height: 100%;
    }

    #frame.-title {
        height: auto;
    }
    """

    TITLE = "Website check"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+c", "quit_form", "Quit", show=False, priority=True),
        Binding("ctrl+q", "quit_form", "Quit", show=False, priority=True),
    ]

    class FetchFinished(Message):
        """Posted from the request thread when the request is done."""

        def __init__(self, result: FetchResult) -> None:
            super().__init__()
            self.result = result

    def __init__(
        self,
        controller: InteractionController | None = None,
        client: RequestClient | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.controller = controller or InteractionController()
        self.client = client or RequestClient()
        # Set once Quit has been executed; later events are dropped
        self._quit_requested = False

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Static(PLACEHOLDER, id="frame")
        yield self.controller.entry.widget

    def on_mount(self) -> None:
        """Apply the accent and report the initial size so the first frame can be drawn."""
        accent = RichColor.parse(self.controller.options.styles.accent)
        self.controller.entry.widget.set_accent(Color.from_rich_color(accent))
        self.deliver(WindowResized(self.size.width, self.size.height))

    # -------------------------------------------------------------------------
    # Textual events -> controller events
    # -------------------------------------------------------------------------

    def on_resize(self, event: events.Resize) -> None:
        self.deliver(WindowResized(event.size.width, event.size.height))

    def on_key(self, event: events.Key) -> None:
        """Keys the input did not take (or every key, while it is disabled)."""
        event.stop()
        self.deliver(KeyPressed(event.key, event.character))

    def on_query_input_confirmed(self, message: QueryInput.Confirmed) -> None:
        self.deliver(KeyPressed(CONFIRM_KEY))

    def action_quit_form(self) -> None:
        """Quit key, routed through the controller like any other key."""
        self.deliver(KeyPressed(QUIT_KEY))

    def on_trust_check_app_fetch_finished(self, message: FetchFinished) -> None:
        self.deliver(FetchCompleted(message.result))

    # -------------------------------------------------------------------------
    # Update cycle
    # -------------------------------------------------------------------------

    def deliver(self, event: Event) -> None:
        """Run one controller update, execute its commands, repaint."""
        if self._quit_requested:
            logger.debug(f"Dropping {type(event).__name__} after quit")
            return

        for command in self.controller.update(event):
            self._execute(command)

        if not self._quit_requested:
            self._paint()

    def _execute(self, command: Command) -> None:
        if isinstance(command, ScheduleTick):
            callback = partial(self.deliver, command.tick)
            if command.delay > 0:
                self.set_timer(command.delay, callback, name="spinner-tick")
            else:
                self.call_later(callback)
        elif isinstance(command, IssueFetch):
            thread = threading.Thread(
                target=self._fetch,
                args=(command.query,),
                name="fetch",
                daemon=True,
            )
            thread.start()
        elif isinstance(command, Quit):
            self._quit_requested = True
            self.exit(return_code=0)
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def _fetch(self, query: str) -> None:
        """Request thread body: run the request and post the result back."""
        result = self.client.fetch(query)
        if self._quit_requested:
            logger.debug("Request finished after quit; result discarded")
            return
        self.post_message(self.FetchFinished(result))

    def _paint(self) -> None:
        try:
            frame = self.query_one("#frame", Static)
        except NoMatches:
            # Not composed yet, or already shutting down
            return

        snapshot = self.controller.snapshot
        awaiting = snapshot.state == InteractionState.AWAITING_INPUT and snapshot.has_size

        # The input only takes keys while it is on screen
        entry = self.controller.entry.widget
        entry.display = awaiting
        entry.disabled = not awaiting
        if awaiting and not entry.has_focus:
            entry.focus()

        frame.set_class(awaiting, "-title")
        frame.update(self.controller.render())


def run(settings: Settings | None = None) -> int:
    """Run the TrustCheck TUI application.

    Args:
        settings: Loaded settings (default: built-in defaults)

    Returns:
        The app's return code
    """
    from .settings import Settings

    settings = settings or Settings()

    controller = InteractionController(settings.controller_options())
    client = RequestClient(settings.client_config())
    logger.info(f"Starting with endpoint {client.config.endpoint}")

    app = TrustCheckApp(controller=controller, client=client)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    run()
