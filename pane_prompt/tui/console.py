"""
Console TUI using Textual.

Feeds key events into a CommandBuffer under the CONSOLE interface and
renders the prompt, the classified action and the help listing. Confirmed
actions go to an Executor; the bundled LoggingExecutor only logs them.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from pane_prompt.actions import HelpArgs
from pane_prompt.buffer import CommandBuffer
from pane_prompt.config import load_config
from pane_prompt.dispatch import Executor, LaunchOptions, LoggingExecutor, dispatch
from pane_prompt.errors import DispatchRefusedError
from pane_prompt.selection import Unbounded
from pane_prompt.tui.widgets import ActionPanel, ControlsLine, HelpListing, PromptLine

logger = logging.getLogger(__name__)


class PanePromptApp(App):
    """
    Command prompt application.

    Every key press mutates the buffer, which reclassifies the whole line.
    """

    CSS = """
    Screen {
        layout: vertical;
    }

    #prompt {
        margin: 1 0 0 0;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+f", "toggle_floating", "Floating", priority=True),
        Binding("ctrl+r", "cycle_environment", "Environment", priority=True),
        Binding("ctrl+o", "force", "Force", priority=True),
    ]

    def __init__(
        self,
        executor: Optional[Executor] = None,
        options: Optional[LaunchOptions] = None,
    ) -> None:
        super().__init__()
        self.buffer = CommandBuffer()
        self.executor = executor if executor is not None else LoggingExecutor()
        self.options = options if options is not None else LaunchOptions()

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()
        yield PromptLine(id="prompt")
        yield ActionPanel(id="action")
        yield HelpListing(id="listing")
        yield ControlsLine(id="controls")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app starts."""
        self.title = "pane-prompt"
        self.refresh_view()

    def refresh_view(self) -> None:
        """Redraw every widget from the buffer state."""
        action = self.buffer.action
        self.query_one(PromptLine).update_text(self.buffer.text)
        self.query_one(ActionPanel).update_action(action)
        selection = action.payload.selection if isinstance(action.payload, HelpArgs) else Unbounded()
        self.query_one(HelpListing).update_listing(self.buffer.listing(), selection)
        self.query_one(ControlsLine).update_options(self.options)

    def on_key(self, event: events.Key) -> None:
        """Route editing and navigation keys to the buffer."""
        if event.key == "backspace":
            self.buffer.pop()
        elif event.key == "up":
            self.buffer.select_previous()
        elif event.key == "down":
            self.buffer.select_next()
        elif event.key == "enter":
            self.submit()
        elif event.key == "escape":
            if len(self.buffer) == 0:
                self.exit()
                return
            self.buffer.clear()
        elif event.is_printable and event.character:
            self.buffer.push(event.character)
        else:
            return

        event.prevent_default()
        event.stop()
        self.refresh_view()

    def submit(self, force: bool = False) -> None:
        """Commit the help selection, or dispatch the current action."""
        if self.buffer.confirm_selection():
            return

        try:
            executed = dispatch(self.buffer.action, self.executor, self.options, force=force)
        except DispatchRefusedError as e:
            self.notify(str(e), severity="warning")
            return
        except Exception as e:
            logger.error(f"Executor failed: {e}", exc_info=True)
            self.notify(f"Command failed: {e}", severity="error")
            return

        self.notify(f"{executed.kind.value} sent", severity="information")
        self.buffer.clear()

    def action_force(self) -> None:
        """Dispatch even if the console may not use the action."""
        self.submit(force=True)
        self.refresh_view()

    def action_toggle_floating(self) -> None:
        self.options.toggle_floating()
        self.refresh_view()

    def action_cycle_environment(self) -> None:
        self.options.cycle_environment()
        self.refresh_view()


def main() -> None:
    """
    Launch console application.

    Entry point for pane-prompt command.
    """
    config = load_config()

    log_dir = Path(config.logging.log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_filename = log_dir / f"pane_prompt_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    # File only: console output would corrupt the TUI
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s.%(msecs)03d [%(levelname)-8s] %(name)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.FileHandler(log_filename)],
    )

    logger.info("=" * 80)
    logger.info("pane-prompt starting")
    logger.info(f"Log file: {log_filename}")
    logger.info("=" * 80)

    try:
        app = PanePromptApp(options=config.launch_options())
        app.run()
    except Exception as e:
        logger.critical(f"TUI crashed: {e}", exc_info=True)
        raise
    finally:
        logger.info("pane-prompt exiting")


if __name__ == "__main__":
    main()
