"""
Key handling tests for the console app, driven through Textual's pilot.
"""

import asyncio

from pane_prompt.actions import ActionKind, Interface, RunArgs
from pane_prompt.dispatch import EnvironmentSource, LaunchOptions, LoggingExecutor
from pane_prompt.selection import Cursor
from pane_prompt.tui.console import PanePromptApp


class RecordingApp(PanePromptApp):
    """Console app that records exit requests instead of stopping."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.exit_requests = 0

    def exit(self, *args, **kwargs):
        self.exit_requests += 1


def typed(text):
    """Key presses that type `text`."""
    return list(text)


def run_keys(*keys, executor=None, options=None):
    """Run the app headless, press `keys` and return the app."""
    app = RecordingApp(executor=executor, options=options)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press(*keys)
            await pilot.pause()

    asyncio.run(scenario())
    return app


class TestEditing:
    """Test typing into the prompt."""

    def test_typing_classifies(self):
        """Test printable keys are pushed and reclassified."""
        app = run_keys(*typed("run ls"))

        assert app.buffer.text == "run ls"
        assert app.buffer.action.kind is ActionKind.RUN
        assert app.buffer.interface is Interface.CONSOLE

    def test_backspace(self):
        """Test backspace removes the last character."""
        app = run_keys(*typed("runx"), "backspace")

        assert app.buffer.text == "run"

    def test_escape_clears(self):
        """Test escape clears a non-empty buffer without quitting."""
        app = run_keys(*typed("run ls"), "escape")

        assert app.buffer.text == ""
        assert app.exit_requests == 0

    def test_escape_on_empty_quits(self):
        """Test escape on an empty buffer quits."""
        app = run_keys("escape")

        assert app.exit_requests == 1

    def test_escape_twice_quits(self):
        """Test first escape clears, second quits."""
        app = run_keys(*typed("help"), "escape", "escape")

        assert app.buffer.text == ""
        assert app.exit_requests == 1


class TestHelpNavigation:
    """Test browsing the help listing."""

    def test_down_moves_cursor(self):
        """Test down advances the help cursor."""
        app = run_keys(*typed("help"), "down", "down")

        assert app.buffer.action.payload.selection == Cursor(2, 14)

    def test_up_wraps(self):
        """Test up from the first row wraps to the last."""
        app = run_keys(*typed("help"), "up")

        assert app.buffer.action.payload.selection == Cursor(13, 14)

    def test_enter_confirms_selection(self):
        """Test enter replaces the buffer with the selected command."""
        executor = LoggingExecutor()
        app = run_keys(*typed("help"), "down", "down", "enter", executor=executor)

        assert app.buffer.text == "help-pipe"
        assert app.buffer.action.kind is ActionKind.HELP_PIPE
        assert executor.calls == []


class TestSubmit:
    """Test dispatching from the console."""

    def test_enter_dispatches(self):
        """Test enter runs the action and clears the buffer."""
        executor = LoggingExecutor()
        app = run_keys(*typed("run ls"), "enter", executor=executor)

        assert executor.calls == [("run", RunArgs(path="ls"))]
        assert app.buffer.text == ""

    def test_enter_unrecognized_keeps_buffer(self):
        """Test enter on an unknown command dispatches nothing."""
        executor = LoggingExecutor()
        app = run_keys(*typed("launch"), "enter", executor=executor)

        assert executor.calls == []
        assert app.buffer.text == "launch"

    def test_enter_refuses_unavailable(self):
        """Test enter refuses a pipe-only command."""
        executor = LoggingExecutor()
        app = run_keys(*typed("detach-everyone"), "enter", executor=executor)

        assert app.buffer.action.rejected_by is Interface.CONSOLE
        assert executor.calls == []
        assert app.buffer.text == "detach-everyone"

    def test_force_dispatches_unavailable(self):
        """Test ctrl+o runs a refused command anyway."""
        executor = LoggingExecutor()
        app = run_keys(*typed("detach-everyone"), "enter", "ctrl+o", executor=executor)

        assert executor.calls == [("detach", ActionKind.DETACH_EVERYONE)]
        assert app.buffer.text == ""


class TestLaunchToggles:
    """Test the launch option bindings."""

    def test_toggle_floating(self):
        """Test ctrl+f flips floating and leaves the buffer alone."""
        options = LaunchOptions()
        app = run_keys(*typed("run"), "ctrl+f", options=options)

        assert options.floating
        assert app.buffer.text == "run"

    def test_cycle_environment(self):
        """Test ctrl+r advances the environment source."""
        options = LaunchOptions()
        run_keys("ctrl+r", "ctrl+r", options=options)

        assert options.environment_source is EnvironmentSource.LAST_PANE

    def test_options_reach_executor(self):
        """Test toggles apply to the next dispatched action."""
        executor = LoggingExecutor()
        options = LaunchOptions()
        run_keys("ctrl+f", *typed("pane"), "enter", executor=executor, options=options)

        assert executor.calls[0][0] == "new_pane"
        assert options.floating
