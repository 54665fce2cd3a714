"""
Console widgets.

Prompt line, action summary, help listing and controls line. Widgets only
render what the buffer exposes; they never classify anything themselves.
"""

from typing import List

from rich.markup import escape
from textual.widgets import Static

from pane_prompt.actions import (
    Action,
    EditArgs,
    HelpArgs,
    NewPaneArgs,
    PaneIdArgs,
    RunArgs,
)
from pane_prompt.dispatch import LaunchOptions
from pane_prompt.grammar import HelpRow, entry_for
from pane_prompt.selection import Cursor, Selection

REQUIRED = "bold grey62"
OPTIONAL = "bold grey30"
UNSETTABLE = "bold dark_orange3"

IDLE_HINT = 'Type a command or "help" if you need a list of commands'


def _field(style: str, label: str, value) -> str:
    return f"[{style}]{label}:[/] {escape(str(value))}"


def describe_action(action: Action) -> str:
    """
    Render an action as console markup.

    Args:
        action: Action to describe.

    Returns:
        Multi-line markup string.
    """
    if not action.is_recognized:
        return IDLE_HINT

    entry = entry_for(action.kind)
    lines = [f"[{REQUIRED}]ACTION:[/] {entry.name}"]
    if action.is_unavailable:
        lines.insert(
            0,
            f"[bold red]UNAVAILABLE[/] from {action.rejected_by.value} "
            f"(needs {entry.interface.value}) - Ctrl+O to force",
        )

    payload = action.payload
    if isinstance(payload, EditArgs):
        lines.append(_field(OPTIONAL, "PATH", repr(payload.path)))
        lines.append(_field(OPTIONAL, "LINE", payload.line if payload.line is not None else "-"))
    elif isinstance(payload, NewPaneArgs):
        lines.append(_field(REQUIRED, "PATH", payload.path or "."))
    elif isinstance(payload, RunArgs):
        lines.append(_field(REQUIRED, "COMMAND", repr(payload.path)))
        lines.append(_field(OPTIONAL, "ARGUMENTS", payload.args))
        lines.append(_field(OPTIONAL, "DIRECTORY", payload.cwd or "-"))
        lines.append(_field(OPTIONAL, "ENVIRONMENT", payload.env or "-"))
    elif isinstance(payload, PaneIdArgs):
        pane = payload.pane_id if payload.pane_id is not None else "focused"
        lines.append(_field(OPTIONAL, "PANE", pane))
    elif isinstance(payload, HelpArgs):
        if isinstance(payload.selection, Cursor):
            lines.append("[dim]Up/Down to browse, Enter to pick[/dim]")
    else:
        lines.append(f"[{UNSETTABLE}]no arguments[/]")

    return "\n".join(lines)


def render_listing(rows: List[HelpRow], selection: Selection) -> str:
    """
    Render help rows; the selected row (or every row without a cursor) is
    expanded with its aliases and interface restriction.
    """
    lines = []
    for i, row in enumerate(rows):
        selected = isinstance(selection, Cursor) and selection.row == i
        expanded = selected or not isinstance(selection, Cursor)
        name = f"[reverse]{row.name}[/reverse]" if selected else f"[bold]{row.name}[/bold]"
        lines.append(f"{name}:\t{escape(row.description)}")
        if expanded:
            aliases = escape(", ".join(row.aliases))
            lines.append(f"\t[{OPTIONAL}]Shortcuts:[/] {aliases}")
            if row.interface is not None:
                lines.append(f"\t[{UNSETTABLE}]Only from:[/] {row.interface.value}")
    return "\n".join(lines)


class PromptLine(Static):
    """Current buffer text with a block cursor."""

    DEFAULT_CSS = """
    PromptLine {
        height: 1;
        padding: 0 1;
    }
    """

    def update_text(self, text: str) -> None:
        self.update(f"[bold cyan]PROMPT:[/bold cyan] {escape(text)}[reverse] [/reverse]")


class ActionPanel(Static):
    """Summary of the classified action."""

    DEFAULT_CSS = """
    ActionPanel {
        border: solid cyan;
        height: auto;
        padding: 0 1;
    }
    """

    def update_action(self, action: Action) -> None:
        self.update(describe_action(action))


class HelpListing(Static):
    """Help listing, shown only while a help action is active."""

    DEFAULT_CSS = """
    HelpListing {
        border: solid green;
        height: auto;
        padding: 0 1;
    }
    """

    def update_listing(self, rows: List[HelpRow], selection: Selection) -> None:
        self.display = bool(rows)
        self.update(render_listing(rows, selection))


class ControlsLine(Static):
    """Current launch toggles and their keys."""

    DEFAULT_CSS = """
    ControlsLine {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    def update_options(self, options: LaunchOptions) -> None:
        floating = "[green]floating[/green]" if options.floating else "tiled"
        self.update(
            f"Ctrl+F {floating}  Ctrl+R env: {options.environment_source.value}  "
            f"Ctrl+O force  Esc clear/quit"
        )
