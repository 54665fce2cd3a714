"""
Action grammar table.

Ordered registry of every command the prompt understands: canonical name,
aliases, one-line description, interface tag and argument parser. The
table is built once at import time and never modified; the classifier
scans it in order and the first entry whose aliases contain the head token
wins.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from pane_prompt.actions import (
    Action,
    ActionKind,
    EditArgs,
    HelpArgs,
    Interface,
    NewPaneArgs,
    PaneIdArgs,
    Payload,
    RunArgs,
)
from pane_prompt.errors import GrammarError
from pane_prompt.selection import Cursor, Unbounded

# Flags understood by `run`
CWD_FLAG = "---cwd"
ENV_FLAG = "---env"

ArgParser = Callable[[List[str], Interface], Optional[Payload]]


@dataclass(frozen=True)
class GrammarEntry:
    """
    Grammar table entry.

    Attributes:
        kind: Action kind produced on match.
        name: Canonical name, also the first alias.
        aliases: Lower-case names accepted for this entry.
        description: One-line description for the help listing.
        interface: Interface the entry is usable from (ALL = everywhere).
        parse: Argument parser (argument tokens, calling interface) -> payload.
    """

    kind: ActionKind
    name: str
    aliases: Tuple[str, ...]
    description: str
    interface: Interface
    parse: ArgParser

    def __post_init__(self) -> None:
        if self.kind is ActionKind.UNRECOGNIZED:
            raise GrammarError(self.name, "UNRECOGNIZED has no grammar entry")
        if not self.aliases:
            raise GrammarError(self.name, "alias list is empty")
        if self.aliases[0] != self.name:
            raise GrammarError(self.name, "canonical name must be the first alias")
        for alias in self.aliases:
            if not alias or alias != alias.lower() or len(alias.split()) != 1:
                raise GrammarError(self.name, f"alias '{alias}' is not a lower-case word")

    def matches(self, head: str) -> bool:
        """Check if a head token selects this entry (case-insensitive)."""
        return head.lower() in self.aliases

    def build(self, args: List[str], interface: Interface) -> Action:
        """Parse arguments into this entry's action."""
        return Action(self.kind, self.parse(args, interface))


@dataclass(frozen=True)
class HelpRow:
    """
    One row of the help listing.

    Attributes:
        name: Canonical name.
        aliases: Every accepted alias, canonical name first.
        description: One-line description.
        interface: Required interface, None when usable everywhere.
    """

    name: str
    aliases: Tuple[str, ...]
    description: str
    interface: Optional[Interface]


# Indices are unsigned 64-bit; anything larger is not an index
MAX_INDEX = 2**64 - 1


def _parse_index(token: str) -> Optional[int]:
    """Parse a non-negative decimal integer up to MAX_INDEX, or return None."""
    digits = token[1:] if token.startswith("+") else token
    if digits and digits.isascii() and digits.isdigit():
        value = int(digits)
        if value <= MAX_INDEX:
            return value
    return None


def parse_no_args(args: List[str], interface: Interface) -> None:
    """Technical actions ignore their arguments."""
    return None


def parse_new_pane(args: List[str], interface: Interface) -> NewPaneArgs:
    return NewPaneArgs(path=" ".join(args))


def parse_edit(args: List[str], interface: Interface) -> EditArgs:
    """
    Parse `edit <path...> [line]`.

    The last token is the line number when it is a non-negative integer;
    otherwise it is part of the path.
    """
    if not args:
        return EditArgs(path="")

    *head, last = args
    path = " ".join(head)
    line = _parse_index(last)
    if line is None:
        path = f"{path} {last}" if path else last

    return EditArgs(path=path, line=line)


def parse_run(args: List[str], interface: Interface) -> RunArgs:
    """
    Parse `run <executable> [args...] [---cwd <dir>] [---env k v ...]`.

    Single left-to-right pass. `---cwd` takes the next token (last one
    wins). `---env` turns every following token into key/value pairs for
    the rest of the line; a trailing key without a value is dropped.
    """
    path: Optional[str] = None
    positional: List[str] = []
    cwd: Optional[str] = None
    env: Optional[dict] = None

    tokens = iter(args)
    for token in tokens:
        if env is not None:
            value = next(tokens, None)
            if value is not None:
                env[token] = value
        elif token == CWD_FLAG:
            value = next(tokens, None)
            if value is not None:
                cwd = value
        elif token == ENV_FLAG:
            env = {}
        elif path is None:
            path = token
        else:
            positional.append(token)

    return RunArgs(path=path or "", args=positional, cwd=cwd, env=env)


def parse_pane_id(args: List[str], interface: Interface) -> PaneIdArgs:
    """First token is the pane id; anything unparsable means the focused pane."""
    pane_id = _parse_index(args[0]) if args else None
    return PaneIdArgs(pane_id=pane_id)


def perspective_for(subset: Interface, interface: Interface) -> Interface:
    """
    Interface whose point of view a help listing takes.

    Plain help follows the caller; scoped help follows its subset.
    """
    return interface if subset is Interface.ALL else subset


def _help_parser(subset: Interface) -> ArgParser:
    def parse(args: List[str], interface: Interface) -> HelpArgs:
        perspective = perspective_for(subset, interface)
        if interface.supports_navigation:
            selection = Cursor(0, len(visible_entries(perspective)))
        else:
            selection = Unbounded()
        return HelpArgs(subset=subset, perspective=perspective, selection=selection)

    return parse


# Table order is the match order
GRAMMAR: Tuple[GrammarEntry, ...] = (
    GrammarEntry(
        ActionKind.HELP,
        "help",
        ("help", "h", "?"),
        "List the commands usable from here",
        Interface.ALL,
        _help_parser(Interface.ALL),
    ),
    GrammarEntry(
        ActionKind.HELP_CONSOLE,
        "help-console",
        ("help-console", "help-pane"),
        "List the commands usable from the console pane",
        Interface.ALL,
        _help_parser(Interface.CONSOLE),
    ),
    GrammarEntry(
        ActionKind.HELP_PIPE,
        "help-pipe",
        ("help-pipe",),
        "List the commands usable through a pipe",
        Interface.ALL,
        _help_parser(Interface.PIPE),
    ),
    GrammarEntry(
        ActionKind.DETACH_ME,
        "detach-me",
        ("detach-me", "detach"),
        "Detach this client from the session",
        Interface.CONSOLE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.DETACH_OTHERS,
        "detach-others",
        ("detach-others",),
        "Detach every other client from the session",
        Interface.CONSOLE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.DETACH_EVERYONE,
        "detach-everyone",
        ("detach-everyone",),
        "Detach every client from the session",
        Interface.PIPE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.NEW_PANE,
        "new-pane",
        ("new-pane", "pane"),
        "Open a terminal pane in the given directory",
        Interface.ALL,
        parse_new_pane,
    ),
    GrammarEntry(
        ActionKind.EDIT,
        "edit",
        ("edit", "e"),
        "Open a file in the editor, optionally at a line",
        Interface.ALL,
        parse_edit,
    ),
    GrammarEntry(
        ActionKind.RUN,
        "run",
        ("run", "r"),
        "Run a command in a new pane (---cwd <dir>, ---env <key> <value>...)",
        Interface.ALL,
        parse_run,
    ),
    GrammarEntry(
        ActionKind.CLEAR_SCREEN,
        "clear-screen",
        ("clear-screen", "clear"),
        "Clear the focused pane",
        Interface.CONSOLE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.CLOSE_FOCUS,
        "close-focus",
        ("close-focus", "close"),
        "Close the focused pane",
        Interface.CONSOLE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.CLOSE_FOCUS_TAB,
        "close-focus-tab",
        ("close-focus-tab", "close-tab"),
        "Close the focused tab",
        Interface.CONSOLE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.EDIT_SCROLLBACK,
        "edit-scrollback",
        ("edit-scrollback", "scrollback"),
        "Open the focused pane's scrollback in the editor",
        Interface.CONSOLE,
        parse_no_args,
    ),
    GrammarEntry(
        ActionKind.CLOSE_TERMINAL_PANE,
        "close-terminal-pane",
        ("close-terminal-pane",),
        "Close a terminal pane by id",
        Interface.ALL,
        parse_pane_id,
    ),
    GrammarEntry(
        ActionKind.CLOSE_PLUGIN_PANE,
        "close-plugin-pane",
        ("close-plugin-pane",),
        "Close a plugin pane by id",
        Interface.ALL,
        parse_pane_id,
    ),
)


def find_entry(head: str) -> Optional[GrammarEntry]:
    """
    Find the first grammar entry matching a head token.

    Args:
        head: Command name or alias (any case).

    Returns:
        GrammarEntry if found, None otherwise.
    """
    for entry in GRAMMAR:
        if entry.matches(head):
            return entry
    return None


def entry_for(kind: ActionKind) -> GrammarEntry:
    """
    Get the grammar entry of an action kind.

    Raises:
        KeyError: For UNRECOGNIZED, which has no entry.
    """
    for entry in GRAMMAR:
        if entry.kind is kind:
            return entry
    raise KeyError(kind)


def visible_entries(perspective: Interface) -> List[GrammarEntry]:
    """Entries usable from `perspective`, in table order."""
    return [entry for entry in GRAMMAR if perspective.permits(entry.interface)]


def help_listing(subset: Interface, interface: Interface) -> List[HelpRow]:
    """
    Build the help listing for a subset requested from an interface.

    Args:
        subset: ALL for plain help, CONSOLE or PIPE for scoped help.
        interface: Calling interface.

    Returns:
        One HelpRow per visible entry, in table order.
    """
    return [
        HelpRow(
            name=entry.name,
            aliases=entry.aliases,
            description=entry.description,
            interface=None if entry.interface is Interface.ALL else entry.interface,
        )
        for entry in visible_entries(perspective_for(subset, interface))
    ]
