"""
Action model for the command prompt.

Defines the calling interfaces, the closed set of action kinds, the
per-kind argument payloads and the flat Action record produced by the
classifier. An action rejected by the calling interface keeps its kind and
payload and records the rejecting interface in `rejected_by`.
"""

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Union

from pane_prompt.selection import Selection


class Interface(Enum):
    """Origin of a command, or the interface tag of a grammar entry."""

    ALL = "all"
    CONSOLE = "console"
    PIPE = "pipe"

    @property
    def supports_navigation(self) -> bool:
        """Check if this interface can move a row cursor."""
        return self is Interface.CONSOLE

    def permits(self, tag: "Interface") -> bool:
        """
        Check if an entry tagged `tag` is usable from this interface.

        Args:
            tag: Interface tag of a grammar entry.

        Returns:
            True for the ALL context, ALL-tagged entries and matching tags.
        """
        return self is Interface.ALL or tag is Interface.ALL or tag is self


class ActionKind(Enum):
    """Action kinds, in grammar table order."""

    UNRECOGNIZED = "unrecognized"
    HELP = "help"
    HELP_CONSOLE = "help_console"
    HELP_PIPE = "help_pipe"
    DETACH_ME = "detach_me"
    DETACH_OTHERS = "detach_others"
    DETACH_EVERYONE = "detach_everyone"
    NEW_PANE = "new_pane"
    EDIT = "edit"
    RUN = "run"
    CLEAR_SCREEN = "clear_screen"
    CLOSE_FOCUS = "close_focus"
    CLOSE_FOCUS_TAB = "close_focus_tab"
    EDIT_SCROLLBACK = "edit_scrollback"
    CLOSE_TERMINAL_PANE = "close_terminal_pane"
    CLOSE_PLUGIN_PANE = "close_plugin_pane"

    @property
    def is_help(self) -> bool:
        return self in HELP_KINDS

    @property
    def is_detach(self) -> bool:
        return self in DETACH_KINDS


HELP_KINDS = frozenset({ActionKind.HELP, ActionKind.HELP_CONSOLE, ActionKind.HELP_PIPE})
DETACH_KINDS = frozenset(
    {ActionKind.DETACH_ME, ActionKind.DETACH_OTHERS, ActionKind.DETACH_EVERYONE}
)


@dataclass(frozen=True)
class HelpArgs:
    """
    Help listing request.

    Attributes:
        subset: Requested subset (ALL for plain help).
        perspective: Interface whose point of view the listing takes.
        selection: Row cursor, or Unbounded.
    """

    subset: Interface
    perspective: Interface
    selection: Selection


@dataclass(frozen=True)
class EditArgs:
    """File to open in the editor, with an optional line number."""

    path: str
    line: Optional[int] = None


@dataclass(frozen=True)
class NewPaneArgs:
    """Directory for a new terminal pane."""

    path: str


@dataclass(frozen=True)
class RunArgs:
    """
    Command to run in a new pane.

    Attributes:
        path: Executable path ("" when not yet typed).
        args: Positional arguments, in order.
        cwd: Working directory override.
        env: Environment overrides, or None when `---env` was not given.
    """

    path: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class PaneIdArgs:
    """Target pane id for close operations (None means the focused one)."""

    pane_id: Optional[int] = None


Payload = Union[HelpArgs, EditArgs, NewPaneArgs, RunArgs, PaneIdArgs]


@dataclass(frozen=True)
class Action:
    """
    Classified command.

    Attributes:
        kind: Action kind.
        payload: Parsed arguments, None for kinds without arguments.
        rejected_by: Interface that rejected the action, None if allowed.
    """

    kind: ActionKind
    payload: Optional[Payload] = None
    rejected_by: Optional[Interface] = None

    @property
    def is_recognized(self) -> bool:
        return self.kind is not ActionKind.UNRECOGNIZED

    @property
    def is_unavailable(self) -> bool:
        return self.rejected_by is not None

    @property
    def is_executable(self) -> bool:
        """Check if the action may run without a force override."""
        return self.is_recognized and not self.is_unavailable

    def reject(self, interface: Interface) -> "Action":
        """
        Mark the action as unavailable from `interface`.

        Unrecognized actions are returned unchanged. Rejecting an already
        rejected action replaces the rejecting interface, so wrapping never
        nests.
        """
        if not self.is_recognized:
            return self
        return replace(self, rejected_by=interface)

    def unwrap(self) -> "Action":
        """Return the inner action of an Unavailable one, for forced runs."""
        if self.rejected_by is None:
            return self
        return replace(self, rejected_by=None)


UNRECOGNIZED = Action(ActionKind.UNRECOGNIZED)


def action_to_dict(action: Action) -> dict:
    """
    Convert an action to a JSON-serializable dict.

    Args:
        action: Action to convert.

    Returns:
        Dict with `kind`, `rejected_by` and `payload` keys.
    """
    payload = action.payload
    if payload is None:
        data = None
    elif isinstance(payload, HelpArgs):
        selection = payload.selection
        data = {
            "subset": payload.subset.value,
            "perspective": payload.perspective.value,
            "row": getattr(selection, "row", None),
            "bound": getattr(selection, "bound", None),
        }
    else:
        data = asdict(payload)

    return {
        "kind": action.kind.value,
        "rejected_by": action.rejected_by.value if action.rejected_by else None,
        "payload": data,
    }
