"""
Action dispatch.

Hands classified actions to an Executor, which owns every side effect
(opening panes, detaching clients, ...). Dispatch refuses unrecognized
actions and, unless forced, actions the calling interface may not use.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from pane_prompt.actions import (
    Action,
    ActionKind,
    EditArgs,
    HelpArgs,
    NewPaneArgs,
    PaneIdArgs,
    RunArgs,
)
from pane_prompt.errors import DispatchRefusedError

logger = logging.getLogger(__name__)


class EnvironmentSource(Enum):
    """Where commands started with `run` take their environment from."""

    SESSION = "session"
    SHELL = "shell"
    LAST_PANE = "last-pane"

    def next(self) -> "EnvironmentSource":
        """Next source in cycle order, wrapping around."""
        members = list(EnvironmentSource)
        return members[(members.index(self) + 1) % len(members)]


@dataclass
class LaunchOptions:
    """
    Console toggles passed to the executor with every action.

    Attributes:
        floating: Open new panes floating instead of tiled.
        environment_source: Environment used by `run`.
    """

    floating: bool = False
    environment_source: EnvironmentSource = EnvironmentSource.SESSION

    def toggle_floating(self) -> None:
        self.floating = not self.floating

    def cycle_environment(self) -> None:
        self.environment_source = self.environment_source.next()


class Executor(ABC):
    """Side-effect owner for dispatched actions."""

    @abstractmethod
    def help(self, args: HelpArgs, options: LaunchOptions) -> None:
        """Show the help listing."""

    @abstractmethod
    def detach(self, kind: ActionKind, options: LaunchOptions) -> None:
        """Detach clients (DETACH_ME, DETACH_OTHERS or DETACH_EVERYONE)."""

    @abstractmethod
    def new_pane(self, args: NewPaneArgs, options: LaunchOptions) -> None:
        """Open a terminal pane."""

    @abstractmethod
    def edit(self, args: EditArgs, options: LaunchOptions) -> None:
        """Open a file in the editor."""

    @abstractmethod
    def run(self, args: RunArgs, options: LaunchOptions) -> None:
        """Run a command in a new pane."""

    @abstractmethod
    def pane_control(
        self, kind: ActionKind, args: Optional[PaneIdArgs], options: LaunchOptions
    ) -> None:
        """Clear, close or edit the scrollback of a pane or tab."""


@dataclass
class LoggingExecutor(Executor):
    """
    Executor that only logs and records what it was asked to do.

    Used by the bundled tools and the console when no host is attached.
    """

    calls: List[Tuple[str, Any]] = field(default_factory=list)

    def _record(self, name: str, detail: Any, options: LaunchOptions) -> None:
        self.calls.append((name, detail))
        logger.info(
            f"{name}: {detail} (floating={options.floating}, "
            f"env={options.environment_source.value})"
        )

    def help(self, args: HelpArgs, options: LaunchOptions) -> None:
        self._record("help", args, options)

    def detach(self, kind: ActionKind, options: LaunchOptions) -> None:
        self._record("detach", kind, options)

    def new_pane(self, args: NewPaneArgs, options: LaunchOptions) -> None:
        self._record("new_pane", args, options)

    def edit(self, args: EditArgs, options: LaunchOptions) -> None:
        self._record("edit", args, options)

    def run(self, args: RunArgs, options: LaunchOptions) -> None:
        self._record("run", args, options)

    def pane_control(
        self, kind: ActionKind, args: Optional[PaneIdArgs], options: LaunchOptions
    ) -> None:
        self._record("pane_control", (kind, args), options)


def dispatch(
    action: Action,
    executor: Executor,
    options: Optional[LaunchOptions] = None,
    force: bool = False,
) -> Action:
    """
    Execute an action through an executor.

    Args:
        action: Classified and filtered action.
        executor: Side-effect owner.
        options: Console toggles (defaults when None).
        force: Run an unavailable action's inner action anyway.

    Returns:
        The action actually executed (unwrapped when forced).

    Raises:
        DispatchRefusedError: If the action is unrecognized, or unavailable
            and not forced.
    """
    if options is None:
        options = LaunchOptions()

    if not action.is_executable:
        if not action.is_recognized:
            logger.warning("Refusing to dispatch unrecognized command")
            raise DispatchRefusedError(action, "command not recognized")
        if not force:
            logger.warning(
                f"Refusing {action.kind.value}: unavailable from {action.rejected_by.value}"
            )
            raise DispatchRefusedError(
                action, f"not available from {action.rejected_by.value}"
            )
        logger.info(f"Forcing {action.kind.value} past {action.rejected_by.value} restriction")
        action = action.unwrap()

    kind = action.kind
    if kind.is_help:
        executor.help(action.payload, options)
    elif kind.is_detach:
        executor.detach(kind, options)
    elif kind is ActionKind.NEW_PANE:
        executor.new_pane(action.payload, options)
    elif kind is ActionKind.EDIT:
        executor.edit(action.payload, options)
    elif kind is ActionKind.RUN:
        executor.run(action.payload, options)
    else:
        executor.pane_control(kind, action.payload, options)

    return action
