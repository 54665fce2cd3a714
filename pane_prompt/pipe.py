"""
Pipe front end.

Processes one pipe message at a time: a fresh buffer is filled under the
PIPE interface, classified, filtered and optionally dispatched before the
next message is looked at.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pane_prompt.actions import Action, HelpArgs, Interface, action_to_dict
from pane_prompt.buffer import CommandBuffer
from pane_prompt.dispatch import Executor, LaunchOptions, dispatch
from pane_prompt.errors import DispatchRefusedError
from pane_prompt.grammar import help_listing

logger = logging.getLogger(__name__)


@dataclass
class PipeReply:
    """
    Result of one pipe message.

    Attributes:
        action: Classified action (unwrapped if it was forced through).
        executed: True if the executor ran the action.
        error: Refusal reason when the action was not executed.
    """

    action: Action
    executed: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """JSON-serializable reply, with the help listing for help actions."""
        data = action_to_dict(self.action)
        data["executed"] = self.executed
        data["error"] = self.error
        if isinstance(self.action.payload, HelpArgs):
            data["listing"] = [
                {
                    "name": row.name,
                    "aliases": list(row.aliases),
                    "description": row.description,
                    "interface": row.interface.value if row.interface else None,
                }
                for row in help_listing(self.action.payload.subset, Interface.PIPE)
            ]
        return data


def handle_message(
    text: str,
    executor: Optional[Executor] = None,
    options: Optional[LaunchOptions] = None,
    force: bool = False,
) -> PipeReply:
    """
    Classify and optionally execute one pipe message.

    Args:
        text: Command line received through the pipe.
        executor: Executor to run the action with, or None to only classify.
        options: Launch toggles for the executor.
        force: Run actions unavailable from the pipe anyway.

    Returns:
        PipeReply describing the outcome.
    """
    buffer = CommandBuffer()
    buffer.set(text, Interface.PIPE)
    action = buffer.action
    logger.debug(f"Pipe message {text!r} -> {action.kind.value}")

    if executor is None:
        return PipeReply(action)

    try:
        executed = dispatch(action, executor, options, force=force)
    except DispatchRefusedError as e:
        return PipeReply(action, executed=False, error=str(e))

    return PipeReply(executed, executed=True)


def handle_messages(
    lines: List[str],
    executor: Optional[Executor] = None,
    options: Optional[LaunchOptions] = None,
    force: bool = False,
) -> List[PipeReply]:
    """Process messages strictly one after another, skipping blank lines."""
    return [
        handle_message(line, executor, options, force=force)
        for line in lines
        if line.strip()
    ]
