"""
Command buffer.

Owns the text being edited and the action derived from it. Every mutation
reclassifies the whole text under the interface the mutation came from, so
the exposed action is never stale.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from pane_prompt.actions import Action, HelpArgs, Interface
from pane_prompt.classifier import classify_and_filter
from pane_prompt.grammar import GrammarEntry, HelpRow, help_listing, visible_entries
from pane_prompt.selection import Cursor

logger = logging.getLogger(__name__)


class CommandBuffer:
    """
    Editable command line with its classified action.

    Console keystrokes use the CONSOLE interface, programmatic `set` calls
    default to PIPE and `clear` uses ALL.
    """

    def __init__(self, text: str = "", interface: Interface = Interface.ALL):
        """
        Initialize buffer.

        Args:
            text: Initial text.
            interface: Interface the initial text came from.
        """
        self._text = text
        self._interface = interface
        self._action = classify_and_filter(text, interface)

    @property
    def text(self) -> str:
        return self._text

    @property
    def action(self) -> Action:
        return self._action

    @property
    def interface(self) -> Interface:
        """Interface of the last mutation."""
        return self._interface

    def __len__(self) -> int:
        return len(self._text)

    def _reclassify(self, interface: Interface) -> None:
        self._interface = interface
        self._action = classify_and_filter(self._text, interface)
        logger.debug(
            f"Reclassified {self._text!r} ({interface.value}) -> {self._action.kind.value}"
            + (f" rejected by {self._action.rejected_by.value}" if self._action.rejected_by else "")
        )

    def push(self, char: str, interface: Interface = Interface.CONSOLE) -> None:
        """Append text (normally one typed character) and reclassify."""
        self._text += char
        self._reclassify(interface)

    def pop(self, interface: Interface = Interface.CONSOLE) -> Optional[str]:
        """
        Remove the last character and reclassify.

        Returns:
            Removed character, or None if the buffer was empty.
        """
        removed = None
        if self._text:
            removed = self._text[-1]
            self._text = self._text[:-1]
        self._reclassify(interface)
        return removed

    def set(self, text: str, interface: Interface = Interface.PIPE) -> None:
        """Replace the whole text and reclassify."""
        self._text = text
        self._reclassify(interface)

    def clear(self) -> None:
        """Empty the buffer. No interface context survives clearing."""
        self._text = ""
        self._reclassify(Interface.ALL)

    def _help_args(self) -> Optional[HelpArgs]:
        payload = self._action.payload
        if self._action.kind.is_help and isinstance(payload, HelpArgs):
            return payload
        return None

    def listing(self) -> List[HelpRow]:
        """Help rows for the current help action, empty for other actions."""
        args = self._help_args()
        if args is None:
            return []
        return help_listing(args.subset, self._interface)

    def select_next(self) -> None:
        """Move the help cursor down. No-op outside a navigable help listing."""
        args = self._help_args()
        if args is not None:
            self._set_selection(args, args.selection.advance())

    def select_previous(self) -> None:
        """Move the help cursor up. No-op outside a navigable help listing."""
        args = self._help_args()
        if args is not None:
            self._set_selection(args, args.selection.retreat())

    def _set_selection(self, args: HelpArgs, selection) -> None:
        self._action = replace(self._action, payload=replace(args, selection=selection))

    def selected_entry(self) -> Optional[GrammarEntry]:
        """Grammar entry under the help cursor, or None."""
        args = self._help_args()
        if args is None or not isinstance(args.selection, Cursor):
            return None
        return visible_entries(args.perspective)[args.selection.row]

    def confirm_selection(self) -> bool:
        """
        Replace the text with the selected entry's name and reclassify.

        Returns:
            True if a selection was committed, False when there is no cursor.
        """
        entry = self.selected_entry()
        if entry is None:
            return False

        logger.info(f"Selected '{entry.name}' from help listing")
        self.set(entry.name, interface=self._interface)
        return True
