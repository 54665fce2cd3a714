"""
Selection state machine for the help listing.

A help action carries either a Cursor over the visible listing rows or
Unbounded when the calling interface cannot navigate rows.
"""

from dataclasses import dataclass
from typing import Union

from pane_prompt.errors import SelectionError


@dataclass(frozen=True)
class Cursor:
    """
    Highlighted row in a listing of `bound` rows.

    Attributes:
        row: Highlighted row index, always < bound.
        bound: Number of rows, always >= 1.
    """

    row: int
    bound: int

    def __post_init__(self) -> None:
        if self.bound < 1 or not 0 <= self.row < self.bound:
            raise SelectionError(self.row, self.bound)

    def advance(self) -> "Cursor":
        """Move down one row, wrapping to the top."""
        return Cursor((self.row + 1) % self.bound, self.bound)

    def retreat(self) -> "Cursor":
        """Move up one row, wrapping to the bottom."""
        if self.row != 0:
            return Cursor(self.row - 1, self.bound)
        return Cursor(self.bound - 1, self.bound)


@dataclass(frozen=True)
class Unbounded:
    """No cursor: every row is shown expanded."""

    def advance(self) -> "Unbounded":
        return self

    def retreat(self) -> "Unbounded":
        return self


Selection = Union[Cursor, Unbounded]
