"""
Command line tokenizer.

Splits a raw prompt line into a case-normalized head token and the
remaining argument tokens.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Tokens:
    """
    Tokenized command line.

    Attributes:
        head: First word, lower-cased ("" for blank input).
        args: Remaining whitespace-separated words, casing preserved.
    """

    head: str
    args: List[str] = field(default_factory=list)


def tokenize(text: str) -> Tokens:
    """
    Split raw text into head and argument tokens.

    Args:
        text: Raw command line.

    Returns:
        Tokens with a lower-cased head.
    """
    words = text.split()
    if not words:
        return Tokens(head="")

    return Tokens(head=words[0].lower(), args=words[1:])
