"""
pane_prompt - command-intent resolver for a terminal multiplexer console.

Classifies a freely typed command line into a structured action, restricts
actions by calling interface (console or pipe) and drives the help listing
cursor.
"""

__version__ = "0.1.0"

from pane_prompt.actions import Action, ActionKind, Interface
from pane_prompt.buffer import CommandBuffer
from pane_prompt.classifier import classify, classify_and_filter, restrict

__all__ = [
    "Action",
    "ActionKind",
    "CommandBuffer",
    "Interface",
    "classify",
    "classify_and_filter",
    "restrict",
    "__version__",
]
