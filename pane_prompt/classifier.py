"""
Command classifier and interface capability filter.

`classify` turns a raw line into an Action, `restrict` marks actions the
calling interface may not use as unavailable, and `classify_and_filter`
composes both. All three are pure: the same text and interface always
give an equal Action.
"""

from pane_prompt.actions import UNRECOGNIZED, Action, Interface
from pane_prompt.grammar import entry_for, find_entry
from pane_prompt.tokenizer import tokenize


def classify(text: str, interface: Interface) -> Action:
    """
    Classify a command line.

    Args:
        text: Raw command line.
        interface: Calling interface (drives help cursors).

    Returns:
        Parsed action, or UNRECOGNIZED when no entry matches the head token.
    """
    tokens = tokenize(text)
    if not tokens.head:
        return UNRECOGNIZED

    entry = find_entry(tokens.head)
    if entry is None:
        return UNRECOGNIZED

    return entry.build(tokens.args, interface)


def restrict(action: Action, interface: Interface) -> Action:
    """
    Apply the calling interface's restrictions to an action.

    Args:
        action: Classified action.
        interface: Calling interface. ALL never restricts.

    Returns:
        The action unchanged, or marked unavailable from `interface`.
    """
    if not action.is_recognized:
        return action

    tag = entry_for(action.kind).interface
    if interface.permits(tag):
        return action

    return action.reject(interface)


def classify_and_filter(text: str, interface: Interface) -> Action:
    """Classify `text` and restrict the result to `interface`."""
    return restrict(classify(text, interface), interface)
