"""
Exception hierarchy for pane_prompt.

Malformed user input never raises; these exceptions signal programming
errors (bad grammar tables, bad cursors) or refused dispatches.
"""


class PromptError(Exception):
    """Base exception for pane_prompt errors."""

    pass


class GrammarError(PromptError):
    """Grammar table entry is malformed."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid grammar entry '{name}': {reason}")


class SelectionError(PromptError):
    """Selection cursor constructed outside its bounds."""

    def __init__(self, row: int, bound: int):
        self.row = row
        self.bound = bound
        super().__init__(f"Invalid cursor row={row} bound={bound}")


class DispatchRefusedError(PromptError):
    """Executor was asked to run an action it must refuse."""

    def __init__(self, action, reason: str):
        self.action = action
        self.reason = reason
        super().__init__(f"Refusing to dispatch {action.kind.value}: {reason}")
