"""
Terminal UI (TUI) for pane_prompt.

Launch with: python -m pane_prompt.tui.console
"""

__all__ = ["main"]


def main():
    """Launch console TUI (requires textual)."""
    from pane_prompt.tui.console import main as _main
    _main()
