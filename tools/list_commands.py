#!/usr/bin/env python3
"""
Print the command help listing.
"""

import argparse
import sys

from pane_prompt.actions import Interface
from pane_prompt.grammar import help_listing


def main() -> int:
    """Main entry point for list_commands tool."""
    parser = argparse.ArgumentParser(description="List prompt commands")
    parser.add_argument(
        "--interface",
        choices=[i.value for i in Interface],
        default="all",
        help="Only list commands usable from this interface",
    )

    args = parser.parse_args()

    for row in help_listing(Interface.ALL, Interface(args.interface)):
        restriction = f" [{row.interface.value} only]" if row.interface else ""
        print(f"{row.name:<20} {row.description}{restriction}")
        print(f"{'':<20} aliases: {', '.join(row.aliases)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
