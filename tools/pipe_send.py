#!/usr/bin/env python3
"""
Pipe message tool.

Classifies command lines as pipe messages and prints the resulting
actions as JSON, one per line. Lines come from the arguments, or from
stdin when none are given.
"""

import argparse
import json
import logging
import sys

from pane_prompt.dispatch import LoggingExecutor
from pane_prompt.errors import PromptError
from pane_prompt.pipe import handle_messages


def main() -> int:
    """Main entry point for pipe_send tool."""
    parser = argparse.ArgumentParser(description="Classify pipe messages")
    parser.add_argument("command", nargs="*", help="Command line (reads stdin if omitted)")
    parser.add_argument(
        "--execute", action="store_true", help="Dispatch to the logging executor"
    )
    parser.add_argument(
        "--force", action="store_true", help="Dispatch actions unavailable from the pipe"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)-8s] %(name)-20s | %(message)s",
        stream=sys.stderr,
    )

    lines = [" ".join(args.command)] if args.command else sys.stdin.read().splitlines()
    executor = LoggingExecutor() if args.execute else None

    try:
        replies = handle_messages(lines, executor, force=args.force)
    except PromptError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for reply in replies:
        print(json.dumps(reply.to_dict()))

    return 0 if all(reply.error is None for reply in replies) else 1


if __name__ == "__main__":
    sys.exit(main())
