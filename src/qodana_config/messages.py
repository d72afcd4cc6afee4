"""User-facing status messages.

Messages go to the terminal streams directly; they are meant for the person
running the analysis, not for the log.
"""

import sys


def error_message(message: str) -> None:
    """Print an error message to stderr."""
    print(f"✗ {message}", file=sys.stderr)


def success_message(message: str) -> None:
    """Print a success message to stdout."""
    print(f"✓ {message}", file=sys.stdout)
