"""Interactive prompts read from standard input."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from termcolor import colored


def minimal(msg: object) -> str:
    """Print ``msg: `` and return the stripped line typed in reply.

    Raises EOFError when input has ended.
    """
    print(f"{msg}: ", end="", flush=True)
    line = sys.stdin.readline()
    if not line:
        raise EOFError("input ended while waiting for a response")
    return line.strip()


def default(msg: object, default: Optional[str] = None, default_color: Optional[str] = None) -> str:
    """Prompt with an optional default shown in brackets; empty input selects it."""
    if default is not None:
        shown = colored(default, default_color, attrs=["bold"]) if default_color else default
        response = minimal(f"{msg} ({shown})")
    else:
        response = minimal(msg)
    if not response and default is not None:
        return default
    return response


def yes_no(msg: object, default: Optional[bool] = None) -> Optional[bool]:
    """Ask a yes/no question; returns None when the answer is neither."""
    y_n = {True: "[Y/n]", False: "[y/N]", None: "[y/n]"}[default]
    response = minimal(f"{msg} {y_n}")
    if response in ("y", "Y"):
        return True
    if response in ("n", "N"):
        return False
    if not response:
        return default
    print("That was neither a Y nor an N! You're pretty silly.")
    return None


def list_display_only(choices: Iterable[object]) -> None:
    """Print ``choices`` as an indexed list."""
    items = list(choices)
    if not items:
        print("  -- none --")
        return
    for index, choice in enumerate(items):
        print(f"  [{colored(str(index), 'green')}] {choice}")


def choose_from_list(
    header: object,
    choices: Iterable[object],
    noun: object,
    alternative: Optional[str],
    msg: object,
) -> int:
    """Show ``choices`` and keep asking until a valid index is entered."""
    items = list(choices)
    print(f"{header}:")
    list_display_only(items)
    index_word = colored("index", "green")
    if alternative is not None:
        print(
            f"  Enter an {index_word} for a {noun} above, "
            f"or enter a {colored(alternative, 'cyan')} manually."
        )
    else:
        print(f"  Enter an {index_word} for a {noun} above.")
    suggestion = "0" if len(items) == 1 else None
    while True:
        response = default(msg, suggestion, "green")
        if not response:
            print("Not to be pushy, but you need to pick a device.")
            continue
        try:
            index = int(response)
        except ValueError:
            print("Hey, that wasn't a number! You're silly.")
            continue
        if 0 <= index < len(items):
            return index
        if index < 0:
            print("Hey, that wasn't a number! You're silly.")
        else:
            print("There's no device with an index that high.")