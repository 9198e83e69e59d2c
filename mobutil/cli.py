"""Reports printed to the terminal and the top-level exit handling for commands."""

from __future__ import annotations

import logging
import os
import shutil
import sys
import textwrap
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TextIO

from termcolor import colored

log = logging.getLogger(__name__)

ERROR_COLOR = "light_red"
WARNING_COLOR = "light_yellow"
ACTION_REQUEST_COLOR = "light_magenta"
VICTORY_COLOR = "light_green"

_INDENT = "    "


def bin_name(name: str) -> str:
    """Name under which a subcommand is invoked."""
    return f"cargo {name}"


class Label(Enum):
    ERROR = "error"
    ACTION_REQUEST = "action request"
    VICTORY = "victory"

    def color(self) -> str:
        return {
            Label.ERROR: ERROR_COLOR,
            Label.ACTION_REQUEST: ACTION_REQUEST_COLOR,
            Label.VICTORY: VICTORY_COLOR,
        }[self]

    def exit_code(self) -> int:
        return 0 if self is Label.VICTORY else 1

    def as_str(self) -> str:
        return self.value


def _fill(text: str, width: int, indent: str = "") -> str:
    return "\n".join(
        textwrap.fill(
            line,
            width=width,
            initial_indent=indent,
            subsequent_indent=indent,
            break_on_hyphens=False,
        )
        for line in text.split("\n")
    )


def _terminal_width() -> int:
    return shutil.get_terminal_size().columns


def _should_colorize(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("ANSI_COLORS_DISABLED"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


@dataclass
class Report:
    """A labelled message with wrapped details, ending a command run."""

    label: Label
    msg: str
    details: str

    def __post_init__(self) -> None:
        self.msg = str(self.msg)
        self.details = str(self.details)

    @staticmethod
    def error(msg: object, details: object) -> "Report":
        return Report(Label.ERROR, str(msg), str(details))

    @staticmethod
    def action_request(msg: object, details: object) -> "Report":
        return Report(Label.ACTION_REQUEST, str(msg), str(details))

    @staticmethod
    def victory(msg: object, details: object) -> "Report":
        return Report(Label.VICTORY, str(msg), str(details))

    def exit_code(self) -> int:
        return self.label.exit_code()

    def format(self, width: Optional[int] = None, colorize: bool = False) -> str:
        """Render the report wrapped to ``width`` columns."""
        width = width or _terminal_width()
        color = self.label.color()
        if colorize:
            title = colored(f"{self.label.as_str()}:", color, attrs=["bold"], force_color=True)
            body = colored(self.msg, color, force_color=True)
            head = _fill(f"{title} {body}", width)
        else:
            head = _fill(f"{self.label.as_str()}: {self.msg}", width)
        return f"{head}\n{_fill(self.details, width, _INDENT)}\n"

    def print(self, width: Optional[int] = None) -> None:
        """Write the report to stderr for errors and to stdout otherwise."""
        stream = sys.stderr if self.label is Label.ERROR else sys.stdout
        stream.write(self.format(width, _should_colorize(stream)))
        stream.flush()


class ReportableError(Exception):
    """An error that ends a command with a printed report."""

    def __init__(self, msg: object, details: object = "", label: Label = Label.ERROR) -> None:
        super().__init__(str(msg))
        self.msg = str(msg)
        self.details = str(details)
        self.label = label

    def report(self) -> Report:
        return Report(self.label, self.msg, self.details)


def run_main(inner: Callable[[int], object]) -> None:
    """Run ``inner`` with the terminal width; on a ReportableError print it and exit."""
    width = _terminal_width()
    try:
        inner(width)
    except ReportableError as err:
        log.info("exiting with %r", err)
        report = err.report()
        report.print(width)
        sys.exit(report.exit_code())