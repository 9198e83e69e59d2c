"""Small text and environment helpers."""

from __future__ import annotations

import json
import os
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Union

from .paths import NoHomeDirError, install_dir


def _debug(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class CaptureGroupError(LookupError):
    """A named capture group did not take part in a match."""

    def __init__(self, group: str, string: str) -> None:
        self.group = group
        self.string = string
        super().__init__(f"Capture group {_debug(group)} missing from string {_debug(string)}")


class InstalledCommitMsgError(OSError):
    """The installed commit message could not be read."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(message)


def list_display(items: Iterable[object]) -> str:
    """Join items as English prose: ``a``, ``a and b``, ``a, b, and c``."""
    items = [str(item) for item in items]
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    if not items:
        return ""
    return "".join(f"{item}, " for item in items[:-1]) + f"and {items[-1]}"


def reverse_domain(domain: str) -> str:
    """Reverse the dot-separated labels of a domain."""
    return ".".join(reversed(domain.split(".")))


def prepend_to_path(path: object, base_path: object) -> str:
    """Prepend an entry to a colon-separated search path."""
    return f"{path}:{base_path}"


def format_commit_msg(msg: str) -> str:
    return f"Contains commits up to {_debug(msg)}"


def installed_commit_msg() -> Optional[str]:
    """Return the recorded commit message of the installation, if there is one."""
    try:
        path = install_dir() / "commit"
    except NoHomeDirError as err:
        raise InstalledCommitMsgError(str(err)) from err
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise InstalledCommitMsgError(
            f"Failed to read version info from {_debug(str(path))}: {err}", path
        ) from err


def get_string_for_group(match: re.Match, group: str, string: str) -> str:
    """Return the text of a named group, raising if it did not match."""
    try:
        value = match.group(group)
    except IndexError:
        value = None
    if value is None:
        raise CaptureGroupError(group, string)
    return value


def one_or_many(value: Union[Any, list, tuple]) -> list:
    """Normalize a single value or a list of values into a list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@contextmanager
def working_dir(path: Union[str, "os.PathLike[str]"]) -> Iterator[Path]:
    """Run the enclosed block with ``path`` as the current directory."""
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)