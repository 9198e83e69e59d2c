"""Creation of hard and symbolic links with optional clobbering of what is in the way."""

from __future__ import annotations

import json
import os
import shutil
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .paths import relativize_path

PathLike = Union[str, "os.PathLike[str]"]

# Windows reports this when the process may not create symbolic links.
_ERROR_PRIVILEGE_NOT_HELD = 1314


def _debug(path: PathLike) -> str:
    return json.dumps(os.fspath(path), ensure_ascii=False)


def _file_name(path: Path) -> Optional[str]:
    """The last component of ``path``, or None when it is empty, ``.`` or ``..``."""
    name = path.name
    if name in ("", ".", ".."):
        return None
    return name


class LinkType(Enum):
    HARD = "hard"
    SYMBOLIC = "symbolic"

    def __str__(self) -> str:
        return self.value


class Clobber(Enum):
    NEVER = "clobbering disabled"
    FILE_ONLY = "file clobbering enabled"
    FILE_OR_DIRECTORY = "file and directory clobbering enabled"

    def __str__(self) -> str:
        return self.value


class TargetStyle(Enum):
    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:
        return self.value


class ErrorCause(Enum):
    MISSING_FILE_NAME = "missing file name"
    LINK_FAILED = "link failed"
    IO_ERROR = "io error"
    SYMLINK_NOT_ALLOWED = "symlink not allowed"

    def describe(self, error: Optional[BaseException] = None) -> str:
        if self is ErrorCause.MISSING_FILE_NAME:
            return "Neither the source nor target contained a file name."
        if self is ErrorCause.LINK_FAILED:
            return f"creating the link failed: {error}"
        if self is ErrorCause.IO_ERROR:
            return f"IO error: {error}"
        return (
            "\nCreation symbolic link is not allowed for this system.\n\n"
            "For Windows 10 or newer:\n"
            "You should use developer mode.\n\n"
            "For Window 8.1 or older:\n"
            "You need `SeCreateSymbolicLinkPrivilege` security policy."
        )


class LinkError(OSError):
    """A link could not be created."""

    def __init__(
        self,
        link_type: LinkType,
        force: Clobber,
        source: PathLike,
        target: PathLike,
        target_style: TargetStyle,
        cause: ErrorCause,
        error: Optional[BaseException] = None,
    ) -> None:
        self.link_type = link_type
        self.force = force
        self.source = Path(source)
        self.target = Path(target)
        self.target_style = target_style
        self.cause = cause
        self.error = error
        super().__init__(
            f"Failed to create a {link_type} link from {_debug(self.source)} to "
            f"{target_style} {_debug(self.target)} ({force}): {cause.describe(error)}"
        )


def _remove_tree(path: Path) -> None:
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


class LinkCall:
    """A prepared request to link ``source`` at ``target``.

    With a directory target style, the link is placed inside ``target`` under
    the last component of ``source``.
    """

    def __init__(
        self,
        link_type: LinkType,
        force: Clobber,
        source: PathLike,
        target: PathLike,
        target_style: TargetStyle,
    ) -> None:
        self.link_type = link_type
        self.force = force
        self.source = Path(source)
        self.target = Path(target)
        self.target_style = target_style
        if target_style is TargetStyle.DIRECTORY:
            name = _file_name(self.source)
            if name is None:
                raise self._error(ErrorCause.MISSING_FILE_NAME)
            self.target_override = self.target / name
        else:
            self.target_override = self.target

    def __repr__(self) -> str:
        return (
            f"LinkCall(link_type={self.link_type!r}, force={self.force!r}, "
            f"source={self.source!r}, target={self.target!r}, "
            f"target_style={self.target_style!r})"
        )

    def _error(self, cause: ErrorCause, error: Optional[BaseException] = None) -> LinkError:
        return LinkError(
            self.link_type, self.force, self.source, self.target, self.target_style, cause, error
        )

    def _destination(self) -> Path:
        dest = self.target_override
        # A real directory in the way receives the link inside it; a symbolic
        # link to a directory is treated like any other file.
        if dest.is_dir() and not dest.is_symlink():
            name = _file_name(self.source)
            if name is None:
                raise self._error(
                    ErrorCause.LINK_FAILED, IsADirectoryError(f"{dest} is a directory")
                )
            dest = dest / name
        return dest

    def exec(self) -> None:
        """Create the link, clobbering what is in the way as ``force`` allows."""
        if self.force is Clobber.FILE_OR_DIRECTORY and self.target_override.is_dir():
            try:
                _remove_tree(self.target)
            except OSError as err:
                raise self._error(ErrorCause.IO_ERROR, err) from err

        dest = self._destination()

        if self.force is not Clobber.NEVER and (dest.is_symlink() or dest.exists()):
            if dest.is_dir() and not dest.is_symlink():
                raise self._error(
                    ErrorCause.LINK_FAILED,
                    IsADirectoryError(f"cannot overwrite directory {dest}"),
                )
            try:
                dest.unlink()
            except OSError as err:
                raise self._error(ErrorCause.LINK_FAILED, err) from err

        try:
            if self.link_type is LinkType.SYMBOLIC:
                points_to_dir = (dest.parent / self.source).is_dir()
                os.symlink(self.source, dest, target_is_directory=points_to_dir)
            else:
                os.link(self.source, dest, follow_symlinks=False)
        except OSError as err:
            if getattr(err, "winerror", None) == _ERROR_PRIVILEGE_NOT_HELD:
                raise self._error(ErrorCause.SYMLINK_NOT_ALLOWED, err) from err
            raise self._error(ErrorCause.LINK_FAILED, err) from err


def force_symlink(source: PathLike, target: PathLike, target_style: TargetStyle) -> None:
    """Create a symbolic link, replacing any file or directory in the way."""
    LinkCall(LinkType.SYMBOLIC, Clobber.FILE_OR_DIRECTORY, source, target, target_style).exec()


def force_symlink_relative(
    abs_source: PathLike, abs_target: PathLike, target_style: TargetStyle
) -> None:
    """Like :func:`force_symlink`, but the link stores a path relative to ``abs_target``."""
    abs_source, abs_target = Path(abs_source), Path(abs_target)
    rel_source = relativize_path(abs_source, abs_target)
    if target_style is TargetStyle.DIRECTORY and _file_name(rel_source) is None:
        name = _file_name(abs_source)
        if name is None:
            raise LinkError(
                LinkType.SYMBOLIC,
                Clobber.FILE_OR_DIRECTORY,
                rel_source,
                abs_target,
                target_style,
                ErrorCause.MISSING_FILE_NAME,
            )
        force_symlink(rel_source, abs_target / name, TargetStyle.FILE)
    else:
        force_symlink(rel_source, abs_target, target_style)