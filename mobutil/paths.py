"""Filesystem path helpers: home expansion, install locations and path arithmetic."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

INSTALL_DIR_NAME = ".cargo-mobile"
TEMP_DIR_NAME = "com.brainiumstudios.cargo-mobile"

_VERBATIM_PREFIX = "\\\\?\\"
_SEPARATORS = re.compile(r"[\\/]+")


class NoHomeDirError(Exception):
    """The user's home directory could not be determined."""

    def __init__(self, message: str = "Failed to get user's home directory!") -> None:
        super().__init__(message)


class ContractHomeError(ValueError):
    """A path or the home directory could not be represented as UTF-8 text."""

    HOME_INVALID_UTF8 = "User's home directory path wasn't valid UTF-8."
    PATH_INVALID_UTF8 = "Supplied path wasn't valid UTF-8."


class PathNotPrefixedError(ValueError):
    """A path did not start with the expected prefix."""

    def __init__(self, path: PathLike, prefix: PathLike) -> None:
        self.path = Path(path)
        self.prefix = Path(prefix)
        super().__init__(f'Path "{self.path}" didn\'t have prefix "{self.prefix}".')


class NormalizationError(OSError):
    """A path could not be made absolute and normalized."""

    def __init__(self, path: PathLike, cause: BaseException, existed: bool) -> None:
        self.path = Path(path)
        self.cause = cause
        self.existed = existed
        if existed:
            message = f'Failed to canonicalize existing path "{self.path}": {cause}'
        else:
            message = f'Failed to normalize non-existent path "{self.path}": {cause}'
        super().__init__(message)


def _is_utf8(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def home_dir() -> Path:
    """Return the current user's home directory."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as err:
        raise NoHomeDirError() from err
    if str(home) in ("", "~"):
        raise NoHomeDirError()
    return home


def expand_home(path: PathLike) -> Path:
    """Replace a leading ``~`` component with the home directory."""
    home = home_dir()
    path = Path(path)
    if path.parts and path.parts[0] == "~":
        return home.joinpath(*path.parts[1:])
    return path


def contract_home(path: PathLike) -> str:
    """Replace occurrences of the home directory in ``path`` with ``~``."""
    raw = os.fspath(path)
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise ContractHomeError(ContractHomeError.PATH_INVALID_UTF8) from err
    if not _is_utf8(raw):
        raise ContractHomeError(ContractHomeError.PATH_INVALID_UTF8)
    if os.name == "nt":
        return raw
    home = str(home_dir())
    if not _is_utf8(home):
        raise ContractHomeError(ContractHomeError.HOME_INVALID_UTF8)
    return raw.replace(home, "~")


def install_dir() -> Path:
    """Directory where the tooling keeps its installed files."""
    return home_dir() / INSTALL_DIR_NAME


def checkouts_dir() -> Path:
    """Directory holding repository checkouts."""
    return install_dir() / "checkouts"


def tools_dir() -> Path:
    """Directory holding auxiliary tools."""
    return install_dir() / "tools"


def temp_dir() -> Path:
    """Scratch directory inside the system temporary directory."""
    return Path(tempfile.gettempdir()) / TEMP_DIR_NAME


def _join_verbatim(components: list[str]) -> str:
    out = ""
    for component in components:
        if component == "\\":
            out += "\\"
        elif out and not out.endswith("\\"):
            out += "\\" + component
        else:
            out += component
    return out


def prefix_path(root: PathLike, path: PathLike) -> Path:
    """Join ``path`` onto ``root``, resolving ``.`` and ``..`` for verbatim roots."""
    root_str = os.fspath(root)
    if not root_str.startswith(_VERBATIM_PREFIX):
        return Path(root) / path

    rest = root_str[len(_VERBATIM_PREFIX):]
    prefix, _, tail = rest.partition("\\")
    buf = [_VERBATIM_PREFIX + prefix]
    if _ or tail:
        buf.append("\\")
    buf.extend(part for part in _SEPARATORS.split(tail) if part and part != ".")

    path_str = os.fspath(path)
    if path_str[:1] in ("\\", "/"):
        buf = buf[:1] + ["\\"]
    for part in _SEPARATORS.split(path_str):
        if part in ("", "."):
            continue
        if part == "..":
            if buf:
                buf.pop()
        else:
            buf.append(part)
    return Path(_join_verbatim(buf))


def unprefix_path(root: PathLike, path: PathLike) -> Path:
    """Strip ``root`` from the front of ``path``."""
    try:
        return Path(path).relative_to(root)
    except ValueError as err:
        raise PathNotPrefixedError(path, root) from err


def _common_root(abs_src: Path, abs_dest: Path) -> Path:
    for candidate in (abs_dest, *abs_dest.parents):
        if abs_src.is_relative_to(candidate):
            return candidate
    raise ValueError(f'"{abs_src}" and "{abs_dest}" have no common root')


def relativize_path(abs_path: PathLike, abs_relative_to: PathLike) -> Path:
    """Express ``abs_path`` relative to the directory ``abs_relative_to``."""
    abs_path, abs_relative_to = Path(abs_path), Path(abs_relative_to)
    for candidate in (abs_path, abs_relative_to):
        if not candidate.is_absolute():
            raise ValueError(f'"{candidate}" is not an absolute path')
    common = _common_root(abs_path, abs_relative_to)
    path = abs_path.relative_to(common)
    relative_to = abs_relative_to.relative_to(common)
    ups = [".."] * len(relative_to.parts)
    rel_path = Path(*ups, path)
    log.info('"%s" relative to "%s" is "%s"', abs_path, abs_relative_to, rel_path)
    return rel_path


def normalize_path(path: PathLike) -> Path:
    """Return an absolute, normalized form of ``path``, which need not exist."""
    path = Path(path)
    if path.exists():
        try:
            return path.resolve(strict=True)
        except (OSError, RuntimeError) as err:
            raise NormalizationError(path, err, existed=True) from err
    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError) as err:
        raise NormalizationError(path, err, existed=False) from err


def _simplified(path: Path) -> Path:
    text = str(path)
    if text.startswith(_VERBATIM_PREFIX) and re.match(r"[A-Za-z]:", text[4:6]):
        return Path(text[4:])
    return path


def under_root(path: PathLike, root: PathLike) -> bool:
    """Whether ``path``, taken relative to ``root``, stays inside ``root``."""
    root_path = _simplified(Path(root))
    norm = _simplified(normalize_path(root_path / path))
    return norm.is_relative_to(root_path)