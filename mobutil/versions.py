"""Version numbers and parsing of the Rust compiler's version banner."""

from __future__ import annotations

import json
import logging
import re
import sys
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

_U32_MAX = 2**32 - 1

_RUSTC_VERSION = re.compile(
    r"rustc (?P<version>(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(-(?P<flavor>\w+)(.(?P<candidate>\d+))?)?)"
    r"(?P<details> \((?P<hash>\w{9}) (?P<date>(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2}))\))?"
)


def _debug(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _parse_u32(text: str) -> int:
    """Parse an unsigned 32-bit integer as strictly as the version formats require."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError("invalid digit found in string")
    value = int(digits)
    if value > _U32_MAX:
        raise ValueError("number too large to fit in target type")
    return value


class VersionTripleError(ValueError):
    """A string could not be read as a ``major[.minor][.patch]`` version."""

    def __init__(
        self,
        version: str,
        component: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.version = version
        self.component = component
        self.cause = cause
        if component is None:
            message = (
                f"Failed to parse version string {_debug(version)}: "
                "string must be in format <major>[.minor][.patch]"
            )
        else:
            message = f"Failed to parse {component} version from {_debug(version)}: {cause}"
        super().__init__(message)


class VersionDoubleError(ValueError):
    """A string could not be read as a ``major[.minor]`` version."""

    def __init__(
        self,
        version: str,
        component: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.version = version
        self.component = component
        self.cause = cause
        if component is None:
            message = (
                f"Failed to parse version string {_debug(version)}: "
                "string must be in format <major>[.minor]"
            )
        else:
            message = f"Failed to parse {component} version from {_debug(version)}: {cause}"
        super().__init__(message)


class RustVersionError(ValueError):
    """The compiler's version banner could not be understood."""


def _parse_components(version: str, names: tuple[str, ...], error_type: type) -> list[int]:
    parts = version.split(".")
    if len(parts) > len(names):
        raise error_type(version)
    values = []
    for name, part in zip(names, parts):
        try:
            values.append(_parse_u32(part))
        except ValueError as err:
            raise error_type(version, name, err) from err
    values.extend([0] * (len(names) - len(values)))
    return values


@dataclass(frozen=True, order=True)
class VersionTriple:
    """A ``major.minor.patch`` version."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def from_match(cls, match: re.Match) -> tuple["VersionTriple", str]:
        """Build from a match with ``version``, ``major``, ``minor`` and ``patch`` groups."""
        version_str = match["version"]
        values = []
        for name in ("major", "minor", "patch"):
            try:
                values.append(_parse_u32(match[name]))
            except ValueError as err:
                raise VersionTripleError(version_str, name, err) from err
        return cls(*values), version_str

    @classmethod
    def parse(cls, v: str) -> "VersionTriple":
        """Parse ``major[.minor][.patch]``; missing parts are zero."""
        return cls(*_parse_components(v, ("major", "minor", "patch"), VersionTripleError))


@dataclass(frozen=True, order=True)
class VersionDouble:
    """A ``major.minor`` version."""

    major: int = 0
    minor: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @classmethod
    def parse(cls, v: str) -> "VersionDouble":
        """Parse ``major[.minor]``; a missing minor part is zero."""
        return cls(*_parse_components(v, ("major", "minor"), VersionDoubleError))


@dataclass(frozen=True)
class RustVersionFlavor:
    flavor: str
    candidate: Optional[str] = None


@dataclass(frozen=True)
class RustVersionDetails:
    hash: str
    date: tuple[int, int, int]


LAST_GOOD_STABLE = VersionTriple(1, 45, 2)
NEXT_GOOD_STABLE = VersionTriple(1, 49, 0)
FIRST_GOOD_NIGHTLY = (2020, 10, 24)


@dataclass(frozen=True)
class RustVersion:
    """A compiler version as reported by ``rustc --version``."""

    triple: VersionTriple
    flavor: Optional[RustVersionFlavor] = None
    # Absent when the toolchain was installed by something other than rustup.
    details: Optional[RustVersionDetails] = None

    def __str__(self) -> str:
        text = str(self.triple)
        if self.flavor is not None:
            text += f"-{self.flavor.flavor}"
            if self.flavor.candidate is not None:
                text += f".{self.flavor.candidate}"
        if self.details is not None:
            year, month, day = self.details.date
            text += f" ({self.details.hash} {year}-{month}-{day})"
        return text

    @classmethod
    def parse(cls, output: str) -> "RustVersion":
        """Read the version from the output of ``rustc --version``."""
        match = _RUSTC_VERSION.search(output)
        if match is None:
            raise RustVersionError(
                f"{_debug('rustc --version')} output failed to match regex: {_debug(output)}"
            )
        try:
            triple, _ = VersionTriple.from_match(match)
        except VersionTripleError as err:
            raise RustVersionError(str(err)) from err

        flavor = None
        if match["flavor"] is not None:
            flavor = RustVersionFlavor(match["flavor"], match["candidate"])

        details = None
        if match["details"] is not None:
            date_str = match["date"]
            date = []
            for name in ("year", "month", "day"):
                try:
                    date.append(_parse_u32(match[name]))
                except ValueError as err:
                    raise RustVersionError(
                        f"Failed to parse rustc release {name} from {_debug(date_str)}: {err}"
                    ) from err
            details = RustVersionDetails(match["hash"], (date[0], date[1], date[2]))

        version = cls(triple, flavor, details)
        log.info("detected rustc version %s", version)
        return version

    def valid(self, macos: Optional[bool] = None) -> bool:
        """Whether this compiler is known to work; only macOS has known bad releases."""
        if macos is None:
            macos = sys.platform == "darwin"
        if not macos:
            return True
        old_good = self.triple <= LAST_GOOD_STABLE
        if self.triple >= NEXT_GOOD_STABLE:
            if self.details is not None:
                new_good = self.details.date >= FIRST_GOOD_NIGHTLY
            else:
                log.warning(
                    "output of `rustc --version` didn't contain date info; continuing with "
                    "the assumption that the release date is at least 2020-10-24"
                )
                new_good = True
        else:
            new_good = False
        return old_good or new_good