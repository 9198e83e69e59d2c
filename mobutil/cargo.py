"""Assembly of ``cargo`` command lines."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Sequence, Union

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class CargoCommand:
    """An immutable description of a ``cargo`` invocation; ``with_*`` return copies."""

    subcommand: str
    verbose: bool = False
    package: Optional[str] = None
    manifest_path: Optional[Path] = None
    target: Optional[str] = None
    no_default_features: bool = False
    features: Optional[tuple[str, ...]] = None
    args: Optional[tuple[str, ...]] = None
    release: bool = False

    def with_verbose(self, verbose: bool) -> "CargoCommand":
        return replace(self, verbose=verbose)

    def with_package(self, package: Optional[str]) -> "CargoCommand":
        return replace(self, package=package)

    def with_manifest_path(self, manifest_path: Optional[PathLike]) -> "CargoCommand":
        """Set the manifest path, canonicalized; raises OSError if it cannot be."""
        resolved = None if manifest_path is None else Path(manifest_path).resolve(strict=True)
        return replace(self, manifest_path=resolved)

    def with_target(self, target: Optional[str]) -> "CargoCommand":
        return replace(self, target=target)

    def with_no_default_features(self, no_default_features: bool) -> "CargoCommand":
        return replace(self, no_default_features=no_default_features)

    def with_features(self, features: Optional[Sequence[str]]) -> "CargoCommand":
        return replace(self, features=None if features is None else tuple(features))

    def with_args(self, args: Optional[Sequence[str]]) -> "CargoCommand":
        return replace(self, args=None if args is None else tuple(args))

    def with_release(self, release: bool) -> "CargoCommand":
        return replace(self, release=release)

    def to_args(self) -> list[str]:
        """The full argument vector, starting with ``cargo``."""
        argv = ["cargo", self.subcommand]
        if self.verbose:
            argv.append("-vv")
        if self.package is not None:
            argv += ["--package", self.package]
        if self.manifest_path is not None:
            if not self.manifest_path.exists():
                log.error('manifest path "%s" doesn\'t exist!', self.manifest_path)
            argv += ["--manifest-path", os.fspath(self.manifest_path)]
        if self.target is not None:
            argv += ["--target", self.target]
        if self.no_default_features:
            argv.append("--no-default-features")
        if self.features is not None:
            argv += ["--features", " ".join(self.features)]
        if self.args is not None:
            argv += list(self.args)
        if self.release:
            argv.append("--release")
        return argv