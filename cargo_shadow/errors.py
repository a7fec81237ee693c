"""Exception hierarchy for cargo-shadow.

Every failure that aborts a mirror run derives from ``ShadowError`` so the
CLI can report it uniformly.  Runs are all-or-nothing: none of these errors
is retried and partially written output is left in place.
"""

from __future__ import annotations

from pathlib import Path


class ShadowError(Exception):
    """Base class for all errors raised while building a mirror."""


class NoManifestFound(ShadowError):
    """Raised when the source root has no manifest."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"no {path.name} found at {path}")


class ManifestParseError(ShadowError):
    """Raised when a manifest cannot be read or deserialised."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = str(path) if path is not None else "<memory>"
        super().__init__(f"failed to read manifest {where}: {reason}")


class MissingTargetName(ShadowError):
    """Raised when a test/bench/example target has neither name nor path."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(
            f"{kind} target declares neither 'name' nor 'path'; "
            "cannot derive its source file"
        )


class MirrorIOError(ShadowError):
    """Raised when a copy, write or directory creation fails."""

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        self.operation = operation
        self.path = path
        super().__init__(f"{operation} failed for {path}: {cause.strerror or cause}")


class UnsafeTargetPath(ShadowError):
    """Raised when a declared target path would land outside the mirror."""

    def __init__(self, path: Path, root: Path) -> None:
        self.path = path
        self.root = root
        super().__init__(f"target path {path} escapes the output directory {root}")
