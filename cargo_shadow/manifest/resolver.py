"""Target resolution: where a target's source lives and what stands in for it.

``resolve`` is pure.  It never touches the filesystem and works on in-memory
``Target`` values only.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from cargo_shadow.errors import MissingTargetName
from cargo_shadow.manifest.models import Target, TargetKind

# Smallest program a build tool accepts as an executable entry point.
MAIN_STUB = "fn main() {}\n"
EMPTY_STUB = ""

BUILD_SCRIPT_FILE = "build.rs"
LIBRARY_FILE = "lib.rs"
BINARY_FILE = "main.rs"

# Default locations, relative to the manifest's directory.
_FIXED_PATHS: dict[TargetKind, Path] = {
    TargetKind.BUILD_SCRIPT: Path(BUILD_SCRIPT_FILE),
    TargetKind.LIBRARY: Path("src") / LIBRARY_FILE,
    TargetKind.BINARY: Path("src") / BINARY_FILE,
}

_NAMED_DIRS: dict[TargetKind, str] = {
    TargetKind.TEST: "tests",
    TargetKind.BENCH: "benches",
    TargetKind.EXAMPLE: "examples",
}

_STUBS: dict[TargetKind, str] = {
    TargetKind.BUILD_SCRIPT: MAIN_STUB,
    TargetKind.LIBRARY: EMPTY_STUB,
    TargetKind.BINARY: MAIN_STUB,
    TargetKind.TEST: EMPTY_STUB,
    TargetKind.BENCH: EMPTY_STUB,
    TargetKind.EXAMPLE: MAIN_STUB,
}

# Entry-point file names recognised anywhere in the tree, and the stub each
# one receives when found by name alone.
ENTRY_POINT_STUBS: dict[str, str] = {
    LIBRARY_FILE: EMPTY_STUB,
    BINARY_FILE: MAIN_STUB,
    BUILD_SCRIPT_FILE: MAIN_STUB,
}


class TargetShadow(NamedTuple):
    """Relative source path of a target and the stub written in its place."""
    path: Path
    content: str


def stub_for(kind: TargetKind) -> str:
    """Stub content for *kind*; independent of where the path came from."""
    return _STUBS[kind]


def default_path(target: Target, kind: TargetKind) -> Path:
    """Conventional source path of *target* when it declares no ``path``.

    Raises:
        MissingTargetName: For tests, benches and examples without a name.
    """
    if kind in _FIXED_PATHS:
        return _FIXED_PATHS[kind]
    if not target.name:
        raise MissingTargetName(str(kind))
    return Path(_NAMED_DIRS[kind]) / f"{target.name}.rs"


def resolve(target: Target, kind: TargetKind) -> TargetShadow:
    """Map a declared target to its canonical relative path and stub content.

    An explicit ``path`` always wins, whatever the kind or name.
    """
    if target.path is not None:
        path = Path(target.path)
    else:
        path = default_path(target, kind)
    return TargetShadow(path, stub_for(kind))
