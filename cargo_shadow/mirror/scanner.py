"""Source tree scanner.

Walks a package tree and reports the files the mirror cares about: every
manifest and every file named like a default entry point, at any depth.
Build-output directories are pruned before they are descended into.
"""

from __future__ import annotations

import os
from collections.abc import Collection, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cargo_shadow.errors import MirrorIOError
from cargo_shadow.manifest.resolver import ENTRY_POINT_STUBS


class HitKind(str, Enum):
    """Why a scanned file was selected."""
    MANIFEST = "manifest"
    ENTRY_POINT = "entry-point"


@dataclass(frozen=True)
class ScanHit:
    """A selected file, with its path relative to the scan root."""

    path: Path
    kind: HitKind


def _raise_walk_error(exc: OSError) -> None:
    raise MirrorIOError("scan", Path(exc.filename or "."), exc) from exc


def scan(
    root: str | Path,
    *,
    manifest_name: str = "Cargo.toml",
    exclude_dirs: Collection[str] = ("target",),
    entry_point_names: Collection[str] = tuple(ENTRY_POINT_STUBS),
    skip_paths: Collection[str | Path] = (),
) -> Iterator[ScanHit]:
    """Yield manifests and entry-point files under *root*.

    Directory and file names are visited in sorted order so the sequence is
    stable between runs.  Symlinked directories are not followed.

    Args:
        root: Directory to walk.
        manifest_name: File name that marks a package manifest.
        exclude_dirs: Directory names whose subtrees are skipped entirely.
        entry_point_names: File names treated as conventional entry points.
        skip_paths: Directories never descended into, whatever their name
            (e.g. an output directory inside the source tree).

    Raises:
        MirrorIOError: If a directory cannot be listed.
    """
    root = Path(root)
    excluded = set(exclude_dirs)
    skipped = {Path(p).resolve() for p in skip_paths}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in excluded
            and not (skipped and Path(dirpath, d).resolve() in skipped)
        )
        for name in sorted(filenames):
            if name == manifest_name:
                kind = HitKind.MANIFEST
            elif name in entry_point_names:
                kind = HitKind.ENTRY_POINT
            else:
                continue
            rel = os.path.relpath(os.path.join(dirpath, name), root)
            yield ScanHit(Path(rel), kind)
