"""Filesystem side of cargo-shadow: scanning the source and writing the mirror.

Usage::

    from cargo_shadow.mirror import HitKind, scan, writer

    for hit in scan("."):
        if hit.kind is HitKind.MANIFEST:
            writer.copy(hit.path, out / hit.path)
"""

from cargo_shadow.mirror import writer
from cargo_shadow.mirror.scanner import HitKind, ScanHit, scan

__all__ = [
    "HitKind",
    "ScanHit",
    "scan",
    "writer",
]
