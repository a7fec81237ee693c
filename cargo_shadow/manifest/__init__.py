"""Cargo manifest model and target resolution.

Reads ``Cargo.toml`` files into typed models and maps each declared target to
the source path and stub content that shadow it.

Usage::

    from cargo_shadow.manifest import Manifest, resolve

    manifest = Manifest.from_toml("Cargo.toml")
    for target, kind in manifest.targets():
        path, content = resolve(target, kind)
"""

from cargo_shadow.manifest.models import Manifest, Package, Target, TargetKind
from cargo_shadow.manifest.resolver import (
    ENTRY_POINT_STUBS,
    EMPTY_STUB,
    MAIN_STUB,
    TargetShadow,
    resolve,
)

__all__ = [
    "ENTRY_POINT_STUBS",
    "EMPTY_STUB",
    "MAIN_STUB",
    "Manifest",
    "Package",
    "Target",
    "TargetKind",
    "TargetShadow",
    "resolve",
]
