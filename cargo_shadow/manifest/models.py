"""Pydantic v2 models for Cargo manifests.

Only the parts of ``Cargo.toml`` needed to enumerate build targets are
modelled.  Every other table and key is ignored, and a missing section leaves
the corresponding field as ``None``.
"""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cargo_shadow.errors import ManifestParseError, MirrorIOError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TargetKind(str, Enum):
    """Kind of compilable unit a target declares.  Values are display labels."""
    BUILD_SCRIPT = "build-script"
    LIBRARY = "library"
    BINARY = "binary"
    TEST = "test"
    BENCH = "bench"
    EXAMPLE = "example"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Manifest sections
# ---------------------------------------------------------------------------

class Target(BaseModel):
    """A ``[lib]``, ``[[bin]]``, ``[[test]]``, ``[[bench]]`` or ``[[example]]`` entry."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="Target name")
    path: Optional[str] = Field(
        default=None, description="Explicit source path, relative to the manifest"
    )


class Package(BaseModel):
    """The ``[package]`` table.

    ``build`` is either a path to the build script or a boolean: ``false``
    disables the build script and ``true`` selects the default ``build.rs``.
    """
    model_config = ConfigDict(frozen=True)

    build: Optional[Union[str, bool]] = Field(default=None)

    def build_target(self) -> Optional[Target]:
        """Return the build script as a target, or ``None`` if there is none."""
        if self.build is None or self.build is False:
            return None
        if self.build is True:
            return Target()
        return Target(path=self.build)


class Manifest(BaseModel):
    """Typed view over one parsed ``Cargo.toml``."""

    package: Optional[Package] = None
    lib: Optional[Target] = None
    bin: Optional[list[Target]] = None
    test: Optional[list[Target]] = None
    bench: Optional[list[Target]] = None
    example: Optional[list[Target]] = None

    @classmethod
    def from_bytes(cls, data: bytes, path: Path | None = None) -> "Manifest":
        """Deserialise manifest bytes.

        Args:
            data: Raw file contents.
            path: Where the bytes came from; only used in error messages.

        Raises:
            ManifestParseError: If *data* is not UTF-8, not TOML, or does not
                fit the target schema.
        """
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestParseError(path, f"not valid UTF-8 ({exc.reason})") from exc
        try:
            raw = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestParseError(path, f"invalid TOML: {exc}") from exc
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise ManifestParseError(path, reasons) from exc

    @classmethod
    def from_toml(cls, path: Path) -> "Manifest":
        """Read and deserialise the manifest at *path*."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise MirrorIOError("read", Path(path), exc) from exc
        return cls.from_bytes(data, Path(path))

    def targets(self) -> list[tuple[Target, TargetKind]]:
        """Enumerate every declared target in shadowing order.

        The order is fixed: build script, library, binaries, tests, benches,
        examples, each list in declaration order.
        """
        found: list[tuple[Target, TargetKind]] = []
        build = self.package.build_target() if self.package is not None else None
        if build is not None:
            found.append((build, TargetKind.BUILD_SCRIPT))
        if self.lib is not None:
            found.append((self.lib, TargetKind.LIBRARY))
        for targets, kind in (
            (self.bin, TargetKind.BINARY),
            (self.test, TargetKind.TEST),
            (self.bench, TargetKind.BENCH),
            (self.example, TargetKind.EXAMPLE),
        ):
            found.extend((t, kind) for t in targets or [])
        return found
