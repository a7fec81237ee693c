"""cargo-shadow configuration.

Typed configuration for a mirror run.  Settings use a Pydantic v2 model so
they are validated at construction time, whether they come from the command
line or from ``CARGO_SHADOW_*`` environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Settings for a single mirror run.

    The file names default to the Cargo conventions.  ``exclude_dirs`` lists
    directory names whose subtrees are never traversed (build output).
    """

    source_dir: Path = Field(default=Path("."), description="Root of the package tree")
    output_dir: Path = Field(..., description="Destination of the mirror")
    manifest_name: str = Field(default="Cargo.toml")
    lockfile_name: str = Field(default="Cargo.lock")
    toolchain_name: str = Field(default="rust-toolchain")
    exclude_dirs: list[str] = Field(default_factory=lambda: ["target"])
    dry_run: bool = Field(default=False, description="Plan only, never touch the filesystem")
    quiet: bool = Field(default=False, description="Suppress per-file progress lines")

    @field_validator("manifest_name", "lockfile_name", "toolchain_name")
    @classmethod
    def _plain_file_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value:
            raise ValueError(f"expected a bare file name, got {value!r}")
        return value

    @field_validator("exclude_dirs")
    @classmethod
    def _plain_dir_names(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name or "/" in name or "\\" in name:
                raise ValueError(f"expected a bare directory name, got {name!r}")
        return value

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def root_manifest_path(self) -> Path:
        """The manifest that must exist at the source root."""
        return self.source_dir / self.manifest_name

    @property
    def lockfile_path(self) -> Path:
        return self.source_dir / self.lockfile_name

    @property
    def toolchain_path(self) -> Path:
        return self.source_dir / self.toolchain_name

    @property
    def auxiliary_paths(self) -> list[Path]:
        """Root-level singletons copied verbatim whenever they exist."""
        return [self.lockfile_path, self.toolchain_path]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CARGO_SHADOW_SOURCE_DIR, CARGO_SHADOW_OUTPUT_DIR,
            CARGO_SHADOW_EXCLUDE_DIRS (comma separated),
            CARGO_SHADOW_DRY_RUN, CARGO_SHADOW_QUIET.

        Keyword arguments whose value is not ``None`` take precedence over the
        environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CARGO_SHADOW_SOURCE_DIR"):
            kwargs["source_dir"] = Path(os.environ["CARGO_SHADOW_SOURCE_DIR"])
        if os.environ.get("CARGO_SHADOW_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CARGO_SHADOW_OUTPUT_DIR"])
        if os.environ.get("CARGO_SHADOW_EXCLUDE_DIRS"):
            raw = os.environ["CARGO_SHADOW_EXCLUDE_DIRS"]
            kwargs["exclude_dirs"] = [d.strip() for d in raw.split(",") if d.strip()]
        if os.environ.get("CARGO_SHADOW_DRY_RUN"):
            kwargs["dry_run"] = os.environ["CARGO_SHADOW_DRY_RUN"].strip().lower() in _TRUTHY
        if os.environ.get("CARGO_SHADOW_QUIET"):
            kwargs["quiet"] = os.environ["CARGO_SHADOW_QUIET"].strip().lower() in _TRUTHY

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
