"""cargo-shadow mirror orchestrator.

Builds a content-stripped mirror of a Cargo package tree in two steps:

Plan    -- scan the source, parse every manifest, resolve every target and
           produce an ordered list of file operations.  Nothing is written.
Execute -- apply the operations in order through the mirror writer.

Manifests, ``Cargo.lock`` and ``rust-toolchain`` are copied verbatim; every
declared target and every conventionally named entry point is replaced by a
stub.  Any failure aborts the run.

Usage::

    cargo-shadow --output-dir ./skeleton
    cargo shadow --output-dir ./skeleton --dry-run
    python -m cargo_shadow --output-dir ./skeleton --source-dir ./my-crate
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from cargo_shadow.config import Config
from cargo_shadow.errors import NoManifestFound, ShadowError, UnsafeTargetPath
from cargo_shadow.manifest import ENTRY_POINT_STUBS, Manifest, resolve
from cargo_shadow.mirror import HitKind, ScanHit, scan, writer
from cargo_shadow.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# File operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CopyFile:
    """Copy a source file into the mirror byte for byte."""

    src: Path
    dst: Path

    def describe(self) -> str:
        return f"copying {self.src} to {self.dst}"


@dataclass(frozen=True)
class WriteStub:
    """Write stub content at a mirror path.  ``label`` names what is shadowed."""

    dst: Path
    content: str
    label: str

    def describe(self) -> str:
        return f"shadowing {self.label} to {self.dst}"


FileOperation = Union[CopyFile, WriteStub]


@dataclass(frozen=True)
class StubConflict:
    """Two planned stubs for one destination that disagree on content."""

    dst: Path
    earlier: str
    later: str


@dataclass
class MirrorPlan:
    """Ordered operations for one run, plus the stub conflicts found."""

    operations: list[FileOperation] = field(default_factory=list)
    conflicts: list[StubConflict] = field(default_factory=list)
    manifests: int = 0

    def add_stub(self, stub: WriteStub, planned: dict[Path, WriteStub]) -> None:
        previous = planned.get(stub.dst)
        if previous is not None and previous.content != stub.content:
            self.conflicts.append(StubConflict(stub.dst, previous.label, stub.label))
        planned[stub.dst] = stub
        self.operations.append(stub)


@dataclass
class MirrorReport:
    """Counts of what a run did (or would do, in dry-run mode)."""

    manifests: int = 0
    copied: int = 0
    stubs: int = 0
    conflicts: int = 0
    dry_run: bool = False

    def as_dict(self) -> dict[str, str]:
        return {
            "Manifests": str(self.manifests),
            "Files copied": str(self.copied),
            "Stubs written": str(self.stubs),
            "Stub conflicts": str(self.conflicts),
            "Mode": "dry run" if self.dry_run else "write",
        }


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


def _under(root: Path, relative: Path) -> Path:
    """Join *relative* onto *root*, refusing paths that leave *root*."""
    normalized = Path(os.path.normpath(relative))
    if normalized.is_absolute() or normalized.parts[:1] == ("..",):
        raise UnsafeTargetPath(relative, root)
    return root / normalized


class ShadowPipeline:
    """Plans and executes a mirror run for one ``Config``."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def _log(self, message: str) -> None:
        if not self.config.quiet:
            console.print(message, markup=False, highlight=False, soft_wrap=True)

    # -- Planning ----------------------------------------------------------

    def plan(self) -> MirrorPlan:
        """Compute every file operation without writing anything.

        Raises:
            NoManifestFound: If the source root has no manifest.
            ManifestParseError: If any manifest in the tree is malformed.
            MissingTargetName: If a test/bench/example has no name or path.
            UnsafeTargetPath: If a target path points outside the mirror.
            MirrorIOError: If the tree or a manifest cannot be read.
        """
        cfg = self.config
        if not cfg.root_manifest_path.is_file():
            raise NoManifestFound(cfg.root_manifest_path)

        result = MirrorPlan()
        for aux in cfg.auxiliary_paths:
            if aux.is_file():
                result.operations.append(CopyFile(aux, cfg.output_dir / aux.name))

        hits = list(
            scan(
                cfg.source_dir,
                manifest_name=cfg.manifest_name,
                exclude_dirs=cfg.exclude_dirs,
                skip_paths=[cfg.output_dir],
            )
        )

        planned: dict[Path, WriteStub] = {}
        for hit in hits:
            if hit.kind is HitKind.MANIFEST:
                self._plan_manifest(hit, result, planned)
        for hit in hits:
            if hit.kind is HitKind.ENTRY_POINT:
                self._plan_entry_point(hit, result, planned)
        return result

    def _plan_manifest(
        self, hit: ScanHit, result: MirrorPlan, planned: dict[Path, WriteStub]
    ) -> None:
        src = self.config.source_dir / hit.path
        dst = self.config.output_dir / hit.path
        result.operations.append(CopyFile(src, dst))
        result.manifests += 1

        manifest = Manifest.from_toml(src)
        for target, kind in manifest.targets():
            shadow = resolve(target, kind)
            target_dst = _under(self.config.output_dir, hit.path.parent / shadow.path)
            result.add_stub(WriteStub(target_dst, shadow.content, str(kind)), planned)

    def _plan_entry_point(
        self, hit: ScanHit, result: MirrorPlan, planned: dict[Path, WriteStub]
    ) -> None:
        content = ENTRY_POINT_STUBS[hit.path.name]
        src = self.config.source_dir / hit.path
        stub = WriteStub(self.config.output_dir / hit.path, content, str(src))
        result.add_stub(stub, planned)

    # -- Execution ---------------------------------------------------------

    def execute(self, mirror_plan: MirrorPlan) -> MirrorReport:
        """Apply *mirror_plan* in order; the first failure propagates."""
        report = MirrorReport(
            manifests=mirror_plan.manifests,
            conflicts=len(mirror_plan.conflicts),
            dry_run=self.config.dry_run,
        )
        for op in mirror_plan.operations:
            if self.config.dry_run:
                self._log(f"[dry run] {op.describe()}")
            else:
                self._log(op.describe())
                if isinstance(op, CopyFile):
                    writer.copy(op.src, op.dst)
                else:
                    writer.write_stub(op.dst, op.content)
            if isinstance(op, CopyFile):
                report.copied += 1
            else:
                report.stubs += 1
        return report

    def run(self) -> MirrorReport:
        """Plan, report stub conflicts, then execute."""
        mirror_plan = self.plan()
        for conflict in mirror_plan.conflicts:
            print_warning(
                f"{conflict.dst}: stub from {conflict.later} replaces a different "
                f"stub from {conflict.earlier}"
            )
        return self.execute(mirror_plan)


def plan(source_dir: str | Path, output_dir: str | Path) -> MirrorPlan:
    """Plan a mirror of *source_dir* into *output_dir* with default settings."""
    config = Config(source_dir=Path(source_dir), output_dir=Path(output_dir))
    return ShadowPipeline(config).plan()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _cargo_args(argv: list[str]) -> list[str]:
    """Drop the subcommand name cargo repeats when running ``cargo shadow``.

    Cargo invokes ``cargo-shadow shadow --flag``; the second word is only
    dropped when the program name ends with ``cargo-<word>``.
    """
    args = list(argv)
    if len(args) >= 2 and args[0].endswith(f"cargo-{args[1]}"):
        del args[1]
    return args[1:]


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``cargo-shadow`` and ``python -m cargo_shadow``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="cargo-shadow",
        description="Mirror a Cargo package tree with source files replaced by stubs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cargo-shadow --output-dir ./skeleton\n"
            "  cargo shadow --output-dir ./skeleton --dry-run\n"
            "  cargo-shadow -o ./skeleton --source-dir ./crate --exclude-dir node_modules\n"
        ),
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Directory that receives the mirror (default: $CARGO_SHADOW_OUTPUT_DIR)",
    )
    parser.add_argument(
        "--source-dir",
        default=None,
        help="Package root containing Cargo.toml (default: current directory)",
    )
    parser.add_argument(
        "--exclude-dir",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional directory name to skip while scanning (repeatable)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Print the planned operations without writing anything",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        default=None,
        help="Only print warnings, errors and the final result",
    )

    raw_argv = sys.argv if argv is None else argv
    args = parser.parse_args(_cargo_args(raw_argv))

    try:
        config = Config.from_env(
            output_dir=Path(args.output_dir) if args.output_dir else None,
            source_dir=Path(args.source_dir) if args.source_dir else None,
            dry_run=args.dry_run,
            quiet=args.quiet,
        )
        if args.exclude_dir:
            config = Config(
                **{
                    **config.model_dump(),
                    "exclude_dirs": [*config.exclude_dirs, *args.exclude_dir],
                }
            )
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)

    try:
        report = ShadowPipeline(config).run()
    except ShadowError as exc:
        print_error(str(exc))
        sys.exit(1)

    if not config.quiet:
        print_summary_table(report.as_dict(), title="cargo-shadow")
    if config.dry_run:
        print_success(f"Dry run complete; nothing written to {config.output_dir}")
    else:
        print_success(f"Mirror written to {config.output_dir}")


if __name__ == "__main__":
    main()
