"""Tests for the source tree scanner (cargo_shadow.mirror.scanner).

Covers:
- Manifest and entry-point classification at any depth
- Pruning of build-output directories and explicit skip paths
- Deterministic ordering
- Configurable manifest and entry-point names
- MirrorIOError on unreadable roots
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cargo_shadow.errors import MirrorIOError
from cargo_shadow.mirror.scanner import HitKind, ScanHit, scan

pytestmark = pytest.mark.unit


def _hits(root: Path, **kwargs) -> list[tuple[str, HitKind]]:
    return [(hit.path.as_posix(), hit.kind) for hit in scan(root, **kwargs)]


class TestClassification:
    def test_sample_package(self, sample_package: Path):
        assert _hits(sample_package) == [
            ("Cargo.toml", HitKind.MANIFEST),
            ("build.rs", HitKind.ENTRY_POINT),
            ("src/lib.rs", HitKind.ENTRY_POINT),
            ("src/main.rs", HitKind.ENTRY_POINT),
        ]

    def test_nested_manifests_and_entry_points(self, multi_crate_tree: Path):
        assert _hits(multi_crate_tree) == [
            ("Cargo.toml", HitKind.MANIFEST),
            ("crates/core/Cargo.toml", HitKind.MANIFEST),
            ("crates/core/src/lib.rs", HitKind.ENTRY_POINT),
            ("src/main.rs", HitKind.ENTRY_POINT),
        ]

    def test_renamed_entry_point_not_matched(self, make_tree):
        root = make_tree({"Cargo.toml": "", "src/core.rs": "", "src/bin/tool.rs": ""})
        assert _hits(root) == [("Cargo.toml", HitKind.MANIFEST)]

    def test_hits_are_relative(self, sample_package: Path):
        for hit in scan(sample_package):
            assert not hit.path.is_absolute()
            assert (sample_package / hit.path).is_file()

    def test_directories_named_like_entry_points_ignored(self, make_tree):
        root = make_tree({"Cargo.toml": "", "main.rs/inner.txt": ""})
        assert _hits(root) == [("Cargo.toml", HitKind.MANIFEST)]

    def test_hit_is_value_record(self):
        assert ScanHit(Path("a"), HitKind.MANIFEST) == ScanHit(Path("a"), HitKind.MANIFEST)


class TestPruning:
    def test_target_dir_pruned_at_any_depth(self, make_tree):
        root = make_tree(
            {
                "Cargo.toml": "",
                "target/Cargo.toml": "",
                "crates/a/target/debug/build/x/build.rs": "",
                "crates/a/src/main.rs": "",
            }
        )
        assert _hits(root) == [
            ("Cargo.toml", HitKind.MANIFEST),
            ("crates/a/src/main.rs", HitKind.ENTRY_POINT),
        ]

    def test_custom_exclude_dirs(self, make_tree):
        root = make_tree({"Cargo.toml": "", "vendor/x/Cargo.toml": "", "target/lib.rs": ""})
        assert _hits(root, exclude_dirs=["vendor"]) == [
            ("Cargo.toml", HitKind.MANIFEST),
            ("target/lib.rs", HitKind.ENTRY_POINT),
        ]

    def test_skip_paths(self, make_tree):
        root = make_tree({"Cargo.toml": "", "out/Cargo.toml": "", "out/src/lib.rs": ""})
        assert _hits(root, skip_paths=[root / "out"]) == [("Cargo.toml", HitKind.MANIFEST)]

    def test_excluded_dir_hides_its_entry_points(self, make_tree):
        root = make_tree({"Cargo.toml": "", "src/target/main.rs": ""})
        assert _hits(root, exclude_dirs=["src"]) == [("Cargo.toml", HitKind.MANIFEST)]


class TestOptions:
    def test_custom_names(self, make_tree):
        root = make_tree({"Package.toml": "", "Cargo.toml": "", "entry.rs": "", "lib.rs": ""})
        hits = _hits(root, manifest_name="Package.toml", entry_point_names=["entry.rs"])
        assert hits == [
            ("Package.toml", HitKind.MANIFEST),
            ("entry.rs", HitKind.ENTRY_POINT),
        ]

    def test_order_is_stable(self, multi_crate_tree: Path):
        assert list(scan(multi_crate_tree)) == list(scan(multi_crate_tree))

    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(MirrorIOError) as excinfo:
            list(scan(tmp_path / "does-not-exist"))
        assert excinfo.value.operation == "scan"
