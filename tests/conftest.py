"""Shared pytest fixtures for the cargo-shadow test suite.

Provides reusable fixtures for:
- Building package trees on disk from a ``{relative path: content}`` mapping
- A sample single-crate package and a multi-crate tree
- Configs pointing at those trees with a fresh output directory
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from cargo_shadow.config import Config


# ---------------------------------------------------------------------------
# Tree builders
# ---------------------------------------------------------------------------


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create *files* under *root*; bytes are written verbatim."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Factory that writes a package tree under ``tmp_path / 'src-tree'``."""
    root = tmp_path / "src-tree"

    def _make(files: dict[str, str | bytes]) -> Path:
        root.mkdir(exist_ok=True)
        return write_tree(root, files)

    return _make


# ---------------------------------------------------------------------------
# Sample packages
# ---------------------------------------------------------------------------

SAMPLE_MANIFEST = textwrap.dedent(
    """\
    [package]
    name = "demo"
    version = "0.1.0"
    edition = "2021"
    build = "build.rs"

    [dependencies]
    serde = { version = "1", features = ["derive"] }

    [lib]

    [[bin]]
    name = "app"

    [[test]]
    name = "it"
    """
)


@pytest.fixture
def sample_package(make_tree) -> Path:
    """Single crate: build script, library, one binary, one test, a lockfile."""
    return make_tree(
        {
            "Cargo.toml": SAMPLE_MANIFEST,
            "Cargo.lock": "# lockfile\nversion = 3\n",
            "build.rs": 'fn main() { println!("cargo:rerun-if-changed=build.rs"); }\n',
            "src/lib.rs": "pub fn answer() -> u32 { 42 }\n",
            "src/main.rs": "fn main() { println!(\"{}\", demo::answer()); }\n",
            "src/util.rs": "pub fn helper() {}\n",
            "tests/it.rs": "#[test]\nfn works() { assert_eq!(demo::answer(), 42); }\n",
            "README.md": "# demo\n",
            "target/debug/build.rs": "generated\n",
            "target/debug/Cargo.toml": "[package]\nname = \"generated\"\n",
        }
    )


@pytest.fixture
def multi_crate_tree(make_tree) -> Path:
    """Root crate plus a nested crate with explicit and renamed target paths."""
    return make_tree(
        {
            "Cargo.toml": '[package]\nname = "root"\nversion = "0.1.0"\n',
            "rust-toolchain": "1.75.0\n",
            "src/main.rs": "fn main() { real_code(); }\n",
            "crates/core/Cargo.toml": textwrap.dedent(
                """\
                [package]
                name = "core"
                version = "0.1.0"

                [lib]
                path = "src/core.rs"

                [[bench]]
                name = "speed"

                [[example]]
                name = "demo"
                """
            ),
            "crates/core/src/core.rs": "pub struct Core;\n",
            "crates/core/benches/speed.rs": "fn bench() {}\n",
            "crates/core/examples/demo.rs": "fn main() { core::run(); }\n",
            "crates/core/src/lib.rs": "// undeclared but conventionally named\n",
        }
    )


@pytest.fixture
def config_for(tmp_path: Path) -> Callable[..., Config]:
    """Factory returning a ``Config`` for *source* with a fresh output dir."""

    def _config(source: Path, **kwargs) -> Config:
        return Config(source_dir=source, output_dir=tmp_path / "mirror", **kwargs)

    return _config
