"""cargo-shadow: content-stripped mirrors of Cargo package trees.

Copies every ``Cargo.toml`` (plus ``Cargo.lock`` and ``rust-toolchain``) and
replaces each build target's source with the smallest stub that still
compiles, so dependency builds can be cached independently of application
source.
"""

__version__ = "0.1.0"
