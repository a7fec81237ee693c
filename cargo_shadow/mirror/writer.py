"""Mirror writer: the only code that modifies the destination tree.

Both operations create missing parent directories first and never read the
destination, so the last write to a path wins.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from cargo_shadow.errors import MirrorIOError


def _ensure_parent(dst: Path) -> None:
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise MirrorIOError("create directory", dst.parent, exc) from exc


def copy(src: str | Path, dst: str | Path) -> Path:
    """Copy the bytes of *src* to *dst*.

    Returns:
        The destination path.

    Raises:
        MirrorIOError: If *src* cannot be read or *dst* cannot be written.
    """
    src, dst = Path(src), Path(dst)
    _ensure_parent(dst)
    try:
        shutil.copyfile(src, dst)
    except OSError as exc:
        raise MirrorIOError("copy", src, exc) from exc
    return dst


def write_stub(dst: str | Path, content: str) -> Path:
    """Replace the contents of *dst* with *content*.

    Line endings are written as given, on every platform.
    """
    dst = Path(dst)
    _ensure_parent(dst)
    try:
        with dst.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as exc:
        raise MirrorIOError("write", dst, exc) from exc
    return dst
