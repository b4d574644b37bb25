from __future__ import annotations

import shutil
from collections.abc import Sequence
from fnmatch import fnmatch
from pathlib import Path


def clean(path: Path) -> None:
    """Remove ``path`` and everything below it, if it exists."""
    if path.is_dir():
        shutil.rmtree(path)
    elif path.exists():
        path.unlink()


def copy(
    patterns: str | Sequence[str],
    src_path: Path,
    dest_path: Path,
    ignore: Sequence[str] = (),
) -> list[Path]:
    """Copy files matching ``patterns`` from ``src_path`` into ``dest_path``.

    The directory structure below ``src_path`` is mirrored. ``ignore`` holds glob
    patterns matched against the path relative to ``src_path``.
    """
    if isinstance(patterns, str):
        patterns = [patterns]

    matched: set[Path] = set()
    for pattern in patterns:
        matched.update(p for p in src_path.glob(pattern) if p.is_file())

    copied: list[Path] = []
    for src_file in sorted(matched):
        relative = src_file.relative_to(src_path)
        if any(fnmatch(relative.as_posix(), ignored) for ignored in ignore):
            continue

        dest_file = dest_path / relative
        dest_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_file, dest_file)
        copied.append(dest_file)

    return copied
