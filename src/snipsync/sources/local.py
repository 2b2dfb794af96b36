"""Collect local source files matched by glob patterns."""

from __future__ import annotations

import glob
from pathlib import Path

from snipsync.snippet.model import FilePath


def collect_local_files(patterns: tuple[str, ...] | list[str], base: Path | str) -> list[FilePath]:
    """Expand glob patterns relative to ``base`` into file descriptors.

    Directories are relative to ``base`` when the match lies under it.
    Each file is listed once, in pattern order.
    """
    base_path = Path(base)
    seen: set[Path] = set()
    found: list[FilePath] = []
    for pattern in patterns:
        full = pattern if Path(pattern).is_absolute() else str(base_path / pattern)
        for match in sorted(glob.glob(full, recursive=True)):
            p = Path(match)
            if not p.is_file() or p in seen:
                continue
            seen.add(p)
            try:
                rel = p.relative_to(base_path)
            except ValueError:
                rel = p
            directory = rel.parent.as_posix()
            found.append(FilePath(directory=directory, name=p.name))
    return found
