"""Discover, read and write target files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from snipsync.grammar import split_lines

logger = logging.getLogger(__name__)


@dataclass
class TargetFile:
    """A target document held in memory as a list of lines."""

    filename: str
    fullpath: Path
    lines: list[str] = field(default_factory=list)
    loaded: list[str] | None = None

    def text(self) -> str:
        """File contents as written back to disk."""
        return "\n".join(self.lines) + "\n"

    @staticmethod
    def lineno(index: int) -> int:
        """1-based line number for a 0-based line index."""
        return index + 1

    @property
    def changed(self) -> bool:
        """Whether the lines differ from what was read from disk."""
        return self.loaded is None or self.lines != self.loaded

    @classmethod
    def from_text(cls, text: str, fullpath: Path | str = "<memory>") -> TargetFile:
        fp = Path(fullpath)
        lines = split_lines(text)
        return cls(filename=fp.name, fullpath=fp, lines=lines, loaded=list(lines))


def discover_targets(root: Path | str) -> list[TargetFile]:
    """Walk a directory and return every file under it, sorted by path.

    Raises:
        FileNotFoundError: If root is not a directory.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise FileNotFoundError(f"Target directory not found: {root_path}")
    return [
        TargetFile(filename=p.name, fullpath=p)
        for p in sorted(root_path.rglob("*"))
        if p.is_file()
    ]


def read_target(target: TargetFile) -> bool:
    """Load a target's lines from disk.

    Returns False (and leaves the target empty) for files that are not
    UTF-8 text, so binary assets under a docs tree are never rewritten.
    """
    try:
        text = target.fullpath.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.debug("Skipping non-text target %s", target.fullpath)
        return False
    target.lines = split_lines(text)
    target.loaded = list(target.lines)
    return True


def write_target(target: TargetFile, dry_run: bool = False) -> str:
    """Write a target back if its lines changed.

    Returns:
        "updated" or "unchanged".
    """
    if not target.changed:
        return "unchanged"
    if not dry_run:
        target.fullpath.write_text(target.text(), encoding="utf-8")
        target.loaded = list(target.lines)
    return "updated"
