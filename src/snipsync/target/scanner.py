"""Locate write blocks in a target file.

A write block runs from a write-start marker to the next write-end marker.
Blocks do not nest: a second write-start before a write-end abandons the
first one, and a write-end with no open block is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from snipsync.config import Features, resolve_features
from snipsync.errors import MalformedConfig, MalformedMarker
from snipsync.grammar import MarkerGrammar


@dataclass(frozen=True)
class WriteBlock:
    """Marker line indices (0-based) plus the block's identifier and flags."""

    start: int
    end: int
    id: str
    features: Features

    @property
    def interior(self) -> slice:
        """Slice of the lines strictly between the two markers."""
        return slice(self.start + 1, self.end)


@dataclass
class ScanResult:
    blocks: list[WriteBlock] = field(default_factory=list)
    # 1-based line numbers of write-start markers with no write-end
    unterminated: list[int] = field(default_factory=list)

    def ids(self) -> set[str]:
        return {b.id for b in self.blocks}


def scan_write_blocks(
    lines: list[str],
    grammar: MarkerGrammar | None = None,
    defaults: Features | None = None,
    path: Path | str | None = None,
) -> ScanResult:
    """Find every write block and resolve its effective features.

    Every write-start payload is parsed, whichever snippet is being looked
    for, so a malformed marker anywhere in the file stops the run.

    Raises:
        MalformedMarker: If a write-start line does not parse.
        MalformedConfig: If an inline payload is not valid config.
    """
    grammar = grammar or MarkerGrammar()
    defaults = defaults or Features()
    result = ScanResult()
    pending: tuple[int, str, Features] | None = None

    for idx, line in enumerate(lines):
        if grammar.is_write_start(line):
            lineno = idx + 1
            try:
                ident, override = grammar.parse_write_start(line, lineno)
                try:
                    features = resolve_features(defaults, override)
                except MalformedConfig as e:
                    raise MalformedConfig(e.message, line, lineno) from e
            except MalformedMarker as e:
                if path is not None:
                    e.located(path)
                raise
            if pending is not None:
                result.unterminated.append(pending[0] + 1)
            pending = (idx, ident, features)
            continue

        if grammar.is_write_end(line) and pending is not None:
            start, ident, features = pending
            result.blocks.append(WriteBlock(start=start, end=idx, id=ident, features=features))
            pending = None

    if pending is not None:
        result.unterminated.append(pending[0] + 1)

    return result
