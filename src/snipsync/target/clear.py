"""Empty every write block, whatever its identifier."""

from __future__ import annotations

from dataclasses import dataclass, field

from snipsync.grammar import MarkerGrammar
from snipsync.target.files import TargetFile


@dataclass
class ClearStats:
    cleared: int = 0
    # 1-based line numbers of write-start markers left alone for lack of a write-end
    unterminated: list[int] = field(default_factory=list)


def clear_file(target: TargetFile, grammar: MarkerGrammar | None = None) -> ClearStats:
    """Drop the interior lines of each write block, keeping both markers.

    A write-start that is never closed keeps the lines that follow it.
    """
    grammar = grammar or MarkerGrammar()
    stats = ClearStats()
    kept: list[str] = []
    dropped: list[str] = []
    omit = False
    start = 0

    for idx, line in enumerate(target.lines):
        if grammar.is_write_start(line):
            if omit:
                kept.extend(dropped)
                stats.unterminated.append(start + 1)
            kept.append(line)
            omit, dropped, start = True, [], idx
            continue

        if omit and grammar.is_write_end(line):
            kept.append(line)
            if dropped:
                stats.cleared += 1
            omit, dropped = False, []
            continue

        if omit:
            dropped.append(line)
        else:
            kept.append(line)

    if omit:
        kept.extend(dropped)
        stats.unterminated.append(start + 1)

    target.lines = kept
    return stats


def clear_files(
    targets: list[TargetFile], grammar: MarkerGrammar | None = None,
) -> list[TargetFile]:
    """Clear every target in place and return them."""
    grammar = grammar or MarkerGrammar()
    for target in targets:
        clear_file(target, grammar)
    return targets
