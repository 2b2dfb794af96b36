"""Capture snippets from source files.

Scans lines in order with a two-state machine (idle / capturing) holding
one active snippet at a time. Regions do not nest.
"""

from __future__ import annotations

import enum
import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from snipsync.errors import MalformedMarker, UnterminatedCapture
from snipsync.grammar import MarkerGrammar, split_lines
from snipsync.snippet.model import FilePath, Origin, Snippet, determine_extension

logger = logging.getLogger(__name__)


class State(enum.Enum):
    IDLE = "idle"
    CAPTURING = "capturing"


@dataclass
class ExtractResult:
    """Snippets found in one or more files, plus anything worth reporting."""

    snippets: list[Snippet] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: list[str] = field(default_factory=list)

    def extend(self, other: ExtractResult) -> None:
        self.snippets.extend(other.snippets)
        self.warnings.extend(other.warnings)
        self.files_scanned += other.files_scanned
        self.files_skipped.extend(other.files_skipped)


def _unterminated(snippet: Snippet, result: ExtractResult) -> None:
    msg = (
        f"{snippet.describe()}: snippet '{snippet.id}' has no read-end marker; "
        f"keeping {len(snippet.lines)} captured line(s)"
    )
    result.warnings.append(msg)
    warnings.warn(msg, UnterminatedCapture, stacklevel=3)


def extract_snippets(
    lines: Iterable[str],
    origin: Origin,
    path: FilePath,
    grammar: MarkerGrammar | None = None,
) -> ExtractResult:
    """Extract every read region from a sequence of lines.

    A read-start while already capturing closes the open snippet as
    unterminated and starts the new one. Reaching the end of input while
    capturing keeps the partial snippet and reports it.

    Raises:
        MalformedMarker: If a read-start marker has no identifier.
    """
    grammar = grammar or MarkerGrammar()
    ext = determine_extension(path.name)
    result = ExtractResult(files_scanned=1)
    state = State.IDLE
    active: Snippet | None = None

    for lineno, line in enumerate(lines, start=1):
        if grammar.is_read_end(line):
            if state is State.CAPTURING:
                active.complete = True
                state, active = State.IDLE, None
            continue

        if grammar.is_read_start(line):
            if state is State.CAPTURING:
                _unterminated(active, result)
            ident = grammar.parse_read_start(line, lineno)
            active = Snippet(id=ident, ext=ext, origin=origin, path=path, lineno=lineno)
            result.snippets.append(active)
            state = State.CAPTURING
            continue

        if state is State.CAPTURING:
            active.lines.append(line)

    if state is State.CAPTURING:
        _unterminated(active, result)

    return result


def extract_file(
    file_path: Path | str,
    origin: Origin,
    path: FilePath,
    grammar: MarkerGrammar | None = None,
) -> ExtractResult:
    """Read a file from disk and extract its snippets.

    Files that are not valid UTF-8 text are skipped.
    """
    fp = Path(file_path)
    try:
        text = fp.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.debug("Skipping non-text file %s", fp)
        return ExtractResult(files_skipped=[str(fp)])

    try:
        result = extract_snippets(split_lines(text), origin, path, grammar)
    except MalformedMarker as e:
        raise e.located(fp) from None
    if result.snippets:
        logger.debug("Extracted %d snippet(s) from %s", len(result.snippets), fp)
    return result
