"""Splice rendered snippets into write blocks."""

from __future__ import annotations

import logging
from typing import Iterable

from snipsync.config import Features
from snipsync.grammar import MarkerGrammar
from snipsync.snippet.formatter import render
from snipsync.snippet.model import Snippet
from snipsync.target.files import TargetFile
from snipsync.target.scanner import scan_write_blocks

logger = logging.getLogger(__name__)


def splice_file(
    snippet: Snippet,
    target: TargetFile,
    grammar: MarkerGrammar | None = None,
    defaults: Features | None = None,
) -> int:
    """Replace the interior of every block whose id matches the snippet.

    The target is re-scanned from its current lines, so edits made by
    earlier snippets are seen. Marker lines are never touched.

    Returns:
        Number of blocks replaced.
    """
    scan = scan_write_blocks(target.lines, grammar, defaults, target.fullpath)
    replaced = 0
    # Back to front so earlier block indices stay valid.
    for block in reversed(scan.blocks):
        if block.id != snippet.id:
            continue
        target.lines[block.interior] = render(snippet, block.features)
        replaced += 1
    if replaced:
        logger.debug(
            "Spliced '%s' into %d block(s) of %s", snippet.id, replaced, target.fullpath,
        )
    return replaced


def splice_snippets(
    snippets: Iterable[Snippet],
    targets: list[TargetFile],
    grammar: MarkerGrammar | None = None,
    defaults: Features | None = None,
) -> list[TargetFile]:
    """Apply snippets to targets one at a time, in order.

    When several snippets share an identifier the last one applied wins.
    Blocks that no snippet matches keep their current content.
    """
    grammar = grammar or MarkerGrammar()
    for snippet in snippets:
        for target in targets:
            splice_file(snippet, target, grammar, defaults)
    return targets
