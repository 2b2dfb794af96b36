"""Snippet sync: collect snippets, splice them into targets, write back.

The sync process:
1. Discover and read every file under the configured target directories
2. Fetch each source and extract its snippets
3. Splice snippets into write blocks in memory, one snippet at a time
4. Write back the files whose lines changed

Nothing is written until every target has been spliced, so a malformed
marker aborts the run with all files untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from tqdm import tqdm

from snipsync.config import Config
from snipsync.grammar import MarkerGrammar
from snipsync.sources.loader import CollectResult, collect_snippets
from snipsync.target.clear import clear_file
from snipsync.target.files import TargetFile, discover_targets, read_target, write_target
from snipsync.target.scanner import scan_write_blocks
from snipsync.target.splice import splice_snippets

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of a sync or clear run."""

    snippets: int = 0
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    dry_run: bool = False

    @property
    def passed(self) -> bool:
        return not self.errors

    def summary(self, title: str = "Snippet Sync Results") -> str:
        lines = [title, "─" * 40]
        lines.append(f"  Snippets:  {self.snippets}")
        lines.append(f"  Updated:   {len(self.updated)}")
        lines.append(f"  Unchanged: {len(self.unchanged)}")
        if self.skipped:
            lines.append(f"  Skipped:   {len(self.skipped)}")
        for path in self.updated:
            lines.append(f"    + {path}")
        if self.unmatched:
            lines.append(f"\n  No snippet for ({len(self.unmatched)}):")
            for u in self.unmatched:
                lines.append(f"    - {u}")
        if self.warnings:
            lines.append(f"\n  WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"    - {w}")
        if self.errors:
            lines.append(f"\n  ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"    - {e['source']}: {e['error']}")
        if self.dry_run:
            lines.append("\n[DRY RUN] No files were modified.")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "snippets": self.snippets,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "skipped": self.skipped,
            "unmatched": self.unmatched,
            "warnings": self.warnings,
            "errors": self.errors,
            "dry_run": self.dry_run,
        }


def load_targets(config: Config, result: SyncResult) -> list[TargetFile]:
    """Discover and read every target file. Non-text files are skipped."""
    targets: list[TargetFile] = []
    for root in config.targets:
        for target in discover_targets(root):
            if read_target(target):
                targets.append(target)
            else:
                result.skipped.append(str(target.fullpath))
    return targets


def _write_all(targets: list[TargetFile], result: SyncResult, dry_run: bool) -> None:
    for target in targets:
        action = write_target(target, dry_run)
        if action == "updated":
            result.updated.append(str(target.fullpath))
        else:
            result.unchanged.append(str(target.fullpath))


def run_sync(
    config: Config,
    dry_run: bool = False,
    strict: bool = False,
    progress: bool = False,
) -> SyncResult:
    """Splice every configured snippet into every target file."""
    grammar = MarkerGrammar(config.markers)
    result = SyncResult(dry_run=dry_run)
    targets = load_targets(config, result)

    collected: CollectResult = collect_snippets(config, grammar, strict, progress)
    result.snippets = len(collected.snippets)
    result.warnings.extend(collected.warnings)
    result.errors.extend(collected.errors)

    snippets = tqdm(
        collected.snippets,
        desc="Splicing snippets",
        unit="snippet",
        disable=not progress,
        leave=False,
    )
    splice_snippets(snippets, targets, grammar, config.features)

    known = {s.id for s in collected.snippets}
    for target in targets:
        scan = scan_write_blocks(target.lines, grammar, config.features, target.fullpath)
        for block in scan.blocks:
            if block.id not in known:
                result.unmatched.append(f"{target.fullpath}:{block.start + 1} ({block.id})")
        for lineno in scan.unterminated:
            result.warnings.append(f"{target.fullpath}:{lineno}: write block has no end marker")

    _write_all(targets, result, dry_run)
    logger.debug("Sync complete: %d updated", len(result.updated))
    return result


def run_clear(
    config: Config,
    dry_run: bool = False,
    progress: bool = False,
) -> SyncResult:
    """Empty every write block in every target file."""
    grammar = MarkerGrammar(config.markers)
    result = SyncResult(dry_run=dry_run)
    targets = load_targets(config, result)

    for target in tqdm(targets, desc="Clearing", unit="file", disable=not progress, leave=False):
        stats = clear_file(target, grammar)
        for lineno in stats.unterminated:
            result.warnings.append(
                f"{target.fullpath}:{lineno}: write block has no end marker, left as is"
            )

    _write_all(targets, result, dry_run)
    return result


def list_snippets(config: Config, strict: bool = False, progress: bool = False) -> CollectResult:
    """Extract snippets from all sources without touching any target."""
    return collect_snippets(config, MarkerGrammar(config.markers), strict, progress)
