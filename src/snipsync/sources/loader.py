"""Gather snippets from every configured source.

Sources are independent, so each one is fetched and scanned in its own
worker thread. Results are reassembled in configuration order, which
keeps the splice order (and therefore last-write-wins) deterministic.
"""

from __future__ import annotations

import logging
import tempfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from snipsync.config import Config, LocalSource, RepoSource
from snipsync.errors import ArchiveFetchFailure, ArchiveUnpackFailure
from snipsync.grammar import MarkerGrammar
from snipsync.snippet.extractor import ExtractResult, extract_file
from snipsync.snippet.model import Origin
from snipsync.sources.archive import fetch_archive, unpack_archive
from snipsync.sources.local import collect_local_files

logger = logging.getLogger(__name__)


@dataclass
class CollectResult(ExtractResult):
    """Extraction results across all sources."""

    errors: list[dict] = field(default_factory=list)
    sources_ok: int = 0


def _extract_local(source: LocalSource, grammar: MarkerGrammar) -> ExtractResult:
    result = ExtractResult()
    origin = Origin()
    files = collect_local_files(source.patterns, source.base)
    if not files:
        result.warnings.append(f"No files match {', '.join(source.patterns)}")
    for fp in files:
        result.extend(extract_file(source.base / fp.directory / fp.name, origin, fp, grammar))
    return result


def _extract_repo(
    source: RepoSource, grammar: MarkerGrammar, staging: Path, index: int,
) -> ExtractResult:
    result = ExtractResult()
    origin = Origin(owner=source.owner, repo=source.repo, ref=source.ref)
    workdir = staging / f"{index:03d}-{source.owner}-{source.repo}"
    workdir.mkdir(parents=True)

    data = fetch_archive(source.owner, source.repo, source.ref)
    archive = workdir / f"{source.repo}.zip"
    archive.write_bytes(data)
    out = workdir / "src"
    for fp in unpack_archive(archive, out):
        result.extend(extract_file(out / fp.directory / fp.name, origin, fp, grammar))
    return result


def extract_source(
    source: LocalSource | RepoSource,
    grammar: MarkerGrammar,
    staging: Path,
    index: int = 0,
) -> ExtractResult:
    """Extract every snippet from one source."""
    logger.debug("Extracting snippets from %s", source.label)
    if isinstance(source, LocalSource):
        return _extract_local(source, grammar)
    return _extract_repo(source, grammar, staging, index)


def collect_snippets(
    config: Config,
    grammar: MarkerGrammar | None = None,
    strict: bool = False,
    progress: bool = False,
) -> CollectResult:
    """Fetch and scan all sources, returning snippets in source order.

    Args:
        config: Parsed configuration.
        grammar: Marker grammar. Built from config.markers if None.
        strict: Re-raise the first archive failure instead of recording it.
        progress: Show a progress bar.

    Raises:
        MalformedMarker: If any source file has an unparseable marker.
        ArchiveFetchFailure / ArchiveUnpackFailure: Only when strict.
    """
    grammar = grammar or MarkerGrammar(config.markers)
    collected = CollectResult()
    per_source: dict[int, ExtractResult] = {}

    # Archives are unpacked here and removed when the block exits.
    with tempfile.TemporaryDirectory(prefix="snipsync_") as tmp:
        staging = Path(tmp)
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            futures = {
                pool.submit(extract_source, source, grammar, staging, i): i
                for i, source in enumerate(config.sources)
            }
            with tqdm(
                total=len(futures),
                desc="Collecting snippets",
                unit="source",
                disable=not progress,
                leave=False,
            ) as pbar:
                for future in as_completed(futures):
                    i = futures[future]
                    source = config.sources[i]
                    pbar.update(1)
                    pbar.set_postfix(source=source.label[:30], refresh=False)
                    try:
                        per_source[i] = future.result()
                    except (ArchiveFetchFailure, ArchiveUnpackFailure) as e:
                        if strict:
                            raise
                        logger.warning("Skipping %s: %s", source.label, e)
                        collected.errors.append({"source": source.label, "error": str(e)})

    for i in sorted(per_source):
        collected.extend(per_source[i])
        collected.sources_ok += 1
    return collected
