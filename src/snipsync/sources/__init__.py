"""Sources module: fetch local or GitHub sources and extract their snippets."""

from snipsync.sources.archive import fetch_archive, unpack_archive
from snipsync.sources.loader import CollectResult, collect_snippets, extract_source
from snipsync.sources.local import collect_local_files

__all__ = [
    "CollectResult",
    "collect_local_files",
    "collect_snippets",
    "extract_source",
    "fetch_archive",
    "unpack_archive",
]
