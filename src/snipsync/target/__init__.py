"""Target module: scan, splice and clear write blocks in documentation files."""

from snipsync.target.clear import clear_file, clear_files
from snipsync.target.files import TargetFile, discover_targets, read_target, write_target
from snipsync.target.scanner import WriteBlock, scan_write_blocks
from snipsync.target.splice import splice_file, splice_snippets

__all__ = [
    "TargetFile",
    "WriteBlock",
    "clear_file",
    "clear_files",
    "discover_targets",
    "read_target",
    "scan_write_blocks",
    "splice_file",
    "splice_snippets",
    "write_target",
]
