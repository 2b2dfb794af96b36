"""Command-line interface for snipsync.

Usage:
    snipsync [--config PATH] sync [--dry-run] [--strict] [--no-progress]
    snipsync [--config PATH] clear [--dry-run] [--no-progress]
    snipsync [--config PATH] snippets list [--json]
"""

import argparse
import logging
import sys

import yaml

from snipsync import __version__
from snipsync.cli.snippets import cmd_snippets_list
from snipsync.cli.sync import cmd_clear, cmd_sync
from snipsync.errors import SnipsyncError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snipsync",
        description="Sync code snippets from source files into documentation",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to snipsync.yaml (default: $SNIPSYNC_CONFIG or ./snipsync.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # sync
    sync = sub.add_parser("sync", help="Splice snippets into target files")
    sync.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )
    sync.add_argument(
        "--strict", action="store_true",
        help="Abort if any source cannot be fetched",
    )
    sync.add_argument(
        "--no-progress", action="store_true",
        help="Hide progress bars",
    )

    # clear
    clear = sub.add_parser("clear", help="Empty every write block in target files")
    clear.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )
    clear.add_argument(
        "--no-progress", action="store_true",
        help="Hide progress bars",
    )

    # snippets
    snip = sub.add_parser("snippets", help="Snippet inspection")
    snip_sub = snip.add_subparsers(dest="subcommand")
    ls = snip_sub.add_parser("list", help="List snippets found in all sources")
    ls.add_argument(
        "--json", action="store_true",
        help="Output machine-readable JSON",
    )

    return parser


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("snipsync")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    _setup_logging(args.verbose)

    dispatch = {
        ("sync", ""): cmd_sync,
        ("clear", ""): cmd_clear,
        ("snippets", "list"): cmd_snippets_list,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if not handler:
        parser.parse_args([args.command, "--help"])
        return 0

    try:
        return handler(args)
    except (SnipsyncError, FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
