"""Sync and clear CLI commands."""

import argparse
import sys


def _progress(args: argparse.Namespace) -> bool:
    return not args.no_progress and sys.stderr.isatty()


def cmd_sync(args: argparse.Namespace) -> int:
    from snipsync.config import load_config
    from snipsync.sync import run_sync

    config = load_config(args.config)
    result = run_sync(
        config,
        dry_run=args.dry_run,
        strict=args.strict,
        progress=_progress(args),
    )
    print(result.summary())
    return 1 if result.errors else 0


def cmd_clear(args: argparse.Namespace) -> int:
    from snipsync.config import load_config
    from snipsync.sync import run_clear

    config = load_config(args.config)
    result = run_clear(config, dry_run=args.dry_run, progress=_progress(args))
    print(result.summary("Snippet Clear Results"))
    return 0
