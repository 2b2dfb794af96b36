"""Snippet inspection CLI commands."""

import argparse
import json


def cmd_snippets_list(args: argparse.Namespace) -> int:
    from snipsync.config import load_config
    from snipsync.sync import list_snippets

    config = load_config(args.config)
    result = list_snippets(config)

    if args.json:
        print(json.dumps({
            "snippets": [s.to_dict() for s in result.snippets],
            "warnings": result.warnings,
            "errors": result.errors,
        }, indent=2))
        return 1 if result.errors else 0

    print(f"Found {len(result.snippets)} snippets in {result.files_scanned} files:\n")
    for snippet in result.snippets:
        flag = "" if snippet.complete else "  [UNTERMINATED]"
        print(f"  {snippet.id:<30} {snippet.describe()}  ({len(snippet.lines)} lines){flag}")
    for e in result.errors:
        print(f"  FAIL {e['source']}: {e['error']}")
    return 1 if result.errors else 0
