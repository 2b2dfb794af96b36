"""Path and endpoint resolution.

Uses environment variables when available, falls back to conventional
defaults.

Environment variables:
    SNIPSYNC_CONFIG: config file (default: ./snipsync.yaml)
    SNIPSYNC_API_URL: GitHub API base (default: https://api.github.com)
    GITHUB_TOKEN: optional token sent when downloading archives
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_CONFIG_NAME = "snipsync.yaml"
_DEFAULT_API_URL = "https://api.github.com"

# Host used for source links rendered above spliced snippets
GITHUB_URL = "https://github.com"


def config_path() -> Path:
    """Return the path to the snipsync config file."""
    env = os.environ.get("SNIPSYNC_CONFIG")
    if env:
        return Path(env)
    return Path.cwd() / _DEFAULT_CONFIG_NAME


def api_url() -> str:
    """Return the GitHub API base URL without a trailing slash."""
    return os.environ.get("SNIPSYNC_API_URL", _DEFAULT_API_URL).rstrip("/")


def github_token() -> str | None:
    """Return the GitHub token, if one is configured."""
    return os.environ.get("GITHUB_TOKEN") or None
