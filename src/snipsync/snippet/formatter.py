"""Render snippets into the lines spliced between write markers."""

from __future__ import annotations

from snipsync.config import Features
from snipsync.paths import GITHUB_URL
from snipsync.snippet.model import Snippet

CODE_FENCE = "```"


def start_code_block(ext: str) -> str:
    return f"{CODE_FENCE}{ext}"


def source_link(snippet: Snippet, host: str = GITHUB_URL) -> str:
    """Markdown link from the snippet's relative path to its source URL."""
    return f"[{snippet.link_path()}]({snippet.source_url(host)})"


def render(snippet: Snippet, features: Features) -> list[str]:
    """Build the lines for one write block.

    Produces, in order: an optional source link, an opening fence tagged
    with the snippet's extension, the captured lines, and a closing fence.
    The snippet itself is left unchanged.
    """
    lines: list[str] = []
    if features.enable_source_link:
        lines.append(source_link(snippet))
    lines.append(start_code_block(snippet.ext))
    lines.extend(snippet.lines)
    lines.append(CODE_FENCE)
    return lines
