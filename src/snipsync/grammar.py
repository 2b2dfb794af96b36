"""Marker grammar: recognize read/write markers and parse their payloads.

Markers are literal tokens that may appear anywhere on a line, so they can
sit inside whatever comment syntax the host file uses:

    # :snippet-start: connect            (read-start, source file)
    # :snippet-end:                      (read-end, source file)
    <!-- :replace-start: connect -->     (write-start, target file)
    <!-- :replace-end: -->               (write-end, target file)

A write-start may carry a JSON object between the identifier and the
closing token to override feature flags for that one block:

    <!-- :replace-start: connect {"enable_source_link": false} -->
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields

from snipsync.errors import MalformedConfig, MalformedMarker

READ_START = ":snippet-start:"
READ_END = ":snippet-end:"
WRITE_START = ":replace-start:"
WRITE_START_CLOSE = "-->"
WRITE_END = ":replace-end:"


@dataclass(frozen=True)
class MarkerSet:
    """The literal token strings that delimit read and write regions."""

    read_start: str = READ_START
    read_end: str = READ_END
    write_start: str = WRITE_START
    write_start_close: str = WRITE_START_CLOSE
    write_end: str = WRITE_END

    @classmethod
    def from_mapping(cls, data: dict | None) -> MarkerSet:
        """Build a marker set from a config mapping, keeping defaults for missing keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown marker keys: {', '.join(unknown)}")
        for key, value in data.items():
            if not isinstance(value, str) or (key != "write_start_close" and not value):
                raise ValueError(f"Marker '{key}' must be a non-empty string")
        return cls(**data)


class MarkerGrammar:
    """Compiled matchers for one MarkerSet."""

    def __init__(self, markers: MarkerSet | None = None) -> None:
        self.markers = markers or MarkerSet()
        m = self.markers
        self._read_re = re.compile(re.escape(m.read_start) + r"\s+(\S+)")
        close = re.escape(m.write_start_close) if m.write_start_close else r"$"
        self._write_re = re.compile(
            re.escape(m.write_start) + r"\s+(\S+)(?:\s+(.+))?\s*" + close
        )

    def is_read_start(self, line: str) -> bool:
        return self.markers.read_start in line

    def is_read_end(self, line: str) -> bool:
        return self.markers.read_end in line

    def is_write_start(self, line: str) -> bool:
        return self.markers.write_start in line

    def is_write_end(self, line: str) -> bool:
        return self.markers.write_end in line

    def parse_read_start(self, line: str, lineno: int | None = None) -> str:
        """Return the identifier following a read-start token."""
        match = self._read_re.search(line)
        if not match:
            raise MalformedMarker("read-start marker without an identifier", line, lineno)
        return match.group(1)

    def parse_write_start(
        self, line: str, lineno: int | None = None,
    ) -> tuple[str, dict | None]:
        """Return (identifier, inline override) for a write-start line.

        The override is None when the marker carries no payload.

        Raises:
            MalformedMarker: If the line does not follow the write-start grammar.
            MalformedConfig: If the payload is not a JSON object.
        """
        match = self._write_re.search(line)
        if not match:
            raise MalformedMarker(
                "write-start marker must be followed by an identifier"
                f" and closed with '{self.markers.write_start_close}'",
                line,
                lineno,
            )
        ident, payload = match.group(1), match.group(2)
        if payload is None or not payload.strip():
            return ident, None
        try:
            override = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedConfig(f"invalid inline config ({e.msg})", line, lineno) from e
        if not isinstance(override, dict):
            raise MalformedConfig("inline config must be a JSON object", line, lineno)
        return ident, override


def split_lines(text: str) -> list[str]:
    """Split text on newlines only.

    Form feeds and Unicode line separators stay inside their line, and a
    single trailing newline does not produce an empty last line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines
