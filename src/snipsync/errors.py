"""Error types raised while reading configuration, markers and sources."""

from __future__ import annotations

from pathlib import Path


class SnipsyncError(Exception):
    """Base class for all snipsync failures."""


class InvalidSourceSpec(SnipsyncError, ValueError):
    """A configured source has neither file patterns nor an owner/repo pair."""

    def __init__(self, source: object) -> None:
        self.source = source
        super().__init__(f"Invalid source: {source!r} (need 'files' or 'owner' + 'repo')")


class MalformedMarker(SnipsyncError, ValueError):
    """A marker line could not be parsed."""

    def __init__(
        self,
        message: str,
        line: str,
        lineno: int | None = None,
        path: Path | str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.lineno = lineno
        self.path = str(path) if path is not None else None
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.path or "<input>"
        if self.lineno is not None:
            where = f"{where}:{self.lineno}"
        return f"{where}: {self.message}: {self.line.strip()}"

    def located(self, path: Path | str) -> MalformedMarker:
        """Return the same error with the file path filled in."""
        self.path = str(path)
        self.args = (self._format(),)
        return self


class MalformedConfig(MalformedMarker):
    """A write-start marker carries an inline payload that is not a JSON object."""


class ArchiveFetchFailure(SnipsyncError, RuntimeError):
    """Downloading a repository archive failed."""


class ArchiveUnpackFailure(SnipsyncError, RuntimeError):
    """Unpacking a downloaded archive failed."""


class UnterminatedCapture(UserWarning):
    """A read-start marker was never closed before the end of the file."""
