"""Snippet data model."""

from __future__ import annotations

from dataclasses import dataclass, field

from snipsync.paths import GITHUB_URL

LOCAL = "local"
DEFAULT_REF = "master"


@dataclass(frozen=True)
class FilePath:
    """A file location split into directory and filename.

    For archive sources the directory is relative to the staging area, so
    its first segment is the archive's root folder.
    """

    directory: str
    name: str

    def segments(self) -> list[str]:
        """Directory segments after the first, plus the filename."""
        parts = self.directory.replace("\\", "/").split("/")
        return [*parts[1:], self.name]


@dataclass(frozen=True)
class Origin:
    """Where a snippet came from."""

    owner: str = LOCAL
    repo: str = LOCAL
    ref: str | None = None

    @property
    def is_local(self) -> bool:
        return self.owner == LOCAL and self.repo == LOCAL


@dataclass
class Snippet:
    """Lines captured between a read-start and read-end marker."""

    id: str
    ext: str
    origin: Origin
    path: FilePath
    lines: list[str] = field(default_factory=list)
    lineno: int | None = None
    complete: bool = False

    def link_path(self) -> str:
        """Relative path shown as the source link label."""
        return "/".join(s for s in self.path.segments() if s)

    def source_url(self, host: str = GITHUB_URL) -> str:
        """URL of the snippet's source file on GitHub."""
        ref = self.origin.ref or DEFAULT_REF
        return "/".join([
            host.rstrip("/"),
            self.origin.owner,
            self.origin.repo,
            "blob",
            ref,
            self.link_path(),
        ])

    def describe(self) -> str:
        where = "/".join(s for s in [self.path.directory, self.path.name] if s)
        if not self.origin.is_local:
            where = f"{self.origin.owner}/{self.origin.repo}:{self.link_path()}"
        if self.lineno is not None:
            where = f"{where}:{self.lineno}"
        return where

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ext": self.ext,
            "owner": self.origin.owner,
            "repo": self.origin.repo,
            "ref": self.origin.ref,
            "path": self.link_path(),
            "lineno": self.lineno,
            "lines": len(self.lines),
            "complete": self.complete,
        }


def determine_extension(filename: str) -> str:
    """Return the text after the final '.' in a filename."""
    return filename.rsplit(".", 1)[-1]
