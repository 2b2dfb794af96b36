"""Load snipsync.yaml and resolve per-block feature flags.

Example config:

    origins:
      - owner: mongodb
        repo: docs-examples
        ref: main
      - files:
          - examples/**/*.py
    targets:
      - docs/source
    features:
      enable_source_link: true

JSON configs load too, since YAML is a superset of JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

from snipsync.errors import InvalidSourceSpec, MalformedConfig
from snipsync.grammar import MarkerSet
from snipsync.paths import config_path as _default_config_path

DEFAULT_WORKERS = 4


@dataclass(frozen=True)
class Features:
    """Feature flags applied when rendering a snippet into a write block."""

    enable_source_link: bool = False

    @classmethod
    def from_mapping(cls, data: dict | None, where: str = "features") -> Features:
        """Validate a flag mapping. Unknown keys are ignored."""
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"'{where}' must be a mapping")
        return resolve_features(cls(), data, where)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def resolve_features(
    defaults: Features,
    override: dict | None,
    where: str = "inline config",
) -> Features:
    """Merge a block-local override onto the global defaults.

    Keys present in the override win; everything else falls back to the
    defaults. Recognized keys mirror the Features fields.

    Raises:
        MalformedConfig: If a recognized key has the wrong type.
    """
    if not override:
        return defaults
    known = {f.name for f in fields(Features)}
    changes = {}
    for key, value in override.items():
        if key not in known:
            continue
        if not isinstance(value, bool):
            raise MalformedConfig(f"'{key}' must be true or false", f"{where}: {override}")
        changes[key] = value
    return replace(defaults, **changes)


@dataclass(frozen=True)
class LocalSource:
    """Local files matched by glob patterns."""

    patterns: tuple[str, ...]
    base: Path

    @property
    def label(self) -> str:
        return "local files"


@dataclass(frozen=True)
class RepoSource:
    """A GitHub repository fetched as a zip archive."""

    owner: str
    repo: str
    ref: str | None = None

    @property
    def label(self) -> str:
        ref = f"@{self.ref}" if self.ref else ""
        return f"{self.owner}/{self.repo}{ref}"


@dataclass
class Config:
    """Parsed snipsync configuration."""

    sources: list[LocalSource | RepoSource] = field(default_factory=list)
    targets: list[Path] = field(default_factory=list)
    features: Features = field(default_factory=Features)
    markers: MarkerSet = field(default_factory=MarkerSet)
    workers: int = DEFAULT_WORKERS
    path: Path | None = None


def parse_source(entry: object, base: Path) -> LocalSource | RepoSource:
    """Turn one origins entry into a source descriptor.

    Raises:
        InvalidSourceSpec: If the entry has neither 'files' nor 'owner' + 'repo'.
    """
    if not isinstance(entry, dict):
        raise InvalidSourceSpec(entry)
    if "files" in entry:
        patterns = entry["files"]
        if isinstance(patterns, str):
            patterns = [patterns]
        if not patterns or not all(isinstance(p, str) for p in patterns):
            raise InvalidSourceSpec(entry)
        return LocalSource(patterns=tuple(patterns), base=base)
    if entry.get("owner") and entry.get("repo"):
        ref = entry.get("ref")
        return RepoSource(
            owner=str(entry["owner"]),
            repo=str(entry["repo"]),
            ref=str(ref) if ref else None,
        )
    raise InvalidSourceSpec(entry)


def parse_config(data: dict, base: Path | str | None = None) -> Config:
    """Build a Config from an already-loaded mapping.

    Relative file patterns and target directories resolve against ``base``
    (the config file's directory), defaulting to the working directory.
    """
    root = Path(base) if base else Path.cwd()
    origins = data.get("origins", data.get("sources")) or []
    if not isinstance(origins, list):
        raise ValueError("'origins' must be a list")
    targets = data.get("targets") or []
    if not isinstance(targets, list):
        raise ValueError("'targets' must be a list")

    workers = data.get("workers", DEFAULT_WORKERS)
    if not isinstance(workers, int) or workers < 1:
        raise ValueError(f"'workers' must be a positive integer, got {workers!r}")

    return Config(
        sources=[parse_source(entry, root) for entry in origins],
        targets=[root / str(t) for t in targets],
        features=Features.from_mapping(data.get("features"), "features"),
        markers=MarkerSet.from_mapping(data.get("markers")),
        workers=workers,
    )


def load_config(path: Path | str | None = None) -> Config:
    """Read and parse a snipsync config file.

    Args:
        path: Path to the config. Defaults to $SNIPSYNC_CONFIG or ./snipsync.yaml.

    Returns:
        Parsed Config.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the file is malformed.
        InvalidSourceSpec: If an origin is incomplete.
    """
    cfg_path = Path(path) if path else _default_config_path()
    with open(cfg_path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config at {cfg_path} is not a YAML mapping")

    config = parse_config(data, cfg_path.resolve().parent)
    config.path = cfg_path
    return config
