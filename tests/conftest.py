"""Shared test fixtures for snipsync."""

from pathlib import Path

import pytest

from snipsync.config import Features
from snipsync.grammar import MarkerGrammar
from snipsync.snippet.model import FilePath, Origin, Snippet


def write_start(ident: str, payload: str = "") -> str:
    body = f"{ident} {payload}".strip()
    return f"<!-- :replace-start: {body} -->"


WRITE_END = "<!-- :replace-end: -->"


@pytest.fixture
def grammar():
    return MarkerGrammar()


@pytest.fixture
def no_link():
    return Features(enable_source_link=False)


@pytest.fixture
def make_snippet():
    def _make(ident: str, lines: list[str], name: str = "demo.py") -> Snippet:
        return Snippet(
            id=ident,
            ext=name.rsplit(".", 1)[-1],
            origin=Origin(),
            path=FilePath("examples", name),
            lines=list(lines),
            complete=True,
        )
    return _make


@pytest.fixture
def project(tmp_path) -> Path:
    """A config, one source file and one target document."""
    src = tmp_path / "examples"
    src.mkdir()
    (src / "connect.py").write_text(
        "import client\n"
        "# :snippet-start: connect\n"
        "c = client.connect()\n"
        "# :snippet-end:\n"
    )
    guide = tmp_path / "docs" / "guide"
    guide.mkdir(parents=True)
    (guide / "index.md").write_text(
        "# Guide\n"
        "\n"
        f"{write_start('connect')}\n"
        "stale\n"
        f"{WRITE_END}\n"
        "\n"
        f"{write_start('missing')}\n"
        "keep me\n"
        f"{WRITE_END}\n"
    )
    (tmp_path / "snipsync.yaml").write_text(
        "origins:\n"
        "  - files:\n"
        "      - examples/**/*.py\n"
        "targets:\n"
        "  - docs\n"
        "features:\n"
        "  enable_source_link: false\n"
    )
    return tmp_path
