"""Tests for snippet extraction."""

import pytest

from snipsync.errors import MalformedMarker, UnterminatedCapture
from snipsync.snippet.extractor import extract_file, extract_snippets
from snipsync.snippet.model import FilePath, Origin

PATH = FilePath("examples/python", "demo.py")


def _extract(lines, grammar):
    return extract_snippets(lines, Origin(), PATH, grammar)


class TestExtractSnippets:
    def test_single_region(self, grammar):
        result = _extract([
            "import os",
            "# :snippet-start: one",
            "x = 1",
            "y = 2",
            "# :snippet-end:",
            "print(x)",
        ], grammar)
        assert len(result.snippets) == 1
        snip = result.snippets[0]
        assert snip.id == "one"
        assert snip.lines == ["x = 1", "y = 2"]
        assert snip.ext == "py"
        assert snip.lineno == 2
        assert snip.complete
        assert result.warnings == []

    def test_markers_not_captured(self, grammar):
        result = _extract(["# :snippet-start: a", "# :snippet-end:"], grammar)
        assert result.snippets[0].lines == []

    def test_duplicate_ids_kept(self, grammar):
        result = _extract([
            "# :snippet-start: dup", "first", "# :snippet-end:",
            "# :snippet-start: dup", "second", "# :snippet-end:",
        ], grammar)
        assert [s.lines for s in result.snippets] == [["first"], ["second"]]

    def test_stray_end_ignored(self, grammar):
        result = _extract(["# :snippet-end:", "loose", "# :snippet-start: a", "in", "# :snippet-end:"], grammar)
        assert len(result.snippets) == 1
        assert result.snippets[0].lines == ["in"]

    def test_unterminated_at_eof_is_kept_and_reported(self, grammar):
        with pytest.warns(UnterminatedCapture):
            result = _extract(["# :snippet-start: open", "a", "b"], grammar)
        snip = result.snippets[0]
        assert snip.lines == ["a", "b"]
        assert not snip.complete
        assert len(result.warnings) == 1
        assert "open" in result.warnings[0]
        assert "demo.py:1" in result.warnings[0]

    def test_restart_while_capturing(self, grammar):
        with pytest.warns(UnterminatedCapture):
            result = _extract([
                "# :snippet-start: first",
                "a",
                "# :snippet-start: second",
                "b",
                "# :snippet-end:",
            ], grammar)
        first, second = result.snippets
        assert first.lines == ["a"] and not first.complete
        assert second.lines == ["b"] and second.complete

    def test_extension_from_last_dot(self, grammar):
        result = extract_snippets(
            ["// :snippet-start: x", "y", "// :snippet-end:"],
            Origin(),
            FilePath("src", "bundle.min.js"),
            grammar,
        )
        assert result.snippets[0].ext == "js"


class TestExtractFile:
    def test_reads_from_disk(self, tmp_path, grammar):
        src = tmp_path / "demo.py"
        src.write_text("# :snippet-start: a\nvalue = 1\n# :snippet-end:\n")
        result = extract_file(src, Origin(), FilePath(".", "demo.py"), grammar)
        assert result.files_scanned == 1
        assert result.snippets[0].lines == ["value = 1"]

    def test_binary_file_skipped(self, tmp_path, grammar):
        blob = tmp_path / "logo.png"
        blob.write_bytes(b"\x89PNG\xff\xfe\x00\x00")
        result = extract_file(blob, Origin(), FilePath(".", "logo.png"), grammar)
        assert result.snippets == []
        assert result.files_skipped == [str(blob)]

    def test_malformed_marker_names_file(self, tmp_path, grammar):
        src = tmp_path / "bad.py"
        src.write_text("ok\n# :snippet-start:\n")
        with pytest.raises(MalformedMarker) as exc:
            extract_file(src, Origin(), FilePath(".", "bad.py"), grammar)
        assert f"{src}:2" in str(exc.value)

    def test_form_feed_and_line_separator_stay_in_line(self, tmp_path, grammar):
        src = tmp_path / "demo.py"
        src.write_text(
            "# :snippet-start: a\na = 1\x0cb = 2\nc\u2028d\n# :snippet-end:\n",
            encoding="utf-8",
        )
        result = extract_file(src, Origin(), FilePath(".", "demo.py"), grammar)
        assert result.snippets[0].lines == ["a = 1\x0cb = 2", "c\u2028d"]
