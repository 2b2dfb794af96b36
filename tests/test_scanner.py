"""Tests for write block discovery."""

import pytest

from conftest import WRITE_END, write_start
from snipsync.config import Features
from snipsync.errors import MalformedConfig
from snipsync.target.scanner import WriteBlock, scan_write_blocks


class TestScanWriteBlocks:
    def test_finds_blocks(self, grammar, no_link):
        lines = [
            "# Title",
            write_start("a"),
            "old",
            WRITE_END,
            write_start("b"),
            WRITE_END,
        ]
        scan = scan_write_blocks(lines, grammar, no_link)
        assert scan.blocks == [
            WriteBlock(start=1, end=3, id="a", features=no_link),
            WriteBlock(start=4, end=5, id="b", features=no_link),
        ]
        assert scan.ids() == {"a", "b"}
        assert scan.unterminated == []

    def test_interior_slice(self, grammar):
        lines = [write_start("a"), "x", "y", WRITE_END]
        block = scan_write_blocks(lines, grammar).blocks[0]
        assert lines[block.interior] == ["x", "y"]

    def test_inline_override(self, grammar, no_link):
        lines = [write_start("a", '{"enable_source_link": true}'), WRITE_END]
        block = scan_write_blocks(lines, grammar, no_link).blocks[0]
        assert block.features == Features(enable_source_link=True)

    def test_second_start_abandons_first(self, grammar):
        lines = [write_start("a"), "x", write_start("b"), "y", WRITE_END]
        scan = scan_write_blocks(lines, grammar)
        assert [(b.id, b.start, b.end) for b in scan.blocks] == [("b", 2, 4)]
        assert scan.unterminated == [1]

    def test_stray_end_ignored(self, grammar):
        scan = scan_write_blocks([WRITE_END, "text"], grammar)
        assert scan.blocks == []

    def test_unterminated_at_eof(self, grammar):
        scan = scan_write_blocks(["intro", write_start("a"), "x"], grammar)
        assert scan.blocks == []
        assert scan.unterminated == [2]

    def test_malformed_payload_reports_location(self, grammar, tmp_path):
        lines = ["ok", write_start("a", '{"enable_source_link": tru}'), WRITE_END]
        with pytest.raises(MalformedConfig) as exc:
            scan_write_blocks(lines, grammar, path=tmp_path / "doc.md")
        assert exc.value.lineno == 2
        assert f"{tmp_path / 'doc.md'}:2" in str(exc.value)

    def test_bad_flag_type_reports_location(self, grammar):
        lines = [write_start("a", '{"enable_source_link": 1}'), WRITE_END]
        with pytest.raises(MalformedConfig) as exc:
            scan_write_blocks(lines, grammar)
        assert exc.value.lineno == 1
