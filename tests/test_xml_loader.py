"""Tests for streaming XML text extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from localsearch.ingestion.xml_loader import READ_CHUNK_BYTES, load_xml_text


def _write(tmp_path: Path, content: str, name: str = "doc.xml") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadXmlText:
    """Test load_xml_text function."""

    def test_single_element(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "<r>the cat sat</r>")

        assert load_xml_text(path) == "the cat sat"

    def test_runs_joined_with_space(self, tmp_path: Path) -> None:
        """Text before, inside and after a child element are separate runs."""
        path = _write(tmp_path, "<a>one<b>two</b>three</a>")

        assert load_xml_text(path) == "one two three"

    def test_whitespace_only_runs_ignored(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "<a>\n  <b>x</b>\n  <c>y</c>\n</a>")

        assert load_xml_text(path) == "x y"

    def test_entities_resolved_within_run(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "<r>fish &amp; chips</r>")

        assert load_xml_text(path) == "fish & chips"

    def test_cdata_is_character_data(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "<r>a <![CDATA[cdata]]> b</r>")

        assert load_xml_text(path) == "a cdata b"

    def test_attributes_and_comments_skipped(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '<?xml version="1.0"?><r lang="en"><!-- note -->body</r>')

        assert load_xml_text(path) == "body"

    def test_xhtml_document(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            '<html xmlns="http://www.w3.org/1999/xhtml"><body><p>Hello</p></body></html>',
            name="page.xhtml",
        )

        assert load_xml_text(path) == "Hello"

    def test_text_spanning_read_chunks(self, tmp_path: Path) -> None:
        """Words split across read boundaries are not broken apart."""
        words = ["word"] * (READ_CHUNK_BYTES // 5 + 1000)
        path = _write(tmp_path, "<r>" + " ".join(words) + "</r>")

        assert load_xml_text(path).split() == words

    def test_malformed_markup_recovers(self, tmp_path: Path) -> None:
        """Errors are skipped and extraction continues."""
        path = _write(tmp_path, "<r>hello <b>world</r>")

        text = load_xml_text(path)

        assert "hello" in text
        assert "world" in text

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "")

        assert load_xml_text(path) == ""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_xml_text(tmp_path / "missing.xml")
