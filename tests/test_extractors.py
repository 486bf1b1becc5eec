"""Tests for extension based text extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from localsearch.ingestion.extractors import FileType, detect_file_type, extract_text
from localsearch.models import ExtractionStatus


class TestDetectFileType:
    """Test detect_file_type function."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.xml", FileType.XML),
            ("a.xhtml", FileType.XML),
            ("a.pdf", FileType.PDF),
            ("a.XML", None),
            ("a.Pdf", None),
            ("a.txt", None),
            ("Makefile", None),
        ],
    )
    def test_detect(self, name: str, expected) -> None:
        assert detect_file_type(Path("/docs") / name) is expected


class TestExtractText:
    """Test extract_text function."""

    def test_xml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "a.xml"
        path.write_text("<r>the cat sat</r>")

        result = extract_text(path)

        assert result.status is ExtractionStatus.OK
        assert result.path == str(path)
        assert result.text == "the cat sat"

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("plain text")

        result = extract_text(path)

        assert result.status is ExtractionStatus.UNSUPPORTED
        assert result.text == ""

    def test_no_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "binary"
        path.write_bytes(b"\x00\x01")

        assert extract_text(path).status is ExtractionStatus.UNSUPPORTED

    def test_plain_pdf(self, make_pdf, tmp_path: Path) -> None:
        path = make_pdf(tmp_path / "plain.pdf")

        result = extract_text(path)

        assert result.status is ExtractionStatus.OK
        assert result.text == "the cat sat\n"

    def test_pdf_with_user_password(self, make_pdf, tmp_path: Path) -> None:
        path = make_pdf(tmp_path / "secret.pdf", owner_pw="owner", user_pw="user")

        result = extract_text(path)

        assert result.status is ExtractionStatus.ENCRYPTED
        assert result.text == ""

    def test_pdf_with_owner_password_only(self, make_pdf, tmp_path: Path) -> None:
        path = make_pdf(tmp_path / "owner-only.pdf", owner_pw="owner")

        result = extract_text(path)

        assert result.status is ExtractionStatus.ENCRYPTED
        assert result.text == ""

    def test_corrupt_pdf(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf at all")

        result = extract_text(path)

        assert result.status is ExtractionStatus.FAILED
        assert result.reason

    def test_unreadable_xml(self, tmp_path: Path) -> None:
        result = extract_text(tmp_path / "vanished.xml")

        assert result.status is ExtractionStatus.FAILED
