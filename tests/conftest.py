"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import fitz
import pytest


@pytest.fixture
def make_pdf():
    """Write a one-page PDF, optionally encrypted with AES-256."""

    def _make_pdf(path: Path, text: str = "the cat sat", *, user_pw=None, owner_pw=None) -> Path:
        doc = fitz.open()
        page = doc.new_page()
        page.insert_text((72, 72), text)
        if owner_pw is None and user_pw is None:
            doc.save(path)
        else:
            doc.save(
                path,
                encryption=fitz.PDF_ENCRYPT_AES_256,
                owner_pw=owner_pw or "",
                user_pw=user_pw or "",
            )
        doc.close()
        return path

    return _make_pdf
