"""PDF text extraction.

Uses PyMuPDF (fitz) for fast PDF text extraction.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import fitz  # PyMuPDF

from localsearch.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)


class EncryptedPDFError(Exception):
    """Raised for PDFs that report themselves encrypted. They are never decrypted."""


def _is_encrypted(doc: fitz.Document) -> bool:
    # is_encrypted drops to False once an empty user password authenticates;
    # the metadata entry still names the encryption method in that case.
    metadata = doc.metadata or {}
    return bool(doc.is_encrypted or doc.needs_pass or metadata.get("encryption"))


def iter_text_parts(doc: fitz.Document, path: Path) -> Iterator[str]:
    """Yield text content from an open PDF page by page."""
    for index in range(len(doc)):
        try:
            page = doc[index]
            text = page.get_text() or ""
        except Exception as exc:
            LOGGER.warning("Failed to read page %s in %s: %s", index, path, exc)
            continue
        normalized = normalize_whitespace(text.splitlines())
        if normalized:
            yield normalized + "\n"


def load_pdf_text(path: Path) -> str:
    """Return the text of every page of a PDF, concatenated in page order.

    Raises EncryptedPDFError for encrypted documents; errors opening the
    file are left to the caller.
    """
    doc = fitz.open(path)
    try:
        if _is_encrypted(doc):
            raise EncryptedPDFError(f"{path} is encrypted")
        return "".join(iter_text_parts(doc, path))
    finally:
        doc.close()
