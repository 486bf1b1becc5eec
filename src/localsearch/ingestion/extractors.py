"""Dispatch from file extension to the matching text extractor."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from localsearch.ingestion.pdf_loader import EncryptedPDFError, load_pdf_text
from localsearch.ingestion.xml_loader import load_xml_text
from localsearch.models import ExtractionResult, ExtractionStatus
from localsearch.utils.files import file_extension

LOGGER = logging.getLogger(__name__)


class FileType(Enum):
    XML = "xml"
    PDF = "pdf"


# Case-sensitive on purpose: "notes.XML" is not indexed.
EXTENSIONS: Dict[str, FileType] = {
    "xml": FileType.XML,
    "xhtml": FileType.XML,
    "pdf": FileType.PDF,
}

_LOADERS: Dict[FileType, Callable[[Path], str]] = {
    FileType.XML: load_xml_text,
    FileType.PDF: load_pdf_text,
}


def detect_file_type(path: Path) -> Optional[FileType]:
    extension = file_extension(path)
    if extension is None:
        return None
    return EXTENSIONS.get(extension)


def extract_text(path: Path) -> ExtractionResult:
    """Extract plain text from one file.

    Never raises for problems with the file itself; the outcome is reported
    through the returned status instead.
    """
    key = str(path)
    file_type = detect_file_type(path)
    if file_type is None:
        LOGGER.debug("Ignoring non-indexable file %s", path)
        return ExtractionResult(key, ExtractionStatus.UNSUPPORTED, reason="unsupported type")

    try:
        text = _LOADERS[file_type](path)
    except EncryptedPDFError:
        LOGGER.warning("Skipping encrypted PDF %s", path)
        return ExtractionResult(key, ExtractionStatus.ENCRYPTED, reason="encrypted")
    except Exception as exc:
        LOGGER.warning("Failed to extract %s: %s", path, exc)
        return ExtractionResult(key, ExtractionStatus.FAILED, reason=str(exc))
    return ExtractionResult(key, ExtractionStatus.OK, text=text)
