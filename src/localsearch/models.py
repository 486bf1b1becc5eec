"""Core local search data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


@dataclass(slots=True)
class Document:
    """An indexed file and the counts of its normalized terms."""

    path: str
    terms: Dict[str, int] = field(default_factory=dict)

    @property
    def total_terms(self) -> int:
        return sum(self.terms.values())


# Absolute path -> document. Rebuilt wholesale, never merged into.
Index = Dict[str, Document]


class ExtractionStatus(str, Enum):
    OK = "ok"
    UNSUPPORTED = "unsupported"
    ENCRYPTED = "encrypted"
    FAILED = "failed"


@dataclass(slots=True)
class ExtractionResult:
    """Outcome of pulling plain text out of a single file."""

    path: str
    status: ExtractionStatus
    text: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.OK
