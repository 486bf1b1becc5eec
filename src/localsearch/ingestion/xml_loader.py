"""Streaming XML character-data extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from lxml import etree

LOGGER = logging.getLogger(__name__)

READ_CHUNK_BYTES = 1 << 16


class _CharacterDataCollector:
    """lxml parser target keeping the text between markup events.

    lxml may split one run of character data over several ``data`` calls, so
    pieces are buffered until the next structural event closes the run.
    """

    def __init__(self) -> None:
        self.runs: List[str] = []
        self._pending: List[str] = []

    def _flush(self) -> None:
        if not self._pending:
            return
        run = "".join(self._pending)
        self._pending.clear()
        if run.strip():
            self.runs.append(run)

    def start(self, tag, attrib, nsmap=None) -> None:
        self._flush()

    def end(self, tag) -> None:
        self._flush()

    def data(self, data: str) -> None:
        self._pending.append(data)

    def comment(self, text) -> None:
        self._flush()

    def pi(self, target, data=None) -> None:
        self._flush()

    def text(self) -> str:
        self._flush()
        return " ".join(self.runs)

    def close(self) -> str:
        return self.text()


def load_xml_text(path: Path) -> str:
    """Concatenate every character-data run of an XML document, space separated.

    The parser runs in recovery mode: malformed markup is logged and skipped
    and extraction carries on with whatever follows it.
    """
    collector = _CharacterDataCollector()
    parser = etree.XMLParser(
        target=collector, recover=True, resolve_entities=False, no_network=True
    )
    with Path(path).open("rb") as handle:
        for chunk in iter(lambda: handle.read(READ_CHUNK_BYTES), b""):
            try:
                parser.feed(chunk)
            except etree.XMLSyntaxError as exc:
                LOGGER.warning("Skipping malformed XML in %s: %s", path, exc)
    try:
        parser.close()
    except etree.XMLSyntaxError as exc:
        LOGGER.warning("Skipping malformed XML in %s: %s", path, exc)
    for error in parser.error_log:
        LOGGER.warning("XML error in %s line %s: %s", path, error.line, error.message)
    return collector.text()
