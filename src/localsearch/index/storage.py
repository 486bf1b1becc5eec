"""SQLite persistence for the term index."""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from localsearch.models import Document, Index

LOGGER = logging.getLogger(__name__)

# Bump whenever the tables or tokenization change; older files get rebuilt.
FORMAT_VERSION = 1


class IndexLoadError(RuntimeError):
    """The persisted index is missing, corrupt or written in another format."""


class SQLiteIndexStore:
    """Saves and restores an Index as a single SQLite file.

    A save always writes the complete index to a sibling temporary file and
    then swaps it into place, so readers never see a half-written index.
    """

    def __init__(self, index_path: Path) -> None:
        self.index_path = Path(index_path)

    def exists(self) -> bool:
        return self.index_path.is_file()

    @contextmanager
    def _connect(self, path: Path) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(path)
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self, conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    @staticmethod
    def _create_schema(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE documents (
                id INTEGER PRIMARY KEY,
                path BLOB NOT NULL UNIQUE
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE terms (
                document_id INTEGER NOT NULL,
                term TEXT NOT NULL,
                count INTEGER NOT NULL,
                PRIMARY KEY (document_id, term),
                FOREIGN KEY(document_id) REFERENCES documents(id) ON DELETE CASCADE
            ) WITHOUT ROWID
            """
        )
        conn.execute(f"PRAGMA user_version = {FORMAT_VERSION}")

    def save(self, index: Index) -> None:
        """Write the whole index, replacing any previous file."""
        self.index_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.index_path.with_name(self.index_path.name + ".tmp")
        tmp_path.unlink(missing_ok=True)
        try:
            with self._connect(tmp_path) as conn:
                with self.transaction(conn):
                    self._create_schema(conn)
                    for doc_id, (path, document) in enumerate(index.items(), start=1):
                        # fsencode keeps undecodable path bytes intact.
                        conn.execute(
                            "INSERT INTO documents(id, path) VALUES (?, ?)",
                            (doc_id, sqlite3.Binary(os.fsencode(path))),
                        )
                        conn.executemany(
                            "INSERT INTO terms(document_id, term, count) VALUES (?, ?, ?)",
                            ((doc_id, term, count) for term, count in document.terms.items()),
                        )
            os.replace(tmp_path, self.index_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        LOGGER.info("Saved %d documents to %s", len(index), self.index_path)

    def load(self) -> Index:
        """Read the index back. Raises IndexLoadError when that isn't possible."""
        if not self.exists():
            raise IndexLoadError(f"Index file not found: {self.index_path}")
        try:
            with self._connect(self.index_path) as conn:
                (version,) = conn.execute("PRAGMA user_version").fetchone()
                if version != FORMAT_VERSION:
                    raise IndexLoadError(
                        f"Index format {version} in {self.index_path}, expected {FORMAT_VERSION}"
                    )
                index: Index = {}
                by_id = {}
                for doc_id, raw_path in conn.execute("SELECT id, path FROM documents"):
                    path = os.fsdecode(bytes(raw_path))
                    by_id[doc_id] = index[path] = Document(path=path)
                for doc_id, term, count in conn.execute(
                    "SELECT document_id, term, count FROM terms"
                ):
                    by_id[doc_id].terms[term] = count
        except sqlite3.Error as exc:
            raise IndexLoadError(f"Corrupt index file {self.index_path}: {exc}") from exc
        except KeyError as exc:
            raise IndexLoadError(f"Dangling term rows in {self.index_path}") from exc
        LOGGER.info("Loaded %d documents from %s", len(index), self.index_path)
        return index
