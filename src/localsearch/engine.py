"""Entry points used by front-ends: build, load, save and query an index."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from localsearch.index.indexer import Indexer
from localsearch.index.search import rank_documents
from localsearch.index.storage import IndexLoadError, SQLiteIndexStore
from localsearch.models import Index

LOGGER = logging.getLogger(__name__)


def reindex(roots: Sequence[Path | str], *, parallel: bool = True) -> Index:
    """Build a fresh index from scratch, ignoring anything persisted."""
    return Indexer(parallel=parallel).index(roots)


def save_index(index: Index, index_path: Path) -> None:
    """Persist ``index``. Errors propagate; the in-memory index stays usable."""
    SQLiteIndexStore(index_path).save(index)


def load_index(index_path: Path) -> Index:
    return SQLiteIndexStore(index_path).load()


def build_or_load_index(
    roots: Sequence[Path | str], index_path: Path, *, parallel: bool = True
) -> Index:
    """Load the persisted index, or rebuild and save it when there is none.

    An unreadable index file triggers a rebuild rather than an empty result.
    """
    store = SQLiteIndexStore(index_path)
    if store.exists():
        try:
            return store.load()
        except IndexLoadError as exc:
            LOGGER.warning("%s; rebuilding index", exc)

    index = reindex(roots, parallel=parallel)
    try:
        store.save(index)
    except Exception as exc:
        LOGGER.error("Failed to save index to %s: %s", index_path, exc)
    return index


def query(index: Index, query_terms: Sequence[str]) -> List[str]:
    """Rank document paths for raw query terms, best match first."""
    return rank_documents(index, query_terms)
