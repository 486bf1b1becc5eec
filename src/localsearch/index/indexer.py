"""Document indexing pipeline."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from localsearch.ingestion.extractors import extract_text
from localsearch.models import Document, ExtractionStatus, Index
from localsearch.utils.files import list_directory
from localsearch.utils.text import term_counts

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    unsupported: int = 0
    encrypted: int = 0
    failed: int = 0
    failed_directories: List[Path] = field(default_factory=list)

    def increment(self, status: ExtractionStatus) -> None:
        if status is ExtractionStatus.OK:
            self.indexed += 1
        elif status is ExtractionStatus.UNSUPPORTED:
            self.unsupported += 1
        elif status is ExtractionStatus.ENCRYPTED:
            self.encrypted += 1
        else:
            self.failed += 1

    def merge(self, other: IndexStats) -> None:
        self.indexed += other.indexed
        self.unsupported += other.unsupported
        self.encrypted += other.encrypted
        self.failed += other.failed
        self.failed_directories.extend(other.failed_directories)


def build_document(path: Path) -> Tuple[Document | None, ExtractionStatus]:
    """Extract and tokenize a single file."""
    result = extract_text(path)
    if not result.ok:
        return None, result.status
    return Document(path=result.path, terms=term_counts(result.text)), result.status


class Indexer:
    """Walks document trees and builds a fresh Index.

    Every subdirectory is handed to its own worker thread; a directory waits
    only for the subtrees it spawned and unions their partial indexes into
    its own. Workers share no mutable state, so the walk needs no locks.
    """

    def __init__(self, *, parallel: bool = True) -> None:
        self.parallel = parallel
        self.stats = IndexStats()

    def index(self, roots: Sequence[Path | str]) -> Index:
        """Index every supported file beneath the given root directories."""
        if not roots:
            raise ValueError("No document directories configured")

        directories = [Path(os.path.abspath(root)) for root in roots]
        LOGGER.info("Indexing %d document directories", len(directories))
        index, stats = self._walk_all(directories)
        self.stats = stats
        LOGGER.info(
            "Indexed %d documents (%d unsupported, %d encrypted, %d failed, %d unreadable directories)",
            stats.indexed,
            stats.unsupported,
            stats.encrypted,
            stats.failed,
            len(stats.failed_directories),
        )
        return index

    def _walk_all(self, directories: Sequence[Path]) -> Tuple[Index, IndexStats]:
        index: Index = {}
        stats = IndexStats()
        self._collect(directories, [], index, stats)
        return index, stats

    def walk(self, directory: Path) -> Tuple[Index, IndexStats]:
        """Index one directory tree. Raises OSError if ``directory`` can't be listed."""
        files, subdirectories = list_directory(directory)
        index: Index = {}
        stats = IndexStats()
        self._collect(subdirectories, files, index, stats)
        return index, stats

    def _collect(
        self,
        subdirectories: Sequence[Path],
        files: Sequence[Path],
        index: Index,
        stats: IndexStats,
    ) -> None:
        if not self.parallel or not subdirectories:
            self._index_files(files, index, stats)
            for subdirectory in subdirectories:
                self._merge_subtree(subdirectory, partial(self.walk, subdirectory), index, stats)
            return

        executor = ThreadPoolExecutor(
            max_workers=len(subdirectories), thread_name_prefix="localsearch-walk"
        )
        try:
            futures: List[Tuple[Path, Future]] = [
                (subdirectory, executor.submit(self.walk, subdirectory))
                for subdirectory in subdirectories
            ]
            self._index_files(files, index, stats)
            for subdirectory, future in futures:
                self._merge_subtree(subdirectory, future.result, index, stats)
        finally:
            executor.shutdown(wait=True)

    @staticmethod
    def _index_files(files: Sequence[Path], index: Index, stats: IndexStats) -> None:
        for path in files:
            document, status = build_document(path)
            stats.increment(status)
            if document is not None:
                index[document.path] = document

    @staticmethod
    def _merge_subtree(
        directory: Path,
        result: Callable[[], Tuple[Index, IndexStats]],
        index: Index,
        stats: IndexStats,
    ) -> None:
        try:
            sub_index, sub_stats = result()
        except OSError as exc:
            LOGGER.warning("Skipping unreadable directory %s: %s", directory, exc)
            stats.failed_directories.append(directory)
            return
        # Sibling subtrees hold disjoint paths, a plain union is enough.
        index.update(sub_index)
        stats.merge(sub_stats)
