"""TF-IDF ranking over the in-memory index."""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np

from localsearch.models import Index
from localsearch.utils.text import normalize_term


def tfidf_scores(index: Index, terms: Sequence[str]) -> Dict[str, float]:
    """Score every document against raw (unstemmed) query terms.

    score(d) = sum over t of count(t, d) / total(d) * log2(N / df(t))
    Terms found in no document contribute nothing.
    """
    paths = list(index)
    if not paths:
        return {}
    documents = [index[path] for path in paths]
    totals = np.array([doc.total_terms for doc in documents], dtype=np.float64)
    scores = np.zeros(len(paths), dtype=np.float64)

    for raw in terms:
        term = normalize_term(raw)
        counts = np.array([doc.terms.get(term, 0) for doc in documents], dtype=np.float64)
        present = counts > 0
        doc_freq = int(np.count_nonzero(present))
        if doc_freq == 0:
            continue
        idf = np.log2(len(paths) / doc_freq)
        tf = np.divide(counts, totals, out=np.zeros_like(counts), where=present)
        scores += tf * idf

    return dict(zip(paths, scores.tolist()))


def rank_documents(index: Index, terms: Sequence[str]) -> List[str]:
    """Return document paths by descending TF-IDF score, dropping zero scores."""
    scores = tfidf_scores(index, terms)
    if not scores:
        return []
    paths = list(scores)
    values = np.fromiter(scores.values(), dtype=np.float64, count=len(paths))
    # NaN sorts last under argsort, the ordering stays total.
    order = np.argsort(-values, kind="stable")
    return [paths[i] for i in order if values[i] != 0.0 and not np.isnan(values[i])]


class Searcher:
    """High-level API to query a loaded index."""

    def __init__(self, index: Index) -> None:
        self.index = index

    def search(self, query: str, *, limit: int | None = None) -> List[str]:
        results = rank_documents(self.index, query.split())
        return results if limit is None else results[:limit]
