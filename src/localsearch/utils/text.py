"""Text helpers: whitespace cleanup and the term tokenizer."""

from __future__ import annotations

from typing import Dict, Iterable, List

from nltk.stem.snowball import SnowballStemmer

_STEMMER = SnowballStemmer("english")

# Characters that extend a word besides alphanumerics.
WORD_JOINERS = frozenset("'-")


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())


def normalize_term(word: str) -> str:
    """Lowercase and stem a single word the way indexed terms are stored."""
    return _STEMMER.stem(word.lower())


def _add_term(counts: Dict[str, int], word: str) -> None:
    if word:
        term = normalize_term(word)
        counts[term] = counts.get(term, 0) + 1


def term_counts(text: str) -> Dict[str, int]:
    """Tokenize text into a term -> occurrence count map.

    Words are runs of alphanumerics, apostrophes and hyphens. Every other
    non-whitespace character is counted as a one-character term of its own,
    so punctuation shows up in the index. Existing index files depend on
    this, keep it.
    """
    counts: Dict[str, int] = {}
    current: List[str] = []
    for char in text:
        if char.isalnum() or char in WORD_JOINERS:
            current.append(char)
            continue
        _add_term(counts, "".join(current))
        current.clear()
        if not char.isspace():
            _add_term(counts, char)
    _add_term(counts, "".join(current))
    return counts
