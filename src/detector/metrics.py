"""Pairwise lexical similarity metrics.

Every metric returns a ratio in ``[0.0, 1.0]``. They are symmetric in their
two arguments, so the order in which the deduplication driver compares a new
question against an accepted one does not matter.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rapidfuzz.distance import LCSseq, Levenshtein

from detector.text import extract_key_terms, normalize_text, tokenize


def jaccard(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """Token-set overlap: ``|A & B| / |A | B|``."""
    set_a = set(tokens_a)
    set_b = set(tokens_b)
    union = len(set_a | set_b) or 1
    return len(set_a & set_b) / union


def lcs_ratio(a: str, b: str) -> float:
    """Longest common character subsequence divided by the longer length."""
    if not a or not b:
        return 0.0
    return LCSseq.normalized_similarity(a, b)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    return Levenshtein.distance(a, b)


def edit_distance_ratio(a: str, b: str) -> float:
    """``1 - distance / max_len``; two empty strings score ``0.0``."""
    if not a and not b:
        return 0.0
    return Levenshtein.normalized_similarity(a, b)


def concept_similarity(a: str, b: str) -> float:
    """Jaccard over key terms. No key terms on either side is not a match."""
    terms_a = extract_key_terms(a)
    terms_b = extract_key_terms(b)
    union = terms_a | terms_b
    if not union:
        return 0.0
    return len(terms_a & terms_b) / len(union)


@dataclass(frozen=True)
class SimilarityScores:
    """The four similarity signals for one pair of question texts."""

    jaccard: float
    lcs: float
    edit: float
    concept: float


def score_pair(a: str, b: str) -> SimilarityScores:
    return SimilarityScores(
        jaccard=jaccard(tokenize(a), tokenize(b)),
        lcs=lcs_ratio(a, b),
        edit=edit_distance_ratio(normalize_text(a), normalize_text(b)),
        concept=concept_similarity(a, b),
    )
