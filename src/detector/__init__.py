"""Lexical near-duplicate detection for generated exam questions."""

from detector.dedup import (
    DedupResult,
    extend_unique,
    question_text,
    remove_duplicates,
)
from detector.models import DuplicationContext, QuestionRecord
from detector.policy import DEFAULT_POLICY, ThresholdPolicy, ThresholdRule, Thresholds, are_similar
from detector.text import normalize_text

__all__ = [
    "DEFAULT_POLICY",
    "DedupResult",
    "DuplicationContext",
    "QuestionRecord",
    "ThresholdPolicy",
    "ThresholdRule",
    "Thresholds",
    "are_similar",
    "extend_unique",
    "normalize_text",
    "question_text",
    "remove_duplicates",
]
