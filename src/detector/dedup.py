"""Greedy, order-preserving removal of near-duplicate questions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from loguru import logger

from detector.models import DuplicationContext, QuestionRecord
from detector.policy import (
    DEFAULT_POLICY,
    LARGE_BATCH_SIZE,
    ThresholdPolicy,
    are_similar,
    large_batch_relaxation,
)
from detector.text import normalize_text

QuestionLike = Union[QuestionRecord, Mapping[str, Any]]


@dataclass
class DedupResult:
    """Outcome of one deduplication pass."""

    unique: list[Any] = field(default_factory=list)
    duplicates_removed: int = 0
    duplicate_indices: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.unique) + self.duplicates_removed

    @property
    def removal_rate(self) -> float:
        return self.duplicates_removed / self.total if self.total else 0.0


def question_text(question: QuestionLike) -> str:
    """Read the question text from a record or mapping; anything missing is ``""``."""
    if isinstance(question, Mapping):
        text = question.get("questionText", question.get("question_text"))
    else:
        text = getattr(question, "question_text", None)
    return str(text or "").strip()


def _matches_any(
    norm: str,
    accepted_norms: Sequence[str],
    context: DuplicationContext | None,
    policy: ThresholdPolicy,
) -> bool:
    return any(are_similar(norm, other, context, policy) for other in accepted_norms)


def remove_duplicates(
    questions: Sequence[QuestionLike],
    context: DuplicationContext | None = None,
    policy: ThresholdPolicy = DEFAULT_POLICY,
) -> DedupResult:
    """Keep each question only if it is not similar to any already kept one.

    The first occurrence wins and the relative order of kept questions is
    preserved. ``len(unique) + duplicates_removed == len(questions)`` always
    holds. Each question is compared against every kept question, so cost is
    quadratic in the batch size.
    """
    if context is not None and context.num_questions and context.num_questions > LARGE_BATCH_SIZE:
        logger.debug(
            f"Large question set ({context.num_questions}): relaxed thresholds by "
            f"{large_batch_relaxation(context.num_questions):.3f}"
        )

    result = DedupResult()
    accepted_norms: list[str] = []

    for idx, question in enumerate(questions):
        norm = normalize_text(question_text(question))
        if _matches_any(norm, accepted_norms, context, policy):
            result.duplicates_removed += 1
            result.duplicate_indices.append(idx)
            continue
        result.unique.append(question)
        accepted_norms.append(norm)

    return result


def extend_unique(
    accepted: Sequence[QuestionLike],
    candidates: Sequence[QuestionLike],
    context: DuplicationContext | None = None,
    limit: int | None = None,
    policy: ThresholdPolicy = DEFAULT_POLICY,
) -> tuple[list[Any], int]:
    """Append candidates that are not duplicates of anything accepted so far.

    Used to top up a partially filled batch. Stops taking candidates once
    *limit* questions are accepted. Returns the new accepted list (the input
    sequence is not modified) and the number of candidates rejected as
    duplicates.
    """
    kept = list(accepted)
    kept_norms = [normalize_text(question_text(q)) for q in kept]
    rejected = 0

    for candidate in candidates:
        if limit is not None and len(kept) >= limit:
            break
        norm = normalize_text(question_text(candidate))
        if _matches_any(norm, kept_norms, context, policy):
            rejected += 1
            continue
        kept.append(candidate)
        kept_norms.append(norm)

    return kept, rejected
