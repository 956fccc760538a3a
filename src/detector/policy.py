"""Adaptive thresholds and the voting rule that turns metrics into a verdict.

The thresholds are a policy table rather than hard-coded branches: each
:class:`ThresholdRule` pairs a predicate over the :class:`DuplicationContext`
with an adjustment vector. Rules are applied additively in table order and the
result is clamped into fixed bounds, however the adjustments stack up.

Lower thresholds mean stricter filtering (less overlap is needed to flag a
pair), higher thresholds mean looser filtering.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from detector.metrics import SimilarityScores, score_pair
from detector.models import DuplicationContext


@dataclass(frozen=True)
class Thresholds:
    """Per-metric decision thresholds (a score at or above the value votes "duplicate")."""

    jaccard: float
    lcs: float
    edit: float
    concept: float

    @classmethod
    def uniform(cls, value: float) -> Thresholds:
        return cls(value, value, value, value)

    def shifted(self, delta: Thresholds) -> Thresholds:
        return Thresholds(
            jaccard=self.jaccard + delta.jaccard,
            lcs=self.lcs + delta.lcs,
            edit=self.edit + delta.edit,
            concept=self.concept + delta.concept,
        )

    def clamped(self, lower: Thresholds, upper: Thresholds) -> Thresholds:
        return Thresholds(
            jaccard=max(lower.jaccard, min(upper.jaccard, self.jaccard)),
            lcs=max(lower.lcs, min(upper.lcs, self.lcs)),
            edit=max(lower.edit, min(upper.edit, self.edit)),
            concept=max(lower.concept, min(upper.concept, self.concept)),
        )


NO_CHANGE = Thresholds.uniform(0.0)


@dataclass(frozen=True)
class ThresholdRule:
    """A context predicate and the adjustment it contributes when it holds."""

    name: str
    applies: Callable[[DuplicationContext], bool]
    adjustment: Callable[[DuplicationContext], Thresholds]

    @classmethod
    def fixed(
        cls,
        name: str,
        applies: Callable[[DuplicationContext], bool],
        delta: Thresholds,
    ) -> ThresholdRule:
        return cls(name=name, applies=applies, adjustment=lambda _ctx: delta)


LARGE_BATCH_SIZE = 50
LARGE_BATCH_DIVISOR = 300.0
LARGE_BATCH_MAX_RELAX = 0.15


def _is_large_batch(ctx: DuplicationContext) -> bool:
    return bool(ctx.num_questions) and ctx.num_questions > LARGE_BATCH_SIZE


def large_batch_relaxation(num_questions: int) -> float:
    """Loosening applied to every threshold once a batch exceeds the large-batch size."""
    return min(LARGE_BATCH_MAX_RELAX, (num_questions - LARGE_BATCH_SIZE) / LARGE_BATCH_DIVISOR)


def _large_batch_adjustment(ctx: DuplicationContext) -> Thresholds:
    return Thresholds.uniform(large_batch_relaxation(ctx.num_questions))


DEFAULT_RULES: tuple[ThresholdRule, ...] = (
    ThresholdRule.fixed(
        "short_questions",
        lambda ctx: ctx.question_length == "short",
        Thresholds(jaccard=-0.15, lcs=-0.10, edit=-0.10, concept=-0.10),
    ),
    ThresholdRule.fixed(
        "long_questions",
        lambda ctx: ctx.question_length == "long",
        Thresholds.uniform(0.10),
    ),
    ThresholdRule.fixed(
        "easy_difficulty",
        lambda ctx: ctx.difficulty == "easy",
        Thresholds.uniform(-0.10),
    ),
    ThresholdRule.fixed(
        "hard_difficulty",
        lambda ctx: ctx.difficulty == "hard",
        Thresholds.uniform(0.05),
    ),
    ThresholdRule.fixed(
        "weak_model",
        lambda ctx: ctx.model_strength == "weak",
        Thresholds(jaccard=-0.15, lcs=-0.15, edit=-0.15, concept=-0.10),
    ),
    ThresholdRule.fixed(
        "strong_model",
        lambda ctx: ctx.model_strength == "strong",
        Thresholds.uniform(0.05),
    ),
    ThresholdRule("large_batch", _is_large_batch, _large_batch_adjustment),
)


def _default_high_risk(ctx: DuplicationContext) -> bool:
    return ctx.is_high_risk


@dataclass(frozen=True)
class ThresholdPolicy:
    """Base thresholds, adjustment table, clamp bounds and voting rule."""

    base: Thresholds = Thresholds(jaccard=0.60, lcs=0.70, edit=0.75, concept=0.50)
    rules: Sequence[ThresholdRule] = DEFAULT_RULES
    lower: Thresholds = Thresholds(jaccard=0.20, lcs=0.30, edit=0.40, concept=0.20)
    upper: Thresholds = Thresholds(jaccard=0.85, lcs=0.90, edit=0.95, concept=0.80)
    high_risk: Callable[[DuplicationContext], bool] = field(default=_default_high_risk)
    high_risk_votes: int = 1
    default_votes: int = 2

    def thresholds_for(self, context: DuplicationContext | None = None) -> Thresholds:
        thresholds = self.base
        if context is not None:
            for rule in self.rules:
                if rule.applies(context):
                    thresholds = thresholds.shifted(rule.adjustment(context))
        return thresholds.clamped(self.lower, self.upper)

    def required_votes(self, context: DuplicationContext | None = None) -> int:
        if context is not None and self.high_risk(context):
            return self.high_risk_votes
        return self.default_votes

    @staticmethod
    def votes(scores: SimilarityScores, thresholds: Thresholds) -> list[bool]:
        return [
            scores.jaccard >= thresholds.jaccard,
            scores.lcs >= thresholds.lcs,
            scores.edit >= thresholds.edit,
            scores.concept >= thresholds.concept,
        ]

    def is_duplicate(
        self, scores: SimilarityScores, context: DuplicationContext | None = None
    ) -> bool:
        matches = sum(self.votes(scores, self.thresholds_for(context)))
        return matches >= self.required_votes(context)


DEFAULT_POLICY = ThresholdPolicy()


def are_similar(
    a: str | None,
    b: str | None,
    context: DuplicationContext | None = None,
    policy: ThresholdPolicy = DEFAULT_POLICY,
) -> bool:
    """Decide whether two question texts are duplicates under *context*.

    Empty or missing text never matches anything, not even another empty text.
    Identical strings always match.
    """
    if not a or not b:
        return False
    if a == b:
        return True
    return policy.is_duplicate(score_pair(a, b), context)
