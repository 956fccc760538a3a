"""Two-level deduplication for batches generated domain by domain.

Questions are first deduplicated within their own domain, then a global pass
removes cross-domain duplicates from the combined survivors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from detector import DuplicationContext, remove_duplicates
from detector.dedup import QuestionLike

UNKNOWN_DOMAIN = "Unknown"


@dataclass
class DomainDedupResult:
    unique: list[Any] = field(default_factory=list)
    removed_by_domain: dict[str, int] = field(default_factory=dict)
    global_removed: int = 0

    @property
    def duplicates_removed(self) -> int:
        return sum(self.removed_by_domain.values()) + self.global_removed


def _domain_of(question: QuestionLike, domain_key: str) -> str:
    if isinstance(question, Mapping):
        value = question.get(domain_key)
    else:
        value = getattr(question, domain_key, None)
    return str(value) if value else UNKNOWN_DOMAIN


def group_by_domain(
    questions: Sequence[QuestionLike], domain_key: str = "domain"
) -> dict[str, list[QuestionLike]]:
    """Partition questions by domain, keeping domains in order of first appearance."""
    groups: dict[str, list[QuestionLike]] = {}
    for question in questions:
        groups.setdefault(_domain_of(question, domain_key), []).append(question)
    return groups


def dedupe_by_domain(
    questions: Sequence[QuestionLike],
    context: DuplicationContext | None = None,
    domain_key: str = "domain",
) -> DomainDedupResult:
    result = DomainDedupResult()
    combined: list[Any] = []
    base_context = context if context is not None else DuplicationContext()

    # Each pass sees its own batch size, so a large overall batch does not
    # loosen the thresholds inside a small domain.
    for domain, members in group_by_domain(questions, domain_key).items():
        domain_result = remove_duplicates(
            members, base_context.with_batch_size(len(members))
        )
        result.removed_by_domain[domain] = domain_result.duplicates_removed
        combined.extend(domain_result.unique)
        if domain_result.duplicates_removed:
            logger.info(
                f"Domain {domain!r}: removed {domain_result.duplicates_removed} "
                f"duplicates, {len(domain_result.unique)} remaining"
            )

    global_context = base_context.with_batch_size(len(combined))
    global_result = remove_duplicates(combined, global_context)
    result.unique = global_result.unique
    result.global_removed = global_result.duplicates_removed

    if global_result.duplicates_removed:
        logger.info(
            f"Global deduplication: removed {global_result.duplicates_removed} "
            f"cross-domain duplicates, {len(result.unique)} remaining"
        )
    else:
        logger.info("Global deduplication: no cross-domain duplicates found")

    return result
