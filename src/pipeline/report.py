"""Summaries of a deduplication pass for logs and client-facing warnings."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from examdedup.config import Settings, get_settings


@dataclass
class DedupReport:
    total: int
    unique: int
    duplicates_removed: int
    requested: int
    removal_rate: float
    fulfillment_rate: float
    high_duplicate_rate: bool
    low_fulfillment: bool
    warning: str | None = None

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - self.unique)

    @property
    def is_partial(self) -> bool:
        return self.unique < self.requested


def build_report(
    total: int,
    duplicates_removed: int,
    requested: int | None = None,
    settings: Settings | None = None,
) -> DedupReport:
    """Derive removal and fulfillment rates for a batch of *total* questions.

    *requested* is how many questions the caller asked for; it defaults to
    *total*.
    """
    settings = settings or get_settings()
    unique = total - duplicates_removed
    requested = requested if requested and requested > 0 else total

    removal_rate = duplicates_removed / total if total else 0.0
    fulfillment_rate = unique / requested if requested else 1.0

    warning = None
    if unique < requested:
        warning = f"Generated {unique} out of {requested} requested questions."
        if duplicates_removed:
            warning += f" Removed {duplicates_removed} duplicate questions."
        else:
            warning += " The AI response may have been truncated."

    return DedupReport(
        total=total,
        unique=unique,
        duplicates_removed=duplicates_removed,
        requested=requested,
        removal_rate=removal_rate,
        fulfillment_rate=fulfillment_rate,
        high_duplicate_rate=removal_rate > settings.dedup_high_removal_rate,
        low_fulfillment=(
            fulfillment_rate < settings.dedup_low_fulfillment_rate
            and removal_rate > settings.dedup_low_fulfillment_removal_rate
        ),
        warning=warning,
    )


def log_report(report: DedupReport) -> None:
    if not report.duplicates_removed:
        logger.info(f"Deduplication: no duplicates found in {report.total} questions")
        return

    logger.info(
        f"Deduplication: removed {report.duplicates_removed} duplicates from "
        f"{report.total} questions (removal rate {report.removal_rate:.1%})"
    )
    if report.high_duplicate_rate:
        logger.warning(
            f"High duplicate rate ({report.removal_rate:.1%}): "
            "the generator may be producing overly similar questions"
        )
    if report.low_fulfillment:
        logger.warning(
            f"Low fulfillment: got {report.unique}/{report.requested} questions "
            f"({report.fulfillment_rate:.1%}); consider regenerating with more specific prompts"
        )
