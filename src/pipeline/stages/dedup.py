"""Dedup stage: drop near-duplicate questions from a generated batch."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from loguru import logger
from pydantic import ValidationError

from examdedup.config import get_settings
from detector import DuplicationContext, QuestionRecord, extend_unique, remove_duplicates
from pipeline.base import PipelineStage, QuestionBatch, StageResult
from pipeline.domains import dedupe_by_domain
from pipeline.model_strength import get_model_strength
from pipeline.report import build_report, log_report

T = TypeVar("T")


class DeduplicationStage(PipelineStage):
    """Filter near-duplicate questions out of LLM output.

    Configuration keys (passed via *config* dict):

    * ``question_length`` -- ``short``, ``medium`` or ``long``.
    * ``difficulty`` -- free-form; only ``easy`` and ``hard`` change thresholds.
    * ``model_strength`` -- ``weak``, ``medium`` or ``strong``. When absent and
      ``model`` is given, the strength is derived from the model id.
    * ``num_questions`` -- batch size used by the policy (default: the number
      of questions passed in plus any ``accepted``).
    * ``requested`` -- how many questions the caller asked for, for the report.
    * ``by_domain`` -- deduplicate per ``domain_key`` first, then globally.
    * ``domain_key`` -- record field naming the domain (default ``"domain"``).
    * ``accepted`` -- questions already kept from an earlier batch. The input is
      then a top-up: candidates are checked against everything kept so far
      and only the newly accepted ones are returned. ``requested`` caps the
      combined total. Takes precedence over ``by_domain``.
    """

    stage_name = "dedup"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    async def validate_input(self, input_data: QuestionBatch) -> bool:
        """Input must be a non-empty list of question dicts or records."""
        if not isinstance(input_data, list) or len(input_data) == 0:
            return False
        return all(isinstance(q, (Mapping, QuestionRecord)) for q in input_data)

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    @staticmethod
    def build_context(config: dict, batch_size: int) -> DuplicationContext:
        """Build the duplication context from stage config.

        Raises ``ValidationError`` for unknown length or strength values.
        """
        model_strength = config.get("model_strength")
        if model_strength is None and config.get("model"):
            model_strength = get_model_strength(config["model"])

        return DuplicationContext(
            question_length=config.get("question_length"),
            difficulty=config.get("difficulty"),
            model_strength=model_strength,
            num_questions=config.get("num_questions") or batch_size,
        )

    # ------------------------------------------------------------------
    # Main processing
    # ------------------------------------------------------------------

    async def process(self, input_data: QuestionBatch, config: dict[str, Any]) -> StageResult:
        """Deduplicate *input_data* and report what was removed."""
        if not await self.validate_input(input_data):
            return StageResult(
                success=False,
                errors=["input must be a non-empty list of questions"],
            )

        accepted = config.get("accepted")
        if accepted is not None and not (
            isinstance(accepted, list)
            and all(isinstance(q, (Mapping, QuestionRecord)) for q in accepted)
        ):
            return StageResult(success=False, errors=["accepted must be a list of questions"])

        try:
            context = self.build_context(config, len(input_data) + len(accepted or []))
        except ValidationError as exc:
            logger.warning(f"Invalid deduplication config: {exc}")
            return StageResult(
                success=False,
                errors=[f"invalid config: {err['loc'][0]}: {err['msg']}" for err in exc.errors()],
            )

        offload = len(input_data) >= get_settings().dedup_offload_min_batch
        if offload:
            logger.debug(f"Offloading deduplication of {len(input_data)} questions to a worker thread")

        stats: dict[str, Any] = {}

        if accepted is not None:
            limit = config.get("requested") or None
            kept, rejected = await self._run(
                offload, extend_unique, accepted, input_data, context, limit
            )
            unique = kept[len(accepted):]
            stats["accepted_before"] = len(accepted)
            stats["skipped_over_limit"] = len(input_data) - len(unique) - rejected
            total = len(kept) + rejected
            removed = rejected
        elif config.get("by_domain", False):
            domain_key = config.get("domain_key", "domain")
            result = await self._run(offload, dedupe_by_domain, input_data, context, domain_key)
            unique = result.unique
            stats["removed_by_domain"] = dict(result.removed_by_domain)
            stats["global_removed"] = result.global_removed
            total, removed = len(input_data), result.duplicates_removed
        else:
            result = await self._run(offload, remove_duplicates, input_data, context)
            unique = result.unique
            stats["duplicate_indices"] = list(result.duplicate_indices)
            total, removed = len(input_data), result.duplicates_removed

        report = build_report(
            total=total,
            duplicates_removed=removed,
            requested=config.get("requested"),
        )
        log_report(report)

        stats.update(
            {
                "total": report.total,
                "unique": report.unique,
                "duplicates_removed": report.duplicates_removed,
                "requested": report.requested,
                "shortfall": report.shortfall,
                "removal_rate": report.removal_rate,
                "fulfillment_rate": report.fulfillment_rate,
                "high_duplicate_rate": report.high_duplicate_rate,
                "low_fulfillment": report.low_fulfillment,
                "is_partial": report.is_partial,
                "warning": report.warning,
                "context": context.model_dump(),
            }
        )

        return StageResult(success=True, data=list(unique), stats=stats)

    @staticmethod
    async def _run(offload: bool, func: Callable[..., T], *args: Any) -> T:
        if offload:
            return await asyncio.to_thread(func, *args)
        return func(*args)
