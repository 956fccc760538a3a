from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from detector.dedup import QuestionLike

QuestionBatch = list[QuestionLike]


@dataclass
class StageResult:
    """Outcome of one stage run: surviving questions plus errors and stats."""
    success: bool
    data: QuestionBatch = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)


class PipelineStage(ABC):
    """A post-processing step over a batch of generated questions."""

    stage_name: str

    @abstractmethod
    async def process(self, input_data: QuestionBatch, config: dict[str, Any]) -> StageResult:
        """Filter or rewrite *input_data* and return the surviving questions."""
        ...

    @abstractmethod
    async def validate_input(self, input_data: QuestionBatch) -> bool:
        """Return False when the batch is empty or holds non-question items."""
        ...
