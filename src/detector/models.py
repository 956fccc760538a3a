"""Question records and the context that parameterizes duplicate detection."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

QuestionLength = Literal["short", "medium", "long"]
ModelStrength = Literal["weak", "medium", "strong"]


class QuestionRecord(BaseModel):
    """A generated exam question.

    Only ``question_text`` takes part in similarity; every other field, including
    unknown extras such as ``domain``, is carried through untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    question_text: str = ""
    question_type: str = ""
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    correct_answer: str = ""
    rationale: str | None = None
    points: int | None = None
    order_index: int | None = None


class DuplicationContext(BaseModel):
    """Generation-batch policy input. Constructed once per batch, never mutated."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )

    question_length: QuestionLength | None = None
    difficulty: str | None = None
    model_strength: ModelStrength | None = None
    num_questions: int | None = None

    @property
    def is_high_risk(self) -> bool:
        """Contexts where generators repeat themselves the most."""
        return (
            self.question_length == "short"
            or self.difficulty == "easy"
            or self.model_strength == "weak"
        )

    def with_batch_size(self, num_questions: int) -> DuplicationContext:
        return self.model_copy(update={"num_questions": num_questions})
