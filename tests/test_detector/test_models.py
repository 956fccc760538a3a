import pytest
from pydantic import ValidationError

from detector.models import DuplicationContext, QuestionRecord


def test_question_record_accepts_camel_case():
    q = QuestionRecord.model_validate({
        "questionText": "What is osmosis?",
        "questionType": "multiple_choice",
        "optionA": "Diffusion of water",
        "correctAnswer": "A",
        "orderIndex": 3,
    })
    assert q.question_text == "What is osmosis?"
    assert q.option_a == "Diffusion of water"
    assert q.option_b is None
    assert q.order_index == 3


def test_question_record_accepts_snake_case():
    q = QuestionRecord(question_text="What is osmosis?", correct_answer="B")
    assert q.question_text == "What is osmosis?"
    assert q.correct_answer == "B"


def test_question_record_keeps_extra_fields():
    q = QuestionRecord.model_validate({"questionText": "What is osmosis?", "domain": "Biology"})
    assert q.domain == "Biology"
    dumped = q.model_dump(by_alias=True)
    assert dumped["questionText"] == "What is osmosis?"
    assert dumped["domain"] == "Biology"


def test_question_record_missing_text_defaults_empty():
    assert QuestionRecord().question_text == ""


def test_context_defaults():
    ctx = DuplicationContext()
    assert ctx.question_length is None
    assert ctx.difficulty is None
    assert ctx.model_strength is None
    assert ctx.num_questions is None
    assert ctx.is_high_risk is False


def test_context_accepts_camel_case():
    ctx = DuplicationContext.model_validate(
        {"questionLength": "short", "modelStrength": "weak", "numQuestions": 10}
    )
    assert ctx.question_length == "short"
    assert ctx.model_strength == "weak"
    assert ctx.num_questions == 10


@pytest.mark.parametrize(
    "fields",
    [
        {"question_length": "short"},
        {"difficulty": "easy"},
        {"model_strength": "weak"},
    ],
)
def test_context_high_risk(fields):
    assert DuplicationContext(**fields).is_high_risk is True


def test_context_hard_long_strong_is_not_high_risk():
    ctx = DuplicationContext(question_length="long", difficulty="hard", model_strength="strong")
    assert ctx.is_high_risk is False


def test_context_rejects_unknown_length():
    with pytest.raises(ValidationError):
        DuplicationContext(question_length="tiny")


def test_context_rejects_unknown_strength():
    with pytest.raises(ValidationError):
        DuplicationContext(model_strength="godlike")


def test_context_is_frozen():
    ctx = DuplicationContext(difficulty="easy")
    with pytest.raises(ValidationError):
        ctx.difficulty = "hard"


def test_with_batch_size_returns_copy():
    ctx = DuplicationContext(difficulty="easy", num_questions=10)
    bigger = ctx.with_batch_size(120)
    assert bigger.num_questions == 120
    assert bigger.difficulty == "easy"
    assert ctx.num_questions == 10
