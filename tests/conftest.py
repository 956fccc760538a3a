import pytest

from examdedup.config import get_settings


@pytest.fixture
def unrelated_questions() -> list[dict]:
    """Three questions on cardiology, geology and literature."""
    return [
        {"questionText": "Which chamber of the heart pumps oxygenated blood to the body?",
         "questionType": "multiple_choice", "correctAnswer": "B", "domain": "Cardiology"},
        {"questionText": "What type of rock forms from cooled magma?",
         "questionType": "multiple_choice", "correctAnswer": "A", "domain": "Geology"},
        {"questionText": "Who wrote the novel Pride and Prejudice?",
         "questionType": "multiple_choice", "correctAnswer": "C", "domain": "Literature"},
    ]


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
