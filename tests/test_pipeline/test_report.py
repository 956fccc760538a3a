import pytest
from loguru import logger

from examdedup.config import Settings
from pipeline.report import build_report, log_report


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def captured():
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="INFO", format="{level} | {message}")
    yield messages
    logger.remove(handler_id)


def test_report_clean_batch(settings):
    report = build_report(total=5, duplicates_removed=0, settings=settings)
    assert report.unique == 5
    assert report.requested == 5
    assert report.removal_rate == 0.0
    assert report.fulfillment_rate == 1.0
    assert report.high_duplicate_rate is False
    assert report.low_fulfillment is False
    assert report.is_partial is False
    assert report.shortfall == 0
    assert report.warning is None


def test_report_partial_batch_with_duplicates(settings):
    report = build_report(total=10, duplicates_removed=2, requested=10, settings=settings)
    assert report.unique == 8
    assert report.removal_rate == pytest.approx(0.2)
    assert report.fulfillment_rate == pytest.approx(0.8)
    assert report.shortfall == 2
    assert report.is_partial is True
    assert report.warning == "Generated 8 out of 10 requested questions. Removed 2 duplicate questions."


def test_report_short_without_duplicates(settings):
    report = build_report(total=7, duplicates_removed=0, requested=10, settings=settings)
    assert report.warning == (
        "Generated 7 out of 10 requested questions."
        " The AI response may have been truncated."
    )


def test_report_flags_high_duplicate_rate_and_low_fulfillment(settings):
    report = build_report(total=10, duplicates_removed=6, requested=10, settings=settings)
    assert report.removal_rate == pytest.approx(0.6)
    assert report.fulfillment_rate == pytest.approx(0.4)
    assert report.high_duplicate_rate is True
    assert report.low_fulfillment is True


def test_report_custom_limits():
    settings = Settings(_env_file=None, dedup_high_removal_rate=0.1)
    report = build_report(total=10, duplicates_removed=2, settings=settings)
    assert report.high_duplicate_rate is True


def test_report_empty_batch(settings):
    report = build_report(total=0, duplicates_removed=0, settings=settings)
    assert report.removal_rate == 0.0
    assert report.fulfillment_rate == 1.0


def test_log_report_no_duplicates(settings, captured):
    log_report(build_report(total=3, duplicates_removed=0, settings=settings))
    assert any("no duplicates found in 3 questions" in m for m in captured)


def test_log_report_warns_on_high_rate(settings, captured):
    log_report(build_report(total=10, duplicates_removed=6, settings=settings))
    warnings = [m for m in captured if m.startswith("WARNING")]
    assert any("High duplicate rate" in m for m in warnings)
    assert any("Low fulfillment" in m for m in warnings)
