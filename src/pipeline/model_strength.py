"""Classify generator models by how prone they are to repeating themselves."""

from __future__ import annotations

from collections.abc import Sequence

from examdedup.config import get_settings
from detector.models import ModelStrength


def get_model_strength(
    model: str | None,
    strong_models: Sequence[str] | None = None,
    medium_models: Sequence[str] | None = None,
) -> ModelStrength:
    """Map a model id onto ``strong``, ``medium`` or ``weak``.

    Ids are matched by substring so provider prefixes and suffixes still match.
    Unknown or missing models are treated as ``weak``.
    """
    settings = get_settings()
    if strong_models is None:
        strong_models = settings.strong_models
    if medium_models is None:
        medium_models = settings.medium_models

    name = model or ""
    if any(m in name for m in strong_models):
        return "strong"
    if any(m in name for m in medium_models):
        return "medium"
    return "weak"
