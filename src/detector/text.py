"""Text normalization and tokenization shared by every similarity metric."""

from __future__ import annotations

import re
import unicodedata

# ASCII symbols stripped alongside the Unicode punctuation categories
_EXTRA_SYMBOLS = frozenset("$+<=>^`|~")

_WHITESPACE_RE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 3
MIN_KEY_TERM_LENGTH = 5


def _is_punctuation(ch: str) -> bool:
    return ch in _EXTRA_SYMBOLS or unicodedata.category(ch).startswith("P")


def normalize_text(text: str | None) -> str:
    """Lowercase, strip punctuation and collapse whitespace.

    >>> normalize_text("  What is   the capital of France?  ")
    'what is the capital of france'
    """
    if not text:
        return ""
    lowered = text.lower()
    stripped = "".join(ch for ch in lowered if not _is_punctuation(ch))
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def tokenize(text: str | None) -> list[str]:
    """Split normalized *text* into words, dropping tokens of two characters or fewer."""
    return [w for w in normalize_text(text).split(" ") if len(w) >= MIN_TOKEN_LENGTH]


def extract_key_terms(text: str | None) -> set[str]:
    """Return the set of longer words used as a proxy for the question's concepts."""
    return {w for w in normalize_text(text).split(" ") if len(w) >= MIN_KEY_TERM_LENGTH}
