"""
Deterministic text sanitizer.

``clean`` rewrites text through a fixed, ordered pipeline: normalize, delete
invisible and control characters, substitute look-alikes with ASCII, then
tidy whitespace and line endings. Each stage consumes the previous stage's
output, so the order below is part of the contract.

Every stage is a single ``str.translate`` call, one precompiled regex, or one
split/join, keeping the whole pipeline linear in the text length.

The result is idempotent: ``clean(clean(s)) == clean(s)``.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable

from .models import CleanResult
from .tables import (
    BIDI_CHARS,
    HOMOGLYPHS,
    INVISIBLE_CHARS,
    MULTI_SPACE_RE,
    NON_BREAKING_SPACES,
    STRIPPABLE_CONTROL_RE,
    SUSPICIOUS_PUNCTUATION,
    TAG_CHAR_RE,
    ZERO_WIDTH_CHARS,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Translation tables
# ---------------------------------------------------------------------------

_DELETE_ZERO_WIDTH = dict.fromkeys(map(ord, ZERO_WIDTH_CHARS))
_DELETE_INVISIBLE = dict.fromkeys(map(ord, INVISIBLE_CHARS))
_DELETE_BIDI = dict.fromkeys(map(ord, BIDI_CHARS))
_HOMOGLYPH_TO_LATIN = str.maketrans(dict(HOMOGLYPHS))
_PUNCTUATION_TO_ASCII = str.maketrans(dict(SUSPICIOUS_PUNCTUATION))
_SPACES_TO_ASCII = str.maketrans(dict.fromkeys(NON_BREAKING_SPACES, " "))


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def _nfc(text: str) -> str:
    return unicodedata.normalize("NFC", text)


def _normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _trim_line_ends(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


Stage = tuple[str, Callable[[str], str]]

CLEANING_STAGES: tuple[Stage, ...] = (
    ("unicode_normalized", _nfc),
    ("zero_width_removed", lambda text: text.translate(_DELETE_ZERO_WIDTH)),
    ("invisible_removed", lambda text: text.translate(_DELETE_INVISIBLE)),
    ("bidi_removed", lambda text: text.translate(_DELETE_BIDI)),
    ("control_chars_removed", lambda text: STRIPPABLE_CONTROL_RE.sub("", text)),
    ("tag_chars_removed", lambda text: TAG_CHAR_RE.sub("", text)),
    ("homoglyphs_replaced", lambda text: text.translate(_HOMOGLYPH_TO_LATIN)),
    ("punctuation_replaced", lambda text: text.translate(_PUNCTUATION_TO_ASCII)),
    ("special_spaces_replaced", lambda text: text.translate(_SPACES_TO_ASCII)),
    ("tabs_replaced", lambda text: text.replace("\t", " ")),
    ("spaces_collapsed", lambda text: MULTI_SPACE_RE.sub(" ", text)),
    ("line_endings_normalized", _normalize_line_endings),
    ("trailing_whitespace_trimmed", _trim_line_ends),
    ("text_trimmed", str.strip),
    # Deletions and substitutions can leave a base letter next to a combining
    # mark it was not composed with; recompose so a second pass is a no-op.
    ("unicode_recomposed", _nfc),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def clean(text: str) -> str:
    """Return the sanitized form of *text*. Empty input yields ``""``."""
    for _name, stage in CLEANING_STAGES:
        text = stage(text)
    return text


def clean_with_report(text: str) -> CleanResult:
    """
    Run the same pipeline as :func:`clean` and record which stages changed
    the text.
    """
    stages_applied: list[str] = []
    for name, stage in CLEANING_STAGES:
        cleaned = stage(text)
        if cleaned != text:
            stages_applied.append(name)
        text = cleaned

    if stages_applied:
        logger.debug("Cleaning applied: %s", ", ".join(stages_applied))

    return CleanResult(text=text, stages_applied=tuple(stages_applied))
