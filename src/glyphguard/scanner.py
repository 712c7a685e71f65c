"""
Per-character scanner.

Walks the NFC-normalized text once, left to right, and records every
character that belongs to one of the classification tables. Membership tests
are independent of each other: a character matching several tables is
counted (and highlighted) once per table.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field

from .models import HighlightSpan, SpanCategory
from .tables import (
    BIDI_CHARS,
    HOMOGLYPHS,
    INVISIBLE_CHARS,
    MULTI_SPACE_RE,
    NON_BREAKING_SPACES,
    SCRIPT_PATTERNS,
    SUSPICIOUS_PUNCTUATION,
    ZERO_WIDTH_CHARS,
    is_control_char,
    is_tag_char,
)

logger = logging.getLogger(__name__)

# Counters the scanner owns (the structural analyzers own the rest).
SCANNER_FIELDS: tuple[str, ...] = (
    "zero_width_chars",
    "invisible_chars",
    "homoglyphs",
    "mixed_scripts",
    "suspicious_punctuation",
    "bidi_marks",
    "non_breaking_spaces",
    "unusual_whitespace",
    "control_chars",
)


@dataclass
class ScanResult:
    """Counters and highlight spans for one normalized text."""
    text: str
    counts: dict[str, int] = field(default_factory=lambda: dict.fromkeys(SCANNER_FIELDS, 0))
    spans: list[HighlightSpan] = field(default_factory=list)

    def flag(self, counter: str, category: SpanCategory, offset: int, char: str) -> None:
        self.counts[counter] += 1
        self.spans.append(
            HighlightSpan(start=offset, end=offset + len(char), category=category, char=char)
        )


def normalize(text: str) -> str:
    """Return the canonical composition (NFC) of *text*."""
    return unicodedata.normalize("NFC", text)


def scan(text: str) -> ScanResult:
    """
    Classify every character of *text* after NFC normalization.

    Offsets in the returned spans index the normalized string, which is
    available as ``ScanResult.text``. Spans come out in ascending ``start``
    order because the walk is strictly left to right.
    """
    normalized = normalize(text)
    result = ScanResult(text=normalized)

    for offset, char in enumerate(normalized):
        if is_control_char(char):
            result.flag("control_chars", SpanCategory.INVISIBLE, offset, char)

        if is_tag_char(char):
            result.flag("invisible_chars", SpanCategory.INVISIBLE, offset, char)

        # Zero-width wins over the wider invisible set.
        if char in ZERO_WIDTH_CHARS:
            result.flag("zero_width_chars", SpanCategory.INVISIBLE, offset, char)
        elif char in INVISIBLE_CHARS:
            result.flag("invisible_chars", SpanCategory.INVISIBLE, offset, char)

        if char in HOMOGLYPHS:
            result.flag("homoglyphs", SpanCategory.HOMOGLYPH, offset, char)

        if char in SUSPICIOUS_PUNCTUATION:
            result.flag("suspicious_punctuation", SpanCategory.PUNCTUATION, offset, char)

        if char in BIDI_CHARS:
            result.flag("bidi_marks", SpanCategory.BIDI, offset, char)

        if char in NON_BREAKING_SPACES:
            result.flag("non_breaking_spaces", SpanCategory.SPACE, offset, char)

    result.counts["mixed_scripts"] = detect_mixed_scripts(normalized)
    result.counts["unusual_whitespace"] = count_unusual_whitespace(normalized)

    logger.debug(
        "Scanned %d character(s), %d span(s) flagged.", len(normalized), len(result.spans)
    )
    return result


def detect_mixed_scripts(text: str) -> int:
    """Return 1 if characters from two or more tracked scripts appear, else 0."""
    scripts_present = sum(1 for pattern in SCRIPT_PATTERNS.values() if pattern.search(text))
    return 1 if scripts_present > 1 else 0


def count_unusual_whitespace(text: str) -> int:
    """Count runs of two or more spaces plus every tab character."""
    return len(MULTI_SPACE_RE.findall(text)) + text.count("\t")
