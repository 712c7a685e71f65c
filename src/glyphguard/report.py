"""
Human-readable reporting on top of DetectionResult.

Turns raw counters into findings with a threat level, description and
recommendation, grades the overall noise score, and names individual
flagged characters for display.
"""

from __future__ import annotations

import unicodedata
from typing import NamedTuple

from .models import DetectionResult, Finding, ThreatLevel
from .tables import INVISIBLE_CLASS, TAG_CHAR_RE, describe_table_entry


class _CategoryInfo(NamedTuple):
    threat_level: ThreatLevel
    description: str
    recommendation: str


_REMOVE = "Run the cleaner to remove them before reusing the text."
_REPLACE = "Run the cleaner to replace them with their ASCII equivalents."

CATEGORY_INFO: dict[str, _CategoryInfo] = {
    "zero_width_chars": _CategoryInfo(
        ThreatLevel.CRITICAL, "Zero-width characters, often used for tracking or watermarking", _REMOVE,
    ),
    "invisible_chars": _CategoryInfo(
        ThreatLevel.CRITICAL, "Hidden formatting characters such as soft hyphens and variation selectors", _REMOVE,
    ),
    "homoglyphs": _CategoryInfo(
        ThreatLevel.WARNING, "Look-alike letters from Cyrillic or Greek posing as Latin", _REPLACE,
    ),
    "mixed_scripts": _CategoryInfo(
        ThreatLevel.WARNING, "Text mixes two or more writing systems",
        "Check whether the non-Latin letters are intentional.",
    ),
    "suspicious_punctuation": _CategoryInfo(
        ThreatLevel.INFO, "Typographic quotes, dashes or ellipses", _REPLACE,
    ),
    "bidi_marks": _CategoryInfo(
        ThreatLevel.CRITICAL, "Bidirectional control characters that can reorder displayed text", _REMOVE,
    ),
    "non_breaking_spaces": _CategoryInfo(
        ThreatLevel.INFO, "Non-breaking or narrow space characters", _REPLACE,
    ),
    "unusual_whitespace": _CategoryInfo(
        ThreatLevel.INFO, "Repeated spaces or tab characters",
        "Run the cleaner to collapse whitespace.",
    ),
    "control_chars": _CategoryInfo(
        ThreatLevel.INFO, "C0/C1 control characters (line breaks included)",
        "Run the cleaner to drop every control character except newline, carriage return and tab.",
    ),
    "unmatched_bidi": _CategoryInfo(
        ThreatLevel.CRITICAL, "Bidi embeddings or isolates without a matching terminator", _REMOVE,
    ),
    "zwj_chains": _CategoryInfo(
        ThreatLevel.WARNING, "Chains of zero-width joiners", _REMOVE,
    ),
    "repeating_invisible": _CategoryInfo(
        ThreatLevel.CRITICAL, "The same invisible character repeated back to back", _REMOVE,
    ),
    "mixed_directionality": _CategoryInfo(
        ThreatLevel.WARNING, "Lines mixing left-to-right and right-to-left characters",
        "Check whether the right-to-left text on these lines is intentional.",
    ),
    "encoded_data": _CategoryInfo(
        ThreatLevel.WARNING, "Runs that look like Base64 or hex encoded data",
        "Decode and inspect the runs before trusting the text.",
    ),
}

# Invisible-character findings stay at WARNING until they reach this count.
_INVISIBLE_ESCALATION_COUNT = 5
_ESCALATING_CATEGORIES = frozenset({"zero_width_chars", "invisible_chars"})

_THREAT_SORT_ORDER = {
    ThreatLevel.CRITICAL: 0,
    ThreatLevel.WARNING: 1,
    ThreatLevel.INFO: 2,
}

# Noise score thresholds (percent).
HIGH_NOISE_THRESHOLD = 10.0
MODERATE_NOISE_THRESHOLD = 5.0

VISIBLE_PLACEHOLDER = "\u2423"  # open box


def build_findings(result: DetectionResult) -> list[Finding]:
    """
    Return one Finding per non-zero category, sorted critical first.

    The sort is stable, so categories with the same threat level keep their
    reporting order.
    """
    findings: list[Finding] = []

    for name, count in result.category_counts().items():
        if not count:
            continue
        info = CATEGORY_INFO[name]
        threat = info.threat_level
        if name in _ESCALATING_CATEGORIES and count < _INVISIBLE_ESCALATION_COUNT:
            threat = ThreatLevel.WARNING
        findings.append(Finding(
            threat_level=threat,
            finding_type=name,
            count=count,
            description=info.description,
            recommendation=info.recommendation,
        ))

    findings.sort(key=lambda f: _THREAT_SORT_ORDER.get(f.threat_level, 99))
    return findings


def assess_noise(score: float) -> tuple[ThreatLevel, str]:
    """Grade a noise score into a threat level and a one-line verdict."""
    if score > HIGH_NOISE_THRESHOLD:
        return ThreatLevel.CRITICAL, "High suspicion of watermarking or obfuscation"
    if score > MODERATE_NOISE_THRESHOLD:
        return ThreatLevel.WARNING, "Moderate watermark presence"
    return ThreatLevel.INFO, "Clean or minimal obfuscation"


def describe_char(char: str) -> str:
    """Return ``U+XXXX Name`` for a single character."""
    name = describe_table_entry(char)
    if name is None:
        name = unicodedata.name(char, "").title() or f"<{unicodedata.category(char)}>"
    return f"U+{ord(char):04X} {name}"


def make_visible(text: str) -> str:
    """Replace invisible, bidi and tag characters with a visible placeholder."""
    visible = "".join(VISIBLE_PLACEHOLDER if char in INVISIBLE_CLASS else char for char in text)
    return TAG_CHAR_RE.sub(VISIBLE_PLACEHOLDER, visible)
