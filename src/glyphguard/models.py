"""
Pydantic models for all glyphguard data structures.

All data structures are defined here for single-source-of-truth. Every model
is frozen: results are built fresh per call and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# --- Enums ---

class SpanCategory(str, Enum):
    INVISIBLE = "invisible"
    HOMOGLYPH = "homoglyph"
    PUNCTUATION = "punctuation"
    SPACE = "space"
    BIDI = "bidi"


class ThreatLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# --- Detection ---

class HighlightSpan(BaseModel):
    """
    One flagged character.

    Offsets index the NFC-normalized text that was scanned, not the raw
    input handed to ``detect``.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    category: SpanCategory
    char: str


class DetectionResult(BaseModel):
    """Aggregate result of a single ``detect`` call."""
    model_config = ConfigDict(frozen=True)

    zero_width_chars: int = 0
    invisible_chars: int = 0
    homoglyphs: int = 0
    mixed_scripts: int = Field(default=0, ge=0, le=1)
    suspicious_punctuation: int = 0
    bidi_marks: int = 0
    non_breaking_spaces: int = 0
    unusual_whitespace: int = 0
    control_chars: int = 0
    unmatched_bidi: int = 0
    zwj_chains: int = 0
    repeating_invisible: int = 0
    mixed_directionality: int = 0
    encoded_data: int = 0
    total_issues: int = 0
    noise_score: float = Field(default=0.0, ge=0, le=100)
    max_line_density: float = Field(default=0.0, ge=0, le=100)
    highlighted_positions: tuple[HighlightSpan, ...] = ()

    def category_counts(self) -> dict[str, int]:
        """Return the per-category counters keyed by field name."""
        return {name: getattr(self, name) for name in CATEGORY_FIELDS}


# Counter fields in reporting order; total_issues is always their sum.
CATEGORY_FIELDS: tuple[str, ...] = (
    "zero_width_chars",
    "invisible_chars",
    "homoglyphs",
    "mixed_scripts",
    "suspicious_punctuation",
    "bidi_marks",
    "non_breaking_spaces",
    "unusual_whitespace",
    "control_chars",
    "unmatched_bidi",
    "zwj_chains",
    "repeating_invisible",
    "mixed_directionality",
    "encoded_data",
)


# --- Reporting ---

class Finding(BaseModel):
    """A human-readable summary of one non-zero detection category."""
    model_config = ConfigDict(frozen=True)

    threat_level: ThreatLevel
    finding_type: str  # one of CATEGORY_FIELDS
    count: int = Field(ge=1)
    description: str
    recommendation: str


# --- Cleaning ---

# Plain dataclass: cleaned text may carry lone surrogates, which pydantic's
# str validation rejects.
@dataclass(frozen=True)
class CleanResult:
    """Cleaned text plus the names of the pipeline stages that changed it."""
    text: str
    stages_applied: tuple[str, ...] = ()
