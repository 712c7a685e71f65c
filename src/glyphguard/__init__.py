"""
glyphguard: detect and remove Unicode-based obfuscation in text.

All processing is local and pure: ``detect`` and ``clean`` take a string and
return a fresh result, with no shared state between calls.
"""

__version__ = "0.1.0"

from .cleaner import clean, clean_with_report
from .detection import detect
from .models import (
    CleanResult,
    DetectionResult,
    Finding,
    HighlightSpan,
    SpanCategory,
    ThreatLevel,
)

__all__ = [
    "CleanResult",
    "DetectionResult",
    "Finding",
    "HighlightSpan",
    "SpanCategory",
    "ThreatLevel",
    "clean",
    "clean_with_report",
    "detect",
]
