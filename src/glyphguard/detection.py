"""
Detection entry point.

``detect`` runs the scanner and every structural analyzer over the same
NFC-normalized text and folds their counters into one DetectionResult.
It is total over ``str``: empty input, lone surrogates and very long runs
all produce a result rather than an exception.
"""

from __future__ import annotations

import logging

from .analyzers import ANALYZERS
from .models import CATEGORY_FIELDS, DetectionResult
from .scanner import scan
from .scorer import max_line_density, noise_score

logger = logging.getLogger(__name__)


def detect(text: str) -> DetectionResult:
    """
    Classify *text* and return counters, scores and highlight spans.

    Offsets in ``highlighted_positions`` refer to the NFC-normalized form of
    *text*. When normalization composes characters, those offsets do not
    line up one-to-one with the original string.
    """
    if not text:
        return DetectionResult()

    scanned = scan(text)
    normalized = scanned.text

    counts: dict[str, int] = dict(scanned.counts)
    for name, analyzer in ANALYZERS.items():
        counts[name] = analyzer(normalized)

    total = sum(counts[name] for name in CATEGORY_FIELDS)

    result = DetectionResult(
        **counts,
        total_issues=total,
        noise_score=noise_score(total, len(normalized)),
        max_line_density=max_line_density(scanned.spans, normalized),
        highlighted_positions=tuple(scanned.spans),
    )

    logger.debug(
        "Detection complete: %d issue(s), noise score %.1f%%.", total, result.noise_score
    )
    return result
