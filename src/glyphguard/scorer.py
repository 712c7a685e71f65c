"""
Aggregate scores derived from scanner output.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import HighlightSpan

MAX_SCORE = 100.0


def noise_score(total_issues: int, text_length: int) -> float:
    """Issues per character as a percentage, clamped to 100. Empty text scores 0."""
    if text_length == 0:
        return 0.0
    return min(MAX_SCORE, total_issues / max(1, text_length) * 100)


def max_line_density(spans: Sequence[HighlightSpan], text: str) -> float:
    """
    Return the highest per-line share of flagged characters, as a percentage.

    Lines are split on ``\\n``. A span belongs to a line when its start lies
    in ``[line_start, line_end)``, so a flagged newline belongs to no line.
    Empty lines are skipped. Span starts are consumed with a single cursor,
    which keeps the walk linear in ``len(text) + len(spans)``.
    """
    if not text or not spans:
        return 0.0

    starts = sorted(span.start for span in spans)
    cursor = 0
    best = 0.0
    line_start = 0

    for line in text.split("\n"):
        line_end = line_start + len(line)
        if line:
            while cursor < len(starts) and starts[cursor] < line_start:
                cursor += 1
            issues = 0
            while cursor < len(starts) and starts[cursor] < line_end:
                issues += 1
                cursor += 1
            best = max(best, issues / len(line) * 100)
        line_start = line_end + 1

    return min(best, MAX_SCORE)
