"""
Whole-text structural heuristics.

Each analyzer takes the already-normalized text and returns a single counter.
All of them are single forward passes (or one precompiled regex scan), so
cost stays linear in the input length and nothing recurses per character.
"""

from __future__ import annotations

from .tables import (
    BASE64_RUN_RE,
    BIDI_CLOSERS,
    BIDI_PAIRS,
    HEX_RUN_RE,
    INVISIBLE_CLASS,
    LTR_LETTER_RE,
    RTL_CHAR_RE,
    ZWJ_CHAIN_RE,
)


def count_unmatched_bidi(text: str) -> int:
    """
    Count bidi embedding/isolate controls that are not properly paired.

    Openers are pushed on an explicit stack. A closer with nothing to close,
    or one that pops an opener of the other family (e.g. PDI closing an
    LRE), is one defect; the popped opener is discarded either way. Openers
    still pending at the end each count as one more defect.
    """
    stack: list[str] = []
    unmatched = 0

    for char in text:
        if char in BIDI_PAIRS:
            stack.append(char)
        elif char in BIDI_CLOSERS:
            if not stack:
                unmatched += 1
            elif BIDI_PAIRS[stack.pop()] != char:
                unmatched += 1

    return unmatched + len(stack)


def count_zwj_chains(text: str) -> int:
    """Count ZWJ runs (ZWJ followed by ZWJ / VS16 / ZWSP) longer than two characters."""
    return sum(1 for match in ZWJ_CHAIN_RE.finditer(text) if len(match.group()) > 2)


def count_repeating_invisible(text: str) -> int:
    """
    Count back-to-back repeats of the same invisible-class character.

    A run of k identical invisible characters contributes k - 1. Any other
    character, or a different invisible character, starts a new run.
    """
    repeats = 0
    last_invisible = ""
    run_length = 0

    for char in text:
        if char in INVISIBLE_CLASS:
            if char == last_invisible:
                run_length += 1
                if run_length >= 2:
                    repeats += 1
            else:
                last_invisible = char
                run_length = 1
        else:
            last_invisible = ""
            run_length = 0

    return repeats


def count_mixed_directionality(text: str) -> int:
    """Count lines holding both an ASCII letter and a Hebrew/Arabic-family character."""
    return sum(
        1
        for line in text.split("\n")
        if LTR_LETTER_RE.search(line) and RTL_CHAR_RE.search(line)
    )


def count_encoded_data(text: str) -> int:
    """Count Base64-looking runs (20+ chars) plus hex-looking runs (16+ digits)."""
    base64_runs = sum(1 for _ in BASE64_RUN_RE.finditer(text))
    hex_runs = sum(1 for _ in HEX_RUN_RE.finditer(text))
    return base64_runs + hex_runs


# Counter name -> analyzer, in reporting order.
ANALYZERS = {
    "unmatched_bidi": count_unmatched_bidi,
    "zwj_chains": count_zwj_chains,
    "repeating_invisible": count_repeating_invisible,
    "mixed_directionality": count_mixed_directionality,
    "encoded_data": count_encoded_data,
}
