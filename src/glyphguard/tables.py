"""
Classification tables for glyphguard.

Every character category the scanner and cleaner know about is defined here
once. All tables are immutable (frozenset / MappingProxyType) and built at
import time, so they can be shared freely between threads.
"""

from __future__ import annotations

import re
from types import MappingProxyType


# ---------------------------------------------------------------------------
# Zero-width and invisible formatting characters
# ---------------------------------------------------------------------------

ZERO_WIDTH_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "\u200B": "Zero-Width Space",
    "\u200C": "Zero-Width Non-Joiner",
    "\u200D": "Zero-Width Joiner",
    "\uFEFF": "Zero-Width No-Break Space",
    "\u2060": "Word Joiner",
    "\u2062": "Invisible Times",
    "\u2063": "Invisible Separator",
    "\u2064": "Invisible Plus",
})

INVISIBLE_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "\u00AD": "Soft Hyphen",
    "\u034F": "Combining Grapheme Joiner",
    "\u061C": "Arabic Letter Mark",
    "\u115F": "Hangul Choseong Filler",
    "\u1160": "Hangul Jungseong Filler",
    "\u17B4": "Khmer Vowel Inherent Aq",
    "\u17B5": "Khmer Vowel Inherent Aa",
    "\u180E": "Mongolian Vowel Separator",
    "\u180B": "Mongolian Free Variation Selector One",
    "\u180C": "Mongolian Free Variation Selector Two",
    "\u180D": "Mongolian Free Variation Selector Three",
    **{chr(cp): f"Variation Selector-{cp - 0xFE00 + 1}" for cp in range(0xFE00, 0xFE10)},
})

ZERO_WIDTH_CHARS: frozenset[str] = frozenset(ZERO_WIDTH_NAMES)
INVISIBLE_CHARS: frozenset[str] = frozenset(INVISIBLE_NAMES)


# ---------------------------------------------------------------------------
# Numeric ranges (inclusive on both ends)
# ---------------------------------------------------------------------------

CONTROL_CHAR_RANGES: tuple[tuple[int, int], ...] = (
    (0x00, 0x1F),  # C0 controls
    (0x7F, 0x9F),  # DEL + C1 controls
)

TAG_CHAR_RANGE: tuple[int, int] = (0xE0000, 0xE007F)


def is_control_char(char: str) -> bool:
    """Return True if *char* falls in one of the C0/C1 control ranges."""
    cp = ord(char)
    return any(start <= cp <= end for start, end in CONTROL_CHAR_RANGES)


def is_tag_char(char: str) -> bool:
    """Return True if *char* is a Unicode tag character (U+E0000..U+E007F)."""
    return TAG_CHAR_RANGE[0] <= ord(char) <= TAG_CHAR_RANGE[1]


# ---------------------------------------------------------------------------
# Bidirectional controls
# ---------------------------------------------------------------------------

BIDI_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "\u202A": "Left-to-Right Embedding",
    "\u202B": "Right-to-Left Embedding",
    "\u202C": "Pop Directional Formatting",
    "\u202D": "Left-to-Right Override",
    "\u202E": "Right-to-Left Override",
    "\u2066": "Left-to-Right Isolate",
    "\u2067": "Right-to-Left Isolate",
    "\u2068": "First Strong Isolate",
    "\u2069": "Pop Directional Isolate",
})

BIDI_CHARS: frozenset[str] = frozenset(BIDI_NAMES)

# Opening control -> the closing control that terminates it.
BIDI_PAIRS: MappingProxyType[str, str] = MappingProxyType({
    "\u202A": "\u202C",  # LRE -> PDF
    "\u202B": "\u202C",  # RLE -> PDF
    "\u202D": "\u202C",  # LRO -> PDF
    "\u202E": "\u202C",  # RLO -> PDF
    "\u2066": "\u2069",  # LRI -> PDI
    "\u2067": "\u2069",  # RLI -> PDI
    "\u2068": "\u2069",  # FSI -> PDI
})

BIDI_CLOSERS: frozenset[str] = frozenset(BIDI_PAIRS.values())


# ---------------------------------------------------------------------------
# Non-breaking and narrow spaces
# ---------------------------------------------------------------------------

NON_BREAKING_SPACE_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "\u00A0": "No-Break Space",
    "\u202F": "Narrow No-Break Space",
    "\u2007": "Figure Space",
    "\u2008": "Punctuation Space",
    "\u2009": "Thin Space",
    "\u200A": "Hair Space",
})

NON_BREAKING_SPACES: frozenset[str] = frozenset(NON_BREAKING_SPACE_NAMES)


# ---------------------------------------------------------------------------
# Substitution maps
# ---------------------------------------------------------------------------

HOMOGLYPHS: MappingProxyType[str, str] = MappingProxyType({
    # Cyrillic -> Latin (lowercase)
    "\u0430": "a", "\u0435": "e", "\u043E": "o", "\u0440": "p",
    "\u0441": "c", "\u0443": "y", "\u0445": "x", "\u0456": "i",
    "\u0458": "j", "\u043A": "k",
    # Cyrillic -> Latin (uppercase)
    "\u0410": "A", "\u0412": "B", "\u0415": "E", "\u041A": "K",
    "\u041C": "M", "\u041D": "H", "\u041E": "O", "\u0420": "P",
    "\u0421": "C", "\u0422": "T", "\u0425": "X", "\u0405": "S",
    "\u0406": "I", "\u0408": "J",
    # Greek -> Latin (lowercase)
    "\u03B1": "a", "\u03B2": "b", "\u03B3": "y", "\u03B5": "e",
    "\u03B9": "i", "\u03BF": "o", "\u03C1": "p", "\u03C5": "u",
    "\u03BD": "v", "\u03C9": "w",
    # Greek -> Latin (uppercase)
    "\u0391": "A", "\u0392": "B", "\u0395": "E", "\u0399": "I",
    "\u039A": "K", "\u039C": "M", "\u039D": "N", "\u039F": "O",
    "\u03A1": "P", "\u03A4": "T", "\u03A7": "X", "\u0396": "Z",
})

SUSPICIOUS_PUNCTUATION: MappingProxyType[str, str] = MappingProxyType({
    "\u2013": "-",    # en dash
    "\u2014": "-",    # em dash
    "\u2018": "'",    # left single quotation mark
    "\u2019": "'",    # right single quotation mark
    "\u201C": '"',    # left double quotation mark
    "\u201D": '"',    # right double quotation mark
    "\u201A": ",",    # single low-9 quotation mark
    "\u201E": '"',    # double low-9 quotation mark
    "\u2039": "<",    # single left-pointing angle quotation mark
    "\u203A": ">",    # single right-pointing angle quotation mark
    "\u00AB": '"',    # left-pointing double angle quotation mark
    "\u00BB": '"',    # right-pointing double angle quotation mark
    "\u2026": "...",  # horizontal ellipsis
})

# Union used by the repeating-invisible heuristic.
INVISIBLE_CLASS: frozenset[str] = ZERO_WIDTH_CHARS | INVISIBLE_CHARS | BIDI_CHARS


# ---------------------------------------------------------------------------
# Precompiled patterns
# ---------------------------------------------------------------------------

ZWJ_CHAIN_RE = re.compile("\u200D[\u200D\uFE0F\u200B]*")
MULTI_SPACE_RE = re.compile(r" {2,}")
BASE64_RUN_RE = re.compile(r"[A-Za-z0-9+/]{20,}={0,2}")
HEX_RUN_RE = re.compile(r"[0-9a-fA-F]{16,}")

SCRIPT_PATTERNS: MappingProxyType[str, re.Pattern[str]] = MappingProxyType({
    "latin": re.compile(r"[a-zA-Z]"),
    "cyrillic": re.compile("[\u0400-\u04FF]"),
    "greek": re.compile("[\u0370-\u03FF]"),
    "arabic": re.compile("[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF]"),
    "hebrew": re.compile("[\u0590-\u05FF]"),
    "devanagari": re.compile("[\u0900-\u097F]"),
})

LTR_LETTER_RE = re.compile(r"[a-zA-Z]")
RTL_CHAR_RE = re.compile(
    "[\u0590-\u05FF\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]"
)

# C0/C1 controls except \t (0x09), \n (0x0A) and \r (0x0D).
STRIPPABLE_CONTROL_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")

TAG_CHAR_RE = re.compile("[\U000E0000-\U000E007F]")


def describe_table_entry(char: str) -> str | None:
    """Return the name this module assigns to *char*, or None."""
    for names in (ZERO_WIDTH_NAMES, INVISIBLE_NAMES, BIDI_NAMES, NON_BREAKING_SPACE_NAMES):
        name = names.get(char)
        if name is not None:
            return name
    return None
