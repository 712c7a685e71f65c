"""
Shared pytest helpers and fixtures for all glyphguard tests.

Provides helper functions for creating test text files and .docx documents
with known (often invisible) content.
"""

from pathlib import Path

import pytest
from docx import Document

# ---------------------------------------------------------------------------
# Sample text
# ---------------------------------------------------------------------------

ZWSP = "\u200B"
ZWJ = "\u200D"
LRE = "\u202A"
PDF = "\u202C"
LRI = "\u2066"
PDI = "\u2069"
NBSP = "\u00A0"
CYRILLIC_A = "\u0430"

OBFUSCATED_SAMPLE = (
    f"Th{ZWSP}is p{CYRILLIC_A}ragraph has{NBSP}hidden \u201Cmarks\u201D\u2026\n"
    f"{LRE}and an unterminated embedding"
)


# ---------------------------------------------------------------------------
# Helpers: create files with known content
# ---------------------------------------------------------------------------

def make_text_file(path: Path, text: str) -> Path:
    """Write *text* to *path* as UTF-8."""
    path.write_text(text, encoding="utf-8")
    return path


def make_simple_docx(path: Path, paragraphs: list[str]) -> Path:
    """Create a .docx with the given paragraph texts."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    doc.save(str(path))
    return path


def make_table_docx(path: Path, rows: list[list[str]]) -> Path:
    """Create a .docx with a single table."""
    doc = Document()
    doc.add_paragraph("Header paragraph")
    if rows:
        table = doc.add_table(rows=len(rows), cols=len(rows[0]))
        for r_idx, row in enumerate(rows):
            for c_idx, cell_text in enumerate(row):
                table.rows[r_idx].cells[c_idx].text = cell_text
    doc.save(str(path))
    return path


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def obfuscated_file(tmp_path):
    """A UTF-8 text file containing several kinds of obfuscation."""
    return make_text_file(tmp_path / "obfuscated.txt", OBFUSCATED_SAMPLE)


@pytest.fixture
def clean_file(tmp_path):
    """A UTF-8 text file with nothing to report."""
    return make_text_file(tmp_path / "clean.txt", "Plain ASCII text")
