"""
Input loading for glyphguard: plain-text files, stdin, and .docx documents.

The detection and cleaning core only ever sees a ``str``. This module is the
bridge from files on disk to that string. Word documents are flattened with
python-docx (body paragraphs, tables, headers and footers, one fragment per
line); everything else is read as UTF-8.

Undecodable bytes are kept as lone surrogates (``surrogateescape``) rather
than replaced, so the scanner sees exactly what was in the file and
:func:`write_text` can write it back byte-for-byte.
"""

from __future__ import annotations

import logging
import sys
import zipfile
from pathlib import Path

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"
_TEXT_ERRORS = "surrogateescape"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class DocumentLoadError(Exception):
    """Raised when an input document cannot be loaded."""


class UnsupportedFormatError(DocumentLoadError):
    """Raised when the file is not in a supported format."""


class PasswordProtectedError(DocumentLoadError):
    """Raised when the document is password-protected or encrypted."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_text(source: str | Path) -> str:
    """
    Return the text content of *source*.

    ``"-"`` reads standard input. Paths ending in ``.docx`` are loaded via
    :func:`load_document` and flattened with :func:`extract_all_text`; any
    other path is read as UTF-8.

    Raises:
        FileNotFoundError: File does not exist.
        UnsupportedFormatError: Legacy .doc file, or a .docx that is not a ZIP.
        PasswordProtectedError: Encrypted document.
        DocumentLoadError: Any other load failure.
    """
    if str(source) == STDIN_MARKER:
        data = sys.stdin.buffer.read()
        return data.decode("utf-8", errors=_TEXT_ERRORS)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise DocumentLoadError(f"Path is not a file: {path}")

    suffix = path.suffix.lower()
    if suffix == ".doc":
        raise UnsupportedFormatError(
            f"Legacy .doc format is not supported. Please convert to .docx first: {path.name}"
        )
    if suffix == ".docx":
        text = "\n".join(extract_all_text(load_document(path)))
    else:
        try:
            text = path.read_text(encoding="utf-8", errors=_TEXT_ERRORS)
        except OSError as exc:
            raise DocumentLoadError(f"Failed to read '{path.name}': {exc}") from exc

    logger.debug("Loaded %d character(s) from %s", len(text), path)
    return text


def write_text(text: str, destination: str | Path) -> Path:
    """
    Write *text* to *destination* as UTF-8, creating parent directories.

    Lone surrogates produced by :func:`load_text` are written back as the
    original bytes. Returns the resolved path.
    """
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8", errors=_TEXT_ERRORS))
    logger.info("Text saved to %s", path)
    return path.resolve()


def load_document(file_path: str | Path) -> Document:
    """
    Load a .docx file and return a python-docx Document.

    Validates that the file is a real ZIP container and is not encrypted
    before handing it to python-docx.
    """
    path = Path(file_path)

    if not zipfile.is_zipfile(path):
        raise UnsupportedFormatError(
            f"File is not a valid .docx archive (corrupt or not a real ZIP): {path.name}"
        )

    if _is_encrypted(path):
        raise PasswordProtectedError(
            f"Document is password-protected or encrypted: {path.name}"
        )

    try:
        return Document(str(path))
    except PackageNotFoundError as exc:
        raise DocumentLoadError(
            f"File appears damaged, required .docx internal parts are missing: {path.name}"
        ) from exc
    except Exception as exc:
        raise DocumentLoadError(
            f"Failed to load document '{path.name}': {exc}"
        ) from exc


def extract_all_text(doc: Document) -> list[str]:
    """
    Extract every non-empty text fragment from the document, in order:

    - Body paragraphs
    - Table cells (nested tables included)
    - Headers and footers (all sections)

    Fragments are returned verbatim; invisible characters are preserved.
    """
    fragments: list[str] = []

    for paragraph in doc.paragraphs:
        if paragraph.text.strip():
            fragments.append(paragraph.text)

    fragments.extend(_extract_from_tables(doc.tables))

    for section in doc.sections:
        for header_footer in _iter_headers_footers(section):
            for paragraph in header_footer.paragraphs:
                if paragraph.text.strip():
                    fragments.append(paragraph.text)
            fragments.extend(_extract_from_tables(header_footer.tables))

    return fragments


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_encrypted(path: Path) -> bool:
    """
    Detect whether a .docx file is encrypted.

    Encrypted Office documents are OLE2 Compound Binary files (magic bytes
    ``\\xD0\\xCF\\x11\\xE0``), or a ZIP containing an ``EncryptedPackage``
    entry.
    """
    try:
        with open(path, "rb") as fh:
            header = fh.read(8)
        if header[:4] == b"\xd0\xcf\x11\xe0":
            return True
    except OSError:
        return False

    try:
        with zipfile.ZipFile(path, "r") as zf:
            if "EncryptedPackage" in zf.namelist():
                return True
    except zipfile.BadZipFile:
        pass

    return False


def _extract_from_tables(tables) -> list[str]:
    """Extract text from tables, descending into nested tables iteratively."""
    fragments: list[str] = []
    pending = list(reversed(tables))
    while pending:
        table = pending.pop()
        for row in table.rows:
            for cell in row.cells:
                for paragraph in cell.paragraphs:
                    if paragraph.text.strip():
                        fragments.append(paragraph.text)
                pending.extend(reversed(cell.tables))
    return fragments


def _iter_headers_footers(section):
    """Yield the headers/footers a section owns, skipping linked ones."""
    attrs = [
        "header", "footer",
        "first_page_header", "first_page_footer",
        "even_page_header", "even_page_footer",
    ]
    for attr in attrs:
        hf = getattr(section, attr, None)
        if hf is not None and not hf.is_linked_to_previous:
            yield hf
