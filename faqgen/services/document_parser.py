"""
Text extraction for uploaded PDF and DOCX files.

Returns a ParsedDocument with full_text and basic metadata (page_count,
word_count, title, author, file_type).  Extraction failures are reported as
DocumentExtractionError; a readable file without any text is reported as the
EmptyDocumentError subclass so callers can tell the two apart.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import fitz  # PyMuPDF
from docx import Document as DocxDocument

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class DocumentExtractionError(RuntimeError):
    """The file could not be opened or read."""


class EmptyDocumentError(DocumentExtractionError):
    """The file was read but contains no usable text."""


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class ParsedDocument:
    """
    Output of the DocumentParser.

    Attributes:
        full_text: Complete text of the document, pages joined by blank lines.
        metadata:  Dict with keys: page_count, word_count, title, author,
                   file_type.
    """

    full_text: str
    metadata: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class DocumentParser:
    """Extracts plain text from PDF and DOCX documents."""

    async def parse_document(self, file_path: str, file_type: str) -> ParsedDocument:
        """
        Parse a document file and return its text.

        Args:
            file_path: Path to the file on disk.
            file_type: Extension with or without dot, e.g. ".pdf" or "docx".

        Returns:
            ParsedDocument with non-empty full_text.

        Raises:
            ValueError:              Unsupported file type.
            DocumentExtractionError: Password-protected or unreadable file.
            EmptyDocumentError:      No extractable text.
        """
        ft = file_type.lower().lstrip(".")
        if ft == "pdf":
            parsed = self._parse_pdf(file_path)
        elif ft == "docx":
            parsed = self._parse_docx(file_path)
        else:
            raise ValueError(f"Unsupported file type: {file_type!r}")

        if not parsed.full_text.strip():
            raise EmptyDocumentError("Document is empty or could not be parsed.")

        logger.info(
            "Extracted %d words from %s (%s)",
            parsed.metadata.get("word_count", 0),
            file_path,
            ft,
        )
        return parsed

    # ------------------------------------------------------------------
    # PDF
    # ------------------------------------------------------------------

    def _parse_pdf(self, file_path: str) -> ParsedDocument:
        try:
            doc = fitz.open(file_path)
        except Exception as exc:
            raise DocumentExtractionError(f"Cannot open PDF file: {exc}") from exc

        try:
            if doc.needs_pass:
                raise DocumentExtractionError(
                    "PDF is password-protected. Please provide an unlocked copy."
                )

            raw_meta = doc.metadata or {}
            page_texts: List[str] = []
            for page in doc:
                lines = [
                    line for line in page.get_text("text").splitlines()
                    # Skip isolated page numbers
                    if line.strip() and not _PAGE_NUMBER_RE.match(line.strip())
                ]
                if lines:
                    page_texts.append("\n".join(lines))
            page_count = doc.page_count
        finally:
            doc.close()

        full_text = "\n\n".join(page_texts)
        return ParsedDocument(
            full_text=full_text,
            metadata={
                "page_count": page_count,
                "word_count": len(full_text.split()),
                "title": raw_meta.get("title", "") or "",
                "author": raw_meta.get("author", "") or "",
                "file_type": "pdf",
            },
        )

    # ------------------------------------------------------------------
    # DOCX
    # ------------------------------------------------------------------

    def _parse_docx(self, file_path: str) -> ParsedDocument:
        try:
            doc = DocxDocument(file_path)
        except Exception as exc:
            raise DocumentExtractionError(f"Cannot open DOCX file: {exc}") from exc

        parts = [p.text.strip() for p in doc.paragraphs if p.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                line = _format_table_row(cells)
                if line:
                    parts.append(line)

        core = doc.core_properties
        full_text = "\n\n".join(parts)
        return ParsedDocument(
            full_text=full_text,
            metadata={
                "page_count": None,   # python-docx cannot report rendered page count
                "word_count": len(full_text.split()),
                "title": core.title or "",
                "author": core.author or "",
                "file_type": "docx",
            },
        )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

_PAGE_NUMBER_RE = re.compile(r"^\d{1,4}$")


def _format_table_row(cells: List[Optional[str]]) -> str:
    """Join the non-empty cells of a table row with pipes."""
    non_empty = [c for c in cells if c]
    return " | ".join(non_empty)
