"""
Plain-text extraction for uploaded documents.

PDF pages are read with PyMuPDF, DOCX paragraphs and tables with python-docx.
TXT and legacy DOC files are decoded as text; legacy Word binaries have no
structured reader here, so only their readable text survives.
"""
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional
from zipfile import BadZipFile

import fitz  # PyMuPDF
from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx", ".txt"}


class TextExtractionError(Exception):
    """The uploaded file could not be read as a document."""


@dataclass
class ExtractedText:
    text: str
    page_count: Optional[int] = None


def decode_text(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1", errors="replace")


def extract_pdf(content: bytes) -> ExtractedText:
    try:
        pdf_document = fitz.open(stream=content, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise TextExtractionError(f"Unreadable PDF: {e}") from e

    try:
        pages = [pdf_document[page_num].get_text() for page_num in range(pdf_document.page_count)]
        return ExtractedText(text="\n".join(pages).strip(), page_count=pdf_document.page_count)
    finally:
        pdf_document.close()


def extract_docx(content: bytes) -> ExtractedText:
    try:
        doc = DocxDocument(BytesIO(content))
    except (PackageNotFoundError, BadZipFile, KeyError, ValueError) as e:
        raise TextExtractionError(f"Unreadable DOCX: {e}") from e

    parts = [p.text.strip() for p in doc.paragraphs if p.text and p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            line = "\t".join(c.text.strip() for c in row.cells if c.text and c.text.strip())
            if line:
                parts.append(line)
    return ExtractedText(text="\n".join(parts))


def extract_text(content: bytes, extension: str) -> ExtractedText:
    """Extract text from file bytes, dispatching on the (lowercase, dotted) extension."""
    if extension == ".pdf":
        result = extract_pdf(content)
    elif extension == ".docx":
        result = extract_docx(content)
    else:
        result = ExtractedText(text=decode_text(content).strip())

    logger.info(f"Extracted {len(result.text)} characters from {extension} upload")
    return result
