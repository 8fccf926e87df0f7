"""
PDF processing utilities.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text of every page, for checking exported documents.
"""

from pathlib import Path
from typing import Optional

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError):
        return None


def extract_text(pdf_path: Path) -> str:
    """Concatenated text of all pages, separated by newlines."""
    with pdfplumber.open(str(pdf_path)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)
