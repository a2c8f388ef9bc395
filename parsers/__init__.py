"""
Document readers.

Turn uploaded files into rows (spreadsheets, CSV) or positioned text
fragments (PDF) and clean them up for matching.
"""

from parsers.pdf_extractor import (
    PdfDocument,
    PdfFragment,
    PdfPage,
    extract_fragments,
    extract_fragments_async,
)
from parsers.sanitizer import sanitise
from parsers.table_converter import csv_to_rows, excel_to_sheets

__all__ = [
    "PdfDocument",
    "PdfFragment",
    "PdfPage",
    "extract_fragments",
    "extract_fragments_async",
    "sanitise",
    "csv_to_rows",
    "excel_to_sheets",
]
