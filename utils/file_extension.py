"""
Format classification by filename extension.

The extension is the only thing consulted; contents are never sniffed.
"""

from pathlib import PurePath
from typing import Optional

from models.matcher import DocumentFormat, MatcherResult


_EXTENSIONS = {
    ".xlsx": DocumentFormat.SPREADSHEET,
    ".xls": DocumentFormat.SPREADSHEET,
    ".csv": DocumentFormat.CSV,
    ".pdf": DocumentFormat.PDF,
}


def _suffix(filename: Optional[str]) -> str:
    if not filename:
        return ""
    return PurePath(str(filename).strip()).suffix.lower()


def classify(filename: Optional[str]) -> DocumentFormat:
    """
    Classify a filename into a document format.

    Examples:
        "packing.XLSX" -> SPREADSHEET
        "list.csv"     -> CSV
        "notes.txt"    -> UNKNOWN
        None           -> UNKNOWN
    """
    return _EXTENSIONS.get(_suffix(filename), DocumentFormat.UNKNOWN)


def is_excel(filename: Optional[str]) -> bool:
    return classify(filename) == DocumentFormat.SPREADSHEET


def is_csv(filename: Optional[str]) -> bool:
    return classify(filename) == DocumentFormat.CSV


def is_pdf(filename: Optional[str]) -> bool:
    return classify(filename) == DocumentFormat.PDF


def matches(filename: Optional[str], extension: str) -> MatcherResult:
    """CORRECT when the filename carries the given extension (with or without dot)."""
    wanted = extension.lower() if extension.startswith(".") else f".{extension.lower()}"
    if _suffix(filename) == wanted:
        return MatcherResult.CORRECT
    return MatcherResult.WRONG_EXTENSION
