"""
Header row location for tabular packing lists.

A header row is the first row whose string cells jointly satisfy every
required label pattern of a model. Header position may differ per sheet.
"""

from typing import Any, Iterable, Optional, Pattern

from models.model_descriptor import ModelDescriptor
from utils import regex_utils


def iter_sheets(document: Any) -> list[tuple]:
    """
    (sheet name, rows) pairs of a tabular document.

    A CSV document is a single unnamed sheet.
    """
    if isinstance(document, dict):
        return [(name, rows or []) for name, rows in document.items()]
    if isinstance(document, (list, tuple)):
        return [(None, list(document))]
    raise TypeError(f"not a tabular document: {type(document).__name__}")


def valid_sheets(document: Any, descriptor: ModelDescriptor) -> list[tuple]:
    """Sheets the model reads; named invalid sheets are skipped."""
    return [
        (name, rows) for name, rows in iter_sheets(document)
        if name not in descriptor.invalid_sheets
    ]


def has_data(rows: Iterable[Any]) -> bool:
    return any(cell is not None for row in rows for cell in regex_utils.cells(row))


def is_empty(document: Any) -> bool:
    """No sheets, or no non-null cell anywhere."""
    if not document:
        return True
    return not any(has_data(rows) for _, rows in iter_sheets(document))


def matches_header(patterns: Iterable[Pattern], rows: list) -> Optional[int]:
    """Index of the first row satisfying every pattern, or None."""
    patterns = list(patterns)
    for index, row in enumerate(rows):
        if regex_utils.test_all_patterns(patterns, row):
            return index
    return None


def find_header_row(rows: list, descriptor: ModelDescriptor, start: int = 0) -> Optional[int]:
    """Index of the model's header row at or after `start`, or None."""
    index = matches_header(descriptor.headers.values(), rows[start:])
    return None if index is None else index + start


def header_columns(header_row: Any, descriptor: ModelDescriptor) -> dict:
    """
    Column key (letter or index) of every declared field found in the header row.

    Required fields always resolve on a matched header row; optional
    fields are included only when their label is present.
    """
    columns = {}
    for name, pattern in descriptor.headers.items():
        columns[name] = regex_utils.position_finder(header_row, pattern)
    for name, pattern in descriptor.optional_headers.items():
        position = regex_utils.position_finder(header_row, pattern)
        if position is not None:
            columns[name] = position
    return columns
