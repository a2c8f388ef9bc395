"""
Tabular sanitizer.

Trims string cells and turns blank strings into None. Cell keys are kept
even when their value becomes None, so column positions never shift.
PDF documents bypass this step.
"""

from typing import Any


def sanitise_value(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value if value else None
    return value


def sanitise_row(row: Any) -> Any:
    if isinstance(row, dict):
        return {key: sanitise_value(value) for key, value in row.items()}
    if isinstance(row, (list, tuple)):
        return [sanitise_value(value) for value in row]
    return sanitise_value(row)


def sanitise_table(rows: list) -> list:
    """Sanitise a CSV table (list of row lists) or one sheet's rows."""
    return [sanitise_row(row) for row in rows]


def sanitise_workbook(sheets: dict) -> dict:
    """Sanitise every sheet of a spreadsheet (sheet name -> rows)."""
    return {name: sanitise_table(rows or []) for name, rows in sheets.items()}


def sanitise(document: Any) -> Any:
    """
    Sanitise a converted spreadsheet or CSV document.

    Returns None for anything that is not tabular.
    """
    if isinstance(document, dict):
        return sanitise_workbook(document)
    if isinstance(document, (list, tuple)):
        return sanitise_table(list(document))
    return None
