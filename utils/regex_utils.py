"""
Regex helpers over table rows.

Rows are either dicts (spreadsheet: column letter -> cell) or lists
(CSV). Only string cells are ever tested; numbers and None are skipped.
"""

import re
from typing import Any, Iterable, Optional, Pattern, Sequence

# Any GB establishment number, with or without the site suffix
REMOS_PATTERN = re.compile(r"RMS-GB-\d{6}(?:-\d{3})?", re.IGNORECASE)

# A full establishment number; bare site prefixes are not distinct numbers
ESTABLISHMENT_NUMBER_PATTERN = re.compile(r"\bRMS-GB-\d{6}-\d{3}\b", re.IGNORECASE)

UNIT_PATTERN = re.compile(r"(KGS?|KILOGRAMS?|KILOS?)", re.IGNORECASE)


def cells(row: Any) -> list:
    """Cell values of a row in column order."""
    if isinstance(row, dict):
        return list(row.values())
    if isinstance(row, (list, tuple)):
        return list(row)
    return [row]


def string_cells(row: Any) -> list[str]:
    return [cell for cell in cells(row) if isinstance(cell, str)]


def test(patterns: Sequence[Pattern], rows: Iterable[Any]) -> bool:
    """True if any pattern matches any string cell of any row."""
    for row in rows:
        for cell in string_cells(row):
            if any(pattern.search(cell) for pattern in patterns):
                return True
    return False


def contains_remos(rows: Iterable[Any]) -> bool:
    return test([REMOS_PATTERN], rows)


def find_match(pattern: Pattern, rows: Iterable[Any]) -> Optional[str]:
    """First text matched by pattern in any string cell, or None."""
    for row in rows:
        for cell in string_cells(row):
            match = pattern.search(cell)
            if match:
                return match.group(0)
    return None


def find_all_matches(pattern: Pattern, rows: Iterable[Any], found: Optional[list] = None) -> list[str]:
    """
    Every distinct text matched by pattern, in document order.

    `found` is extended in place so callers can accumulate across sheets.
    """
    found = [] if found is None else found
    for row in rows:
        for cell in string_cells(row):
            for match in pattern.finditer(cell):
                value = match.group(0)
                if value not in found:
                    found.append(value)
    return found


def find_establishment_numbers(rows: Iterable[Any], found: Optional[list] = None) -> list[str]:
    """Distinct full establishment numbers, upper-cased, in document order."""
    found = [] if found is None else found
    for value in find_all_matches(ESTABLISHMENT_NUMBER_PATTERN, rows):
        value = value.upper()
        if value not in found:
            found.append(value)
    return found


def test_all_patterns(patterns: Iterable[Pattern], row: Any) -> bool:
    """True if every pattern matches at least one string cell of the row."""
    texts = string_cells(row)
    return all(any(pattern.search(text) for text in texts) for pattern in patterns)


def position_finder(row: Any, pattern: Pattern) -> Optional[Any]:
    """Key (dict) or index (list) of the first cell matching pattern."""
    if isinstance(row, dict):
        items = row.items()
    else:
        items = enumerate(cells(row))
    for key, cell in items:
        if isinstance(cell, str) and pattern.search(cell):
            return key
    return None


def find_unit(text: Any) -> Optional[str]:
    """
    Net weight unit named in a header label, e.g. "Net Weight (KG)" -> "KG".
    """
    if not isinstance(text, str):
        return None
    match = UNIT_PATTERN.search(text)
    return match.group(1) if match else None
