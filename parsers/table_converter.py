"""
Spreadsheet and CSV conversion.

Produces the tabular shapes the parser engine consumes:
    spreadsheet -> {sheet name: [ {column letter: cell}, ... ]}
    CSV         -> [ [cell, ...], ... ]
"""

from io import BytesIO
from typing import Any, Optional
import math
import structlog

import pandas as pd
from openpyxl.utils import get_column_letter

from exceptions import UnsupportedFileError

logger = structlog.get_logger(__name__)


def _clean_cell(value: Any) -> Any:
    """NaN -> None; integral floats -> int (Excel stores 10 as 10.0)."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return int(value)
    if value is pd.NaT:
        return None
    return value


def excel_to_sheets(file_content: bytes, filename: Optional[str] = None) -> dict[str, list[dict]]:
    """
    Convert an Excel workbook to sheet name -> rows keyed by column letter.

    Raises:
        UnsupportedFileError: If the workbook cannot be read
    """
    engine = "openpyxl" if (filename or "").lower().endswith(".xlsx") else None
    try:
        frames = pd.read_excel(
            BytesIO(file_content),
            sheet_name=None,
            header=None,
            dtype=object,
            engine=engine,
        )
    except Exception as e:
        logger.warning("excel_read_failed", filename=filename, error=str(e))
        raise UnsupportedFileError(filename, "unreadable spreadsheet") from e

    sheets = {}
    for sheet_name, df in frames.items():
        letters = [get_column_letter(index + 1) for index in range(len(df.columns))]
        sheets[str(sheet_name)] = [
            {letter: _clean_cell(value) for letter, value in zip(letters, row)}
            for row in df.itertuples(index=False, name=None)
        ]

    logger.debug(
        "excel_converted",
        filename=filename,
        sheets=list(sheets.keys()),
        rows=sum(len(rows) for rows in sheets.values())
    )
    return sheets


def csv_to_rows(file_content: bytes, filename: Optional[str] = None) -> list[list]:
    """
    Convert CSV bytes to a list of row lists.

    Every cell is read as text so codes keep their leading zeros.

    Raises:
        UnsupportedFileError: If the CSV cannot be parsed
    """
    try:
        df = pd.read_csv(
            BytesIO(file_content),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        logger.warning("csv_read_failed", filename=filename, error=str(e))
        raise UnsupportedFileError(filename, "unreadable CSV") from e

    rows = [list(row) for row in df.itertuples(index=False, name=None)]
    logger.debug("csv_converted", filename=filename, rows=len(rows))
    return rows
