"""
Field mapping.

Applies a matched model's column definitions to table rows or PDF rows
and produces canonical PackingListItems tagged with where they came from.
"""

import re
from typing import Any, Optional

import structlog

from models.model_descriptor import PRIMARY_FIELDS, BlanketValue, ModelDescriptor
from models.packing_list import PackingListItem, RowLocation
from parsers import pdf_rows
from parsers.pdf_extractor import PdfDocument
from services import header_matcher
from utils import regex_utils

logger = structlog.get_logger(__name__)

COMMODITY_DIGITS_PATTERN = re.compile(r"^(\d{4,14})")
TRAILING_UNIT_PATTERN = re.compile(r"\s*(?:KGS?|KILOGRAMS?|KILOS?)\.?\s*$", re.IGNORECASE)
TOTALS_PATTERN = re.compile(r"\b(?:GRAND\s+TOTAL|SUB-?TOTAL|TOTALS?|SUM|SUMMARY)\b", re.IGNORECASE)


# ===================
# VALUE TRANSFORMS
# ===================

def strip_unit(value: Any) -> Any:
    """'12.5 kg' -> '12.5'; non-strings pass through."""
    if not isinstance(value, str):
        return value
    stripped = TRAILING_UNIT_PATTERN.sub("", value).strip()
    return stripped or None


def commodity_digits(value: Any) -> Any:
    """Leading 4-14 digits of a commodity code ('0201 BEEF' -> '0201')."""
    if value is None:
        return None
    text = re.sub(r"\s+", "", str(value)) if isinstance(value, str) else str(value)
    match = COMMODITY_DIGITS_PATTERN.match(text)
    return match.group(1) if match else value


TRANSFORMS = {
    "strip_unit": strip_unit,
    "commodity_digits": commodity_digits,
}


def apply_transforms(values: dict, descriptor: ModelDescriptor) -> dict:
    for name, transform in descriptor.value_transforms.items():
        if name in values:
            values[name] = TRANSFORMS[transform](values[name])
    return values


# ===================
# ROW HELPERS
# ===================

def column_value(value: Any) -> Any:
    return None if value == "" else value


def cell_at(row: Any, key: Any) -> Any:
    """Cell by column letter (dict rows) or index (list rows)."""
    if key is None:
        return None
    if isinstance(row, dict):
        return column_value(row.get(key))
    if isinstance(row, (list, tuple)) and isinstance(key, int) and key < len(row):
        return column_value(row[key])
    return None


def _is_zero(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    return isinstance(value, str) and value.strip() in ("0", "0.0")


def is_degenerate(values: dict) -> bool:
    """
    Drag-down artifacts: rows where every primary field is empty or zero.

    Mixed rows (some fields empty, the rest zero) count too, so all-zero
    and all-null rows are both special cases.
    """
    primary = [values.get(name) for name in PRIMARY_FIELDS]
    return all(value is None or _is_zero(value) for value in primary)


def is_totals_row(values: dict) -> bool:
    """
    Totals lines: a TOTAL/SUBTOTAL/SUM style keyword in the description
    and no commodity code.
    """
    if values.get("commodity_code") is not None:
        return False
    description = values.get("description")
    return isinstance(description, str) and bool(TOTALS_PATTERN.search(description))


def blanket_value(blanket: Optional[BlanketValue], rows) -> Optional[str]:
    if blanket is None:
        return None
    return blanket.value if regex_utils.test([blanket.pattern], rows) else None


def _fill_defaults(values: dict, nirms: Optional[str], treatment: Optional[str], unit: Optional[str]) -> dict:
    """Blanket values and header unit for rows whose own cell is empty."""
    if values.get("nirms") is None and nirms is not None:
        values["nirms"] = nirms
    if values.get("type_of_treatment") is None and treatment is not None:
        values["type_of_treatment"] = treatment
    if values.get("total_net_weight_unit") is None and unit is not None:
        values["total_net_weight_unit"] = unit
    return values


# ===================
# TABULAR
# ===================

def map_rows(
    rows: list,
    header_index: int,
    descriptor: ModelDescriptor,
    sheet_name: Optional[str] = None,
    blanket_nirms: Optional[str] = None,
    blanket_treatment: Optional[str] = None,
) -> list[PackingListItem]:
    """
    Items from the rows between a header row and the next header-like row
    (or the end of the sheet).
    """
    header_row = rows[header_index]
    columns = header_matcher.header_columns(header_row, descriptor)

    unit = None
    if descriptor.find_unit_in_header:
        unit = regex_utils.find_unit(cell_at(header_row, columns.get("total_net_weight_kg")))

    end = header_matcher.find_header_row(rows, descriptor, start=header_index + 1)
    if end is None:
        end = len(rows)

    items = []
    for index in range(header_index + 1, end):
        values = {name: cell_at(rows[index], key) for name, key in columns.items()}
        values = apply_transforms(values, descriptor)
        if is_degenerate(values) or is_totals_row(values):
            continue
        values = _fill_defaults(values, blanket_nirms, blanket_treatment, unit)
        items.append(PackingListItem(
            **values,
            row_location=RowLocation(row_number=index + 1, sheet_name=sheet_name),
        ))
    return items


def map_tabular(document: Any, descriptor: ModelDescriptor) -> list[PackingListItem]:
    """
    Items from every table in every sheet the model reads, in sheet order.
    """
    sheets = header_matcher.valid_sheets(document, descriptor)
    all_rows = [row for _, rows in sheets for row in rows]
    nirms = blanket_value(descriptor.blanket_nirms, all_rows)
    treatment = blanket_value(descriptor.blanket_treatment, all_rows)

    items: list[PackingListItem] = []
    for sheet_name, rows in sheets:
        header_index = header_matcher.find_header_row(rows, descriptor)
        while header_index is not None:
            items.extend(map_rows(rows, header_index, descriptor, sheet_name, nirms, treatment))
            header_index = header_matcher.find_header_row(rows, descriptor, start=header_index + 1)

    logger.debug("tabular_items_mapped", model=descriptor.model_id, items=len(items))
    return items


# ===================
# PDF
# ===================

def map_pdf(document: PdfDocument, descriptor: ModelDescriptor) -> list[PackingListItem]:
    """
    Items from a sanitised PDF.

    Optional columns are read only when their header is present on the
    first page; the net weight unit comes from the header when the model
    says so.
    """
    if document.is_empty:
        return []

    info = pdf_rows.header_info(document.pages[0], descriptor)
    unit = info.net_weight_unit if descriptor.find_unit_in_header else None
    columns = dict(descriptor.pdf_columns)
    columns.update({
        name: column for name, column in descriptor.pdf_optional_columns.items()
        if name in info.optional_fields
    })

    text_rows = list(document.text_rows())
    nirms = blanket_value(descriptor.blanket_nirms, text_rows)
    treatment = blanket_value(descriptor.blanket_treatment, text_rows)

    items = []
    for row in pdf_rows.extract_document_rows(document, descriptor):
        values = apply_transforms(pdf_rows.assign_columns(row, columns), descriptor)
        if is_degenerate(values) or is_totals_row(values):
            continue
        values = _fill_defaults(values, nirms, treatment, unit)
        items.append(PackingListItem(
            **values,
            row_location=RowLocation(row_number=row.row_number, page_number=row.page_number),
        ))

    logger.debug("pdf_items_mapped", model=descriptor.model_id, items=len(items))
    return items
