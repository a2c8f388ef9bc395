"""
Per-format parsing of a matched document.

Finds the establishment numbers, maps the items and combines them into
an envelope. Raises on malformed input; the orchestrating service turns
that into a fault outcome.
"""

from typing import Any, Optional

from models.model_descriptor import ModelDescriptor
from models.packing_list import ParsedPackingList
from parsers import pdf_rows
from parsers.pdf_extractor import PdfDocument
from services import field_mapper, header_matcher, parser_combine
from utils import regex_utils


def parse_tabular(document: Any, descriptor: ModelDescriptor) -> ParsedPackingList:
    """Parse a sanitised workbook or CSV table with a tabular model."""
    registration: Optional[str] = None
    for _, rows in header_matcher.valid_sheets(document, descriptor):
        registration = regex_utils.find_match(descriptor.establishment_number, rows)
        if registration:
            break

    establishment_numbers: list[str] = []
    for _, rows in header_matcher.iter_sheets(document):
        regex_utils.find_establishment_numbers(rows, establishment_numbers)

    items = field_mapper.map_tabular(document, descriptor)
    return parser_combine.combine(
        registration,
        items,
        True,
        descriptor.model_id,
        establishment_numbers,
        descriptor,
    )


def parse_pdf(document: PdfDocument, descriptor: ModelDescriptor) -> ParsedPackingList:
    """Parse a sanitised PDF with a coordinate model."""
    registration = regex_utils.find_match(descriptor.establishment_number, document.text_rows())
    establishment_numbers = pdf_rows.extract_establishment_numbers(document)
    items = field_mapper.map_pdf(document, descriptor)
    return parser_combine.combine(
        registration,
        items,
        True,
        descriptor.model_id,
        establishment_numbers,
        descriptor,
    )


def parse(document: Any, descriptor: ModelDescriptor) -> ParsedPackingList:
    if descriptor.is_pdf:
        return parse_pdf(document, descriptor)
    return parse_tabular(document, descriptor)
