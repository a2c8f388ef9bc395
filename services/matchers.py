"""
Per-model matching.

One asynchronous contract for every format:

    await matches(descriptor, document, filename) -> MatcherResult

Checks run in a fixed order: empty document, establishment number on
every sheet/page the model reads, then the header row on every one of
those sheets/pages. The establishment check always comes first, so a
document with a wrong number and wrong headers reports
WRONG_ESTABLISHMENT_NUMBER. Any exception becomes GENERIC_ERROR.
"""

from typing import Any, Optional

import structlog

from models.matcher import MatcherResult
from models.model_descriptor import ModelDescriptor
from parsers import pdf_rows
from parsers.pdf_extractor import PdfDocument
from services import header_matcher
from utils import regex_utils

logger = structlog.get_logger(__name__)


def matches_tabular(descriptor: ModelDescriptor, document: Any) -> MatcherResult:
    if header_matcher.is_empty(document):
        return MatcherResult.EMPTY_FILE

    # Only invalid sheets is the same as an empty workbook
    sheets = header_matcher.valid_sheets(document, descriptor)
    if not sheets:
        return MatcherResult.EMPTY_FILE

    for _, rows in sheets:
        if not regex_utils.test([descriptor.establishment_number], rows):
            return MatcherResult.WRONG_ESTABLISHMENT_NUMBER

    for _, rows in sheets:
        if header_matcher.find_header_row(rows, descriptor) is None:
            return MatcherResult.WRONG_HEADER

    return MatcherResult.CORRECT


def matches_pdf(descriptor: ModelDescriptor, document: PdfDocument) -> MatcherResult:
    if document is None or document.is_empty:
        return MatcherResult.EMPTY_FILE

    pages = document.pages
    if descriptor.geometry.headers_on_first_page_only:
        pages = pages[:1]

    for page in pages:
        if not pdf_rows.page_has_match(page, descriptor.establishment_number):
            return MatcherResult.WRONG_ESTABLISHMENT_NUMBER

    for page in pages:
        cells = pdf_rows.get_headers(page, descriptor.geometry)
        if not pdf_rows.headers_match(cells, descriptor.pdf_columns):
            return MatcherResult.WRONG_HEADER

    return MatcherResult.CORRECT


async def matches(
    descriptor: ModelDescriptor,
    document: Any,
    filename: Optional[str] = None
) -> MatcherResult:
    """
    Decide whether a sanitised document has the model's layout.

    Args:
        descriptor: Model to test
        document: Sanitised table, workbook, or sanitised PdfDocument
        filename: Original filename (for logging)

    Returns:
        MatcherResult; never raises
    """
    try:
        if descriptor.is_pdf:
            result = matches_pdf(descriptor, document)
        else:
            result = matches_tabular(descriptor, document)
    except Exception as e:
        logger.warning(
            "matcher_failed",
            model=descriptor.model_id,
            filename=filename,
            error=str(e),
            error_type=type(e).__name__
        )
        return MatcherResult.GENERIC_ERROR

    if result == MatcherResult.CORRECT:
        logger.info("packing_list_matched", model=descriptor.model_id, filename=filename)
    return result
