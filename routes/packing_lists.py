"""
Packing list parsing routes.

Accepts an uploaded packing list, converts it to the shape the parser
engine reads and returns the parsed envelope.
"""

from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
import structlog

from config import settings
from exceptions import FileTooLargeError
from models.matcher import DocumentFormat
from parsers.table_converter import csv_to_rows, excel_to_sheets
from services.parser_service import get_packing_list_parser_service
from utils import file_extension

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/packing-lists", tags=["Packing Lists"])


def to_document(file_bytes: bytes, filename: Optional[str]):
    """
    Convert upload bytes by extension.

    PDFs and unknown formats go to the parser as raw bytes; the parser
    extracts the former and reports the latter as unrecognised.
    """
    document_format = file_extension.classify(filename)
    if document_format == DocumentFormat.SPREADSHEET:
        return excel_to_sheets(file_bytes, filename)
    if document_format == DocumentFormat.CSV:
        return csv_to_rows(file_bytes, filename)
    return file_bytes


# ===================
# ROUTES
# ===================

@router.post("/parse")
async def parse_packing_list(
    file: UploadFile = File(..., description="Packing list (.xlsx, .xls, .csv or .pdf)"),
    dispatch_location: Optional[str] = Form(None, description="Dispatch location echoed into the result"),
) -> dict:
    """
    Parse and validate an uploaded packing list.

    Returns:
        Envelope with parserModel, items and businessChecks

    Raises:
        422: File exceeds the upload limit, or the spreadsheet or CSV
             could not be read
    """
    logger.info(
        "packing_list_upload_received",
        filename=file.filename,
        content_type=file.content_type
    )

    file_bytes = await file.read()
    if len(file_bytes) > settings.max_upload_bytes:
        raise FileTooLargeError(len(file_bytes), settings.max_upload_bytes)

    document = to_document(file_bytes, file.filename)

    parser = get_packing_list_parser_service()
    outcome = await parser.parse(document, file.filename, dispatch_location)

    if outcome.is_fault:
        logger.warning(
            "packing_list_parse_fault",
            filename=file.filename,
            error=outcome.error
        )

    return outcome.packing_list.to_dict()
