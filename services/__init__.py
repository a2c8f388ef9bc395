"""
Business logic services.

Model selection, field mapping, validation and the end-to-end parser.
"""

from services.reference_data_service import (
    ReferenceData,
    load_reference_data,
    get_reference_data,
    set_reference_data,
)
from services.parser_selection_service import ParserSelectionService, get_parser_selection_service
from services.packing_list_validator import (
    PackingListValidator,
    ValidationResult,
    validate_packing_list,
)
from services.parser_service import PackingListParserService, get_packing_list_parser_service

__all__ = [
    "ReferenceData",
    "load_reference_data",
    "get_reference_data",
    "set_reference_data",
    "ParserSelectionService",
    "get_parser_selection_service",
    "PackingListValidator",
    "ValidationResult",
    "validate_packing_list",
    "PackingListParserService",
    "get_packing_list_parser_service",
]
