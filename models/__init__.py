"""
Models for packing list parsing.

Pydantic schemas for the result envelope; frozen dataclasses for the
static model catalog and ineligible-item rules.
"""

from models.base import BaseSchema
from models.matcher import (
    DocumentFormat,
    MatcherResult,
    ParserModel,
    DispatchKind,
    DispatchResult,
)
from models.model_descriptor import (
    ITEM_FIELDS,
    PRIMARY_FIELDS,
    ModelDescriptor,
    PdfColumn,
    PdfGeometry,
    BlanketValue,
)
from models.packing_list import (
    RowLocation,
    PackingListItem,
    BusinessChecks,
    ParsedPackingList,
    ParseOutcome,
)
from models.ineligible_item import IneligibleRule

__all__ = [
    # Base
    "BaseSchema",

    # Matching
    "DocumentFormat",
    "MatcherResult",
    "ParserModel",
    "DispatchKind",
    "DispatchResult",

    # Catalog
    "ITEM_FIELDS",
    "PRIMARY_FIELDS",
    "ModelDescriptor",
    "PdfColumn",
    "PdfGeometry",
    "BlanketValue",

    # Envelope
    "RowLocation",
    "PackingListItem",
    "BusinessChecks",
    "ParsedPackingList",
    "ParseOutcome",

    # Rules
    "IneligibleRule",
]
