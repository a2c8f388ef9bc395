"""
Canonical packing list models.

The envelope keeps the camelCase keys downstream consumers already read
(parserModel, dispatchLocationNumber, rowNumber...) via aliases; use
to_dict() to get the JSON-shaped output.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import Field

from models.base import BaseSchema
from models.matcher import DispatchKind


class RowLocation(BaseSchema):
    """Where an item came from: 1-based row on a sheet or PDF page."""
    row_number: int = Field(..., ge=1, alias="rowNumber")
    sheet_name: Optional[str] = Field(None, alias="sheetName")
    page_number: Optional[int] = Field(None, ge=1, alias="pageNumber")

    def describe(self) -> str:
        """Human-readable location used in failure messages."""
        if self.sheet_name is not None:
            return f'sheet "{self.sheet_name}" row {self.row_number}'
        if self.page_number is not None:
            return f"page {self.page_number} row {self.row_number}"
        return f"row {self.row_number}"


class PackingListItem(BaseSchema):
    """
    One consignment line.

    Values stay loosely typed (numbers may arrive as strings) until the
    validator has judged them; remove_bad_data() nulls the bad ones.
    """
    description: Any = None
    nature_of_products: Any = None
    type_of_treatment: Any = None
    commodity_code: Any = None
    number_of_packages: Any = None
    total_net_weight_kg: Any = None
    total_net_weight_unit: Any = None
    country_of_origin: Any = None
    nirms: Any = None
    row_location: Optional[RowLocation] = None


class BusinessChecks(BaseSchema):
    all_required_fields_present: bool = False
    failure_reasons: Optional[str] = None


class ParsedPackingList(BaseSchema):
    """Result envelope for one packing list."""
    parser_model: str = Field(..., alias="parserModel")
    registration_approval_number: Optional[str] = None
    establishment_numbers: list[str] = Field(default_factory=list)
    items: list[PackingListItem] = Field(default_factory=list)
    business_checks: BusinessChecks = Field(default_factory=BusinessChecks)
    dispatch_location_number: Any = Field(None, alias="dispatchLocationNumber")

    # Validation switches copied from the matched model
    unit_in_header: bool = Field(False, alias="unitInHeader")
    validate_country_of_origin: bool = Field(False, alias="validateCountryOfOrigin")
    blanket_nirms: bool = Field(False, alias="blanketNirms")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of one end-to-end parse.

    status tells a clean no-match (NO_MATCH, NO_REMOS, UNRECOGNISED)
    apart from an internal FAULT; packing_list is always populated.
    """
    status: DispatchKind
    packing_list: ParsedPackingList
    error: Optional[str] = None

    @property
    def is_fault(self) -> bool:
        return self.status == DispatchKind.FAULT
