"""
Result combiner.

Assembles the packing list envelope from what a parser found.
"""

from typing import Any, Iterable, Optional

from models.model_descriptor import ModelDescriptor
from models.packing_list import BusinessChecks, PackingListItem, ParsedPackingList


def combine(
    registration_approval_number: Optional[str],
    items: list[PackingListItem],
    all_required_fields_present: bool,
    parser_model: str,
    establishment_numbers: Optional[Iterable[str]] = None,
    descriptor: Optional[ModelDescriptor] = None,
    dispatch_location_number: Any = None,
) -> ParsedPackingList:
    """
    Build a ParsedPackingList.

    Validation switches (unit in header, country-of-origin checks,
    blanket NIRMS) are copied from the descriptor and default to off.
    """
    return ParsedPackingList(
        parser_model=parser_model,
        registration_approval_number=registration_approval_number,
        establishment_numbers=list(dict.fromkeys(establishment_numbers or [])),
        items=list(items),
        business_checks=BusinessChecks(all_required_fields_present=all_required_fields_present),
        dispatch_location_number=dispatch_location_number,
        unit_in_header=bool(descriptor and descriptor.find_unit_in_header),
        validate_country_of_origin=bool(descriptor and descriptor.validate_country_of_origin),
        blanket_nirms=bool(descriptor and descriptor.has_blanket_nirms),
    )


def empty(parser_model: str, dispatch_location_number: Any = None) -> ParsedPackingList:
    """Envelope with no items, for sentinels and faults."""
    return combine(None, [], False, parser_model, dispatch_location_number=dispatch_location_number)
