"""
Packing list validation.

Runs column checks, list checks and (when the model asks for it)
NIRMS / country-of-origin / ineligibility checks, then turns the failing
row locations into one sentence per failing category:

    Product description is missing in sheet "Sheet1" row 3 and sheet "Sheet1" row 7.

Categories are reported in a fixed order: establishment number,
emptiness, multiple establishment numbers, omissions, invalid values,
then NIRMS / country of origin / prohibited items. At most three
locations are listed per sentence; the rest are counted.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

import structlog

from models.matcher import ParserModel
from models.packing_list import ParsedPackingList
from services import failure_reasons
from services import validator_utilities as checks
from services.reference_data_service import ReferenceData, get_reference_data

logger = structlog.get_logger(__name__)

MAX_LISTED_LOCATIONS = 3


@dataclass
class ValidationResult:
    all_required_fields_present: bool
    failure_reasons: Optional[str] = None
    categories: dict = field(default_factory=dict)


def summarise_locations(locations: list) -> str:
    """
    "A", "A and B", "A, B and C", or "A, B, C in addition to N other locations".
    """
    described = [location.describe() for location in locations]
    if len(described) <= 1:
        return "".join(described)
    if len(described) <= MAX_LISTED_LOCATIONS:
        return ", ".join(described[:-1]) + " and " + described[-1]
    listed = ", ".join(described[:MAX_LISTED_LOCATIONS])
    remaining = len(described) - MAX_LISTED_LOCATIONS
    return f"{listed} in addition to {remaining} other locations"


def failure_sentence(reason: str, locations: Optional[list] = None) -> str:
    if locations:
        return f"{reason} in {summarise_locations(locations)}.\n"
    return reason.rstrip(".") + ".\n"


def _locations(items: list, predicate: Callable) -> tuple:
    """(count of failing items, their row locations)."""
    failing = [item for item in items if predicate(item)]
    return len(failing), [item.row_location for item in failing if item.row_location is not None]


class PackingListValidator:
    """Validates one parsed packing list; holds no per-document state."""

    def __init__(self, reference: Optional[ReferenceData] = None):
        self.logger = logger.bind(service="packing_list_validator")
        self._reference = reference

    @property
    def reference(self) -> ReferenceData:
        return self._reference or get_reference_data()

    def _item_checks(self, packing_list: ParsedPackingList) -> list:
        """(reason, predicate) pairs in report order."""
        omissions = [
            (failure_reasons.IDENTIFIER_MISSING, checks.has_missing_identifier),
            (failure_reasons.DESCRIPTION_MISSING, checks.has_missing_description),
            (failure_reasons.PACKAGES_MISSING, checks.has_missing_packages),
            (failure_reasons.NET_WEIGHT_MISSING, checks.has_missing_net_weight),
        ]
        if not packing_list.unit_in_header:
            omissions.append((failure_reasons.NET_WEIGHT_UNIT_MISSING, checks.has_missing_net_weight_unit))

        invalid = [
            (failure_reasons.PRODUCT_CODE_INVALID, checks.has_invalid_product_code),
            (failure_reasons.PACKAGES_INVALID, checks.has_invalid_packages),
            (failure_reasons.NET_WEIGHT_INVALID, checks.has_invalid_net_weight),
        ]

        origin = []
        if packing_list.validate_country_of_origin:
            reference = self.reference
            origin = [
                (failure_reasons.NIRMS_MISSING, checks.has_missing_nirms),
                (failure_reasons.NIRMS_INVALID, checks.has_invalid_nirms),
                (failure_reasons.COO_MISSING, checks.has_missing_coo),
                (failure_reasons.COO_INVALID, lambda item: checks.has_invalid_coo(item, reference)),
                (failure_reasons.PROHIBITED_ITEM, lambda item: checks.has_ineligible_items(item, reference)),
            ]
        return omissions + invalid + origin

    def validate(self, packing_list: ParsedPackingList) -> ValidationResult:
        """
        Validate a parsed packing list.

        Returns:
            ValidationResult; failure_reasons is None when every check
            passes and for NOMATCH lists
        """
        model = packing_list.parser_model
        if model in (ParserModel.NOMATCH, ParserModel.UNRECOGNISED):
            return ValidationResult(all_required_fields_present=False)

        if model in ParserModel.NO_REMOS_MODELS:
            return ValidationResult(
                all_required_fields_present=False,
                failure_reasons=failure_sentence(failure_reasons.MISSING_REMOS),
            )

        sentences = []
        categories = {}

        if packing_list.registration_approval_number is None:
            sentences.append(failure_sentence(failure_reasons.MISSING_REMOS))
        if not packing_list.items:
            sentences.append(failure_sentence(failure_reasons.EMPTY))
        if len(set(packing_list.establishment_numbers)) > 1:
            sentences.append(failure_sentence(failure_reasons.MULTIPLE_RMS))

        for reason, predicate in self._item_checks(packing_list):
            count, locations = _locations(packing_list.items, predicate)
            if not count:
                continue
            categories[reason] = locations
            if reason == failure_reasons.NIRMS_MISSING and packing_list.blanket_nirms:
                # The blanket statement covers the whole document, not rows
                sentences.append(failure_sentence(reason))
            else:
                sentences.append(failure_sentence(reason, locations))

        if not sentences:
            return ValidationResult(all_required_fields_present=True)

        self.logger.info(
            "packing_list_failed_validation",
            model=model,
            categories=list(categories.keys()),
            establishment_numbers=len(set(packing_list.establishment_numbers)),
        )
        return ValidationResult(
            all_required_fields_present=False,
            failure_reasons="".join(sentences),
            categories=categories,
        )


def validate_packing_list(
    packing_list: ParsedPackingList,
    reference: Optional[ReferenceData] = None
) -> ValidationResult:
    return PackingListValidator(reference).validate(packing_list)
