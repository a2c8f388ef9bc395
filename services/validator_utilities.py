"""
Per-item validation predicates and cleanup helpers.

Each has_* predicate answers one question about one item and returns
True when the item FAILS that check. Items may be PackingListItem
models or plain dicts.
"""

import math
import re
from typing import Any, Optional

from services import failure_reasons
from services.reference_data_service import ReferenceData, get_reference_data

NIRMS_PATTERN = re.compile(r"^(?:yes|nirms|green|y|g)$|^green lane", re.IGNORECASE)
NOT_NIRMS_PATTERN = re.compile(r"^(?:no|red|n|r)$|^non[- ]?nirms|^red lane", re.IGNORECASE)
COO_PLACEHOLDER = "x"

_ITEM_FIELDS = (
    "description",
    "nature_of_products",
    "type_of_treatment",
    "commodity_code",
    "number_of_packages",
    "total_net_weight_kg",
    "total_net_weight_unit",
    "country_of_origin",
    "nirms",
)


def _get(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def is_null_or_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def to_number(value: Any) -> Optional[float]:
    """Finite float for ints, floats and numeric strings; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _is_invalid_quantity(value: Any) -> bool:
    if is_null_or_empty(value):
        return False
    number = to_number(value)
    return number is None or number < 0


# ===================
# COLUMN CHECKS
# ===================

def has_missing_identifier(item) -> bool:
    """No commodity code and not both nature of products and treatment."""
    has_code = not is_null_or_empty(_get(item, "commodity_code"))
    has_nature = not is_null_or_empty(_get(item, "nature_of_products"))
    has_treatment = not is_null_or_empty(_get(item, "type_of_treatment"))
    return not has_code and not (has_nature and has_treatment)


def has_invalid_product_code(item) -> bool:
    code = _get(item, "commodity_code")
    if is_null_or_empty(code) or isinstance(code, bool):
        return False
    return re.fullmatch(r"\d+", re.sub(r"\s+", "", str(code))) is None


def has_missing_description(item) -> bool:
    return is_null_or_empty(_get(item, "description"))


def has_missing_packages(item) -> bool:
    return is_null_or_empty(_get(item, "number_of_packages"))


def has_invalid_packages(item) -> bool:
    return _is_invalid_quantity(_get(item, "number_of_packages"))


def has_missing_net_weight(item) -> bool:
    return is_null_or_empty(_get(item, "total_net_weight_kg"))


def has_invalid_net_weight(item) -> bool:
    return _is_invalid_quantity(_get(item, "total_net_weight_kg"))


def has_missing_net_weight_unit(item) -> bool:
    return is_null_or_empty(_get(item, "total_net_weight_unit"))


# ===================
# NIRMS / COUNTRY OF ORIGIN
# ===================

def is_nirms(value: Any) -> bool:
    return isinstance(value, str) and bool(NIRMS_PATTERN.search(value.strip()))


def is_not_nirms(value: Any) -> bool:
    return isinstance(value, str) and bool(NOT_NIRMS_PATTERN.search(value.strip()))


def has_missing_nirms(item) -> bool:
    return is_null_or_empty(_get(item, "nirms"))


def has_invalid_nirms(item) -> bool:
    value = _get(item, "nirms")
    if is_null_or_empty(value):
        return False
    return not (is_nirms(value) or is_not_nirms(value))


def _country_codes(value: str) -> list[str]:
    return [code.strip() for code in value.split(",")]


def is_coo_placeholder(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == COO_PLACEHOLDER


def has_missing_coo(item) -> bool:
    """NIRMS items need a country of origin; non-NIRMS items are exempt."""
    return is_nirms(_get(item, "nirms")) and is_null_or_empty(_get(item, "country_of_origin"))


def has_invalid_coo(item, reference: Optional[ReferenceData] = None) -> bool:
    """
    NIRMS item whose country of origin is not "X" and not a comma-separated
    list of known ISO codes.
    """
    value = _get(item, "country_of_origin")
    if not is_nirms(_get(item, "nirms")) or is_null_or_empty(value):
        return False
    if is_coo_placeholder(value):
        return False
    if not isinstance(value, str):
        return True

    reference = reference or get_reference_data()
    return not all(
        code and reference.is_valid_iso_code(code)
        for code in _country_codes(value)
    )


def _same_treatment(left: Optional[str], right: Any) -> bool:
    left = (left or "").strip().lower()
    right = "" if is_null_or_empty(right) else str(right).strip().lower()
    return left == right


def has_ineligible_items(item, reference: Optional[ReferenceData] = None) -> bool:
    """
    NIRMS item matching a prohibited country + commodity prefix.

    Exception rules ("!T") for the pair take over completely: the item is
    eligible only when its treatment equals one of the carved-out
    treatments. Otherwise any matching standard rule makes the item
    ineligible when the rule has no treatment, the item has none, or the
    treatments are equal.
    """
    country = _get(item, "country_of_origin")
    code = _get(item, "commodity_code")
    if not is_nirms(_get(item, "nirms")) or is_null_or_empty(code) or not isinstance(country, str):
        return False
    if is_null_or_empty(country) or is_coo_placeholder(country):
        return False

    reference = reference or get_reference_data()
    countries = {c.upper() for c in _country_codes(country) if c}
    code = re.sub(r"\s+", "", str(code))
    treatment = _get(item, "type_of_treatment")

    matches = [
        rule for rule in reference.ineligible_rules
        if rule.country_of_origin.upper() in countries and code.startswith(rule.commodity_code)
    ]
    if not matches:
        return False

    exceptions = [rule for rule in matches if rule.is_exception]
    if exceptions:
        return not any(_same_treatment(rule.treatment, treatment) for rule in exceptions)

    if is_null_or_empty(treatment):
        return True
    return any(
        rule.type_of_treatment is None or _same_treatment(rule.type_of_treatment, treatment)
        for rule in matches
    )


# ===================
# CLEANUP
# ===================

def remove_empty_items(items: list) -> list:
    """Drop items whose every field (row_location aside) is null."""
    return [
        item for item in items
        if any(_get(item, name) is not None for name in _ITEM_FIELDS)
    ]


def remove_bad_data(items: list) -> list:
    """Null out package counts and net weights that are not numbers."""
    for item in items:
        for name in ("number_of_packages", "total_net_weight_kg"):
            value = _get(item, name)
            if value is not None and to_number(value) is None:
                if isinstance(item, dict):
                    item[name] = None
                else:
                    setattr(item, name, None)
    return items


# ===================
# PER-ITEM MESSAGE
# ===================

def item_failure_reasons(
    item,
    validate_country_of_origin: bool = False,
    unit_in_header: bool = False,
    reference: Optional[ReferenceData] = None,
) -> list[str]:
    """Every failure reason that applies to a single item, in report order."""
    checks = [
        (has_missing_identifier, failure_reasons.IDENTIFIER_MISSING),
        (has_invalid_product_code, failure_reasons.PRODUCT_CODE_INVALID),
        (has_missing_description, failure_reasons.DESCRIPTION_MISSING),
        (has_missing_packages, failure_reasons.PACKAGES_MISSING),
        (has_invalid_packages, failure_reasons.PACKAGES_INVALID),
        (has_missing_net_weight, failure_reasons.NET_WEIGHT_MISSING),
        (has_invalid_net_weight, failure_reasons.NET_WEIGHT_INVALID),
    ]
    if not unit_in_header:
        checks.append((has_missing_net_weight_unit, failure_reasons.NET_WEIGHT_UNIT_MISSING))
    reasons = [text for check, text in checks if check(item)]

    if validate_country_of_origin:
        reference = reference or get_reference_data()
        coo_checks = [
            (has_missing_nirms(item), failure_reasons.NIRMS_MISSING),
            (has_invalid_nirms(item), failure_reasons.NIRMS_INVALID),
            (has_missing_coo(item), failure_reasons.COO_MISSING),
            (has_invalid_coo(item, reference), failure_reasons.COO_INVALID),
            (has_ineligible_items(item, reference), failure_reasons.PROHIBITED_ITEM),
        ]
        reasons.extend(text for failed, text in coo_checks if failed)
    return reasons


def item_failure_message(
    item,
    validate_country_of_origin: bool = False,
    unit_in_header: bool = False,
    reference: Optional[ReferenceData] = None,
) -> Optional[str]:
    """Failure reasons for one item joined with "; ", or None when it passes."""
    reasons = item_failure_reasons(item, validate_country_of_origin, unit_in_header, reference)
    return "; ".join(reasons) if reasons else None
