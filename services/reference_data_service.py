"""
Reference data for country-of-origin and ineligibility checks.

ISO country codes and ineligible item rules are loaded once from JSON
files and never mutated afterwards, so validation needs no locking.
"""

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from config import settings
from exceptions import ReferenceDataError
from models.ineligible_item import IneligibleRule

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReferenceData:
    """Upper-cased ISO codes and de-duplicated ineligible rules."""
    iso_codes: frozenset = field(default_factory=frozenset)
    ineligible_rules: tuple = field(default_factory=tuple)

    @classmethod
    def build(cls, iso_codes: Iterable[str], rules: Iterable[IneligibleRule]) -> "ReferenceData":
        return cls(
            iso_codes=frozenset(str(code).strip().upper() for code in iso_codes),
            ineligible_rules=deduplicate_rules(rules),
        )

    def is_valid_iso_code(self, code: str) -> bool:
        return code.strip().upper() in self.iso_codes


def deduplicate_rules(rules: Iterable[IneligibleRule]) -> tuple:
    """
    Drop repeated (country, commodity, treatment) rules.

    The last occurrence wins and takes the position of the first.
    """
    unique: dict = {}
    for rule in rules:
        unique[rule.key] = rule
    return tuple(unique.values())


def _read_json(path: Path, source: str) -> list:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ReferenceDataError(source, str(e), details={"path": str(path)}) from e
    if not isinstance(data, list):
        raise ReferenceDataError(source, "expected a JSON list", details={"path": str(path)})
    return data


def load_reference_data(
    iso_codes_path: Union[str, Path, None] = None,
    ineligible_items_path: Union[str, Path, None] = None,
) -> ReferenceData:
    """
    Load ISO codes and ineligible item rules from JSON.

    Raises:
        ReferenceDataError: If a file is missing or malformed
    """
    iso_path = Path(iso_codes_path or settings.iso_codes_path)
    rules_path = Path(ineligible_items_path or settings.ineligible_items_path)

    iso_codes = _read_json(iso_path, "iso_codes")
    try:
        rules = [IneligibleRule.from_dict(entry) for entry in _read_json(rules_path, "ineligible_items")]
    except (KeyError, TypeError, AttributeError) as e:
        raise ReferenceDataError("ineligible_items", f"malformed rule: {e}") from e

    data = ReferenceData.build(iso_codes, rules)
    logger.info(
        "reference_data_loaded",
        iso_codes=len(data.iso_codes),
        ineligible_rules=len(data.ineligible_rules),
        duplicate_rules=len(rules) - len(data.ineligible_rules)
    )
    return data


# Singleton instance
_reference_data: Optional[ReferenceData] = None


def get_reference_data() -> ReferenceData:
    """Get reference data, loading it from the configured files on first use."""
    global _reference_data
    if _reference_data is None:
        _reference_data = load_reference_data()
    return _reference_data


def set_reference_data(data: Optional[ReferenceData]) -> None:
    """Install reference data (startup, tests). None forces a reload on next use."""
    global _reference_data
    _reference_data = data
