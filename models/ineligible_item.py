"""
Ineligible item rules.

A rule prohibits a country of origin + commodity code prefix, optionally
narrowed to one treatment. A treatment starting with "!" marks an
exception: the named treatment is the only legal one for that pair.
"""

from dataclasses import dataclass
from typing import Optional

EXCEPTION_PREFIX = "!"


@dataclass(frozen=True)
class IneligibleRule:
    country_of_origin: str
    commodity_code: str
    type_of_treatment: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "IneligibleRule":
        treatment = data.get("type_of_treatment")
        return cls(
            country_of_origin=str(data["country_of_origin"]).strip(),
            commodity_code=str(data["commodity_code"]).strip(),
            type_of_treatment=treatment.strip() if isinstance(treatment, str) and treatment.strip() else None,
        )

    @property
    def is_exception(self) -> bool:
        return bool(self.type_of_treatment) and self.type_of_treatment.startswith(EXCEPTION_PREFIX)

    @property
    def treatment(self) -> Optional[str]:
        """Treatment without the exception marker."""
        if self.is_exception:
            return self.type_of_treatment[len(EXCEPTION_PREFIX):].strip() or None
        return self.type_of_treatment

    @property
    def key(self) -> tuple:
        return (self.country_of_origin, self.commodity_code, self.type_of_treatment)
