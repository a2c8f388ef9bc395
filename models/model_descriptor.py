"""
Declarative packing list model descriptors.

A descriptor is a plain immutable value describing one retailer layout:
its establishment number pattern, the header labels (or PDF column
geometry) that map onto canonical item fields, and the flags that tune
validation. The catalog in services/model_catalog.py is built from these.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
import re
from typing import Mapping, Optional, Pattern, Union

from models.matcher import DocumentFormat

PatternLike = Union[str, Pattern]

# Canonical item fields, in envelope order
ITEM_FIELDS = (
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

# Fields consulted by degenerate-row filtering
PRIMARY_FIELDS = (
    "description",
    "commodity_code",
    "number_of_packages",
    "total_net_weight_kg",
)

# Named value transforms a descriptor may apply to a mapped cell
VALUE_TRANSFORMS = ("strip_unit", "commodity_digits")


def compile_pattern(pattern: PatternLike) -> Pattern:
    """Compile a label pattern case-insensitively unless already compiled."""
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, re.IGNORECASE)


def _freeze_fields(name: str, mapping: Optional[Mapping], convert) -> MappingProxyType:
    frozen = {}
    for key, value in dict(mapping or {}).items():
        if key not in ITEM_FIELDS:
            raise ValueError(f"{name}: unknown item field '{key}'")
        frozen[key] = convert(value)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class PdfColumn:
    """A PDF column: header label plus the x-range its values occupy."""
    pattern: PatternLike
    x1: float
    x2: float
    value_pattern: Optional[PatternLike] = None

    def __post_init__(self):
        object.__setattr__(self, "pattern", compile_pattern(self.pattern))
        if self.value_pattern is not None:
            object.__setattr__(self, "value_pattern", compile_pattern(self.value_pattern))
        if self.x1 > self.x2:
            raise ValueError(f"PdfColumn x1 ({self.x1}) must not exceed x2 ({self.x2})")

    def contains(self, x: float) -> bool:
        return self.x1 <= round(x) <= self.x2


@dataclass(frozen=True)
class BlanketValue:
    """A document-wide statement that stands in for a per-row column."""
    pattern: PatternLike
    value: str

    def __post_init__(self):
        object.__setattr__(self, "pattern", compile_pattern(self.pattern))


@dataclass(frozen=True)
class PdfGeometry:
    """
    Page geometry for coordinate-based models.

    Attributes:
        min_headers_y / max_headers_y: y band holding the header cells
        footer: marker ending the table; stops all later pages once seen
        page_number: marker above the table on continuation pages
        min_row_cells: rows with fewer fragments end the table
        headers_on_first_page_only: continuation pages repeat no headers
        row_tolerance: y distance within which fragments share a row
    """
    min_headers_y: float
    max_headers_y: float
    footer: Optional[PatternLike] = None
    page_number: Optional[PatternLike] = None
    min_row_cells: int = 1
    headers_on_first_page_only: bool = False
    row_tolerance: float = 1.0

    def __post_init__(self):
        if self.footer is not None:
            object.__setattr__(self, "footer", compile_pattern(self.footer))
        if self.page_number is not None:
            object.__setattr__(self, "page_number", compile_pattern(self.page_number))
        if self.min_headers_y > self.max_headers_y:
            raise ValueError("min_headers_y must not exceed max_headers_y")


@dataclass(frozen=True)
class ModelDescriptor:
    """
    One packing list layout.

    Tabular models declare `headers` (canonical field -> label pattern);
    PDF models declare `pdf_columns` plus `geometry`. Only the fields a
    descriptor declares itself are consulted; the mappings are copied
    into read-only proxies on construction.
    """
    model_id: str
    document_format: DocumentFormat
    establishment_number: PatternLike
    headers: Mapping[str, PatternLike] = field(default_factory=dict)
    optional_headers: Mapping[str, PatternLike] = field(default_factory=dict)
    pdf_columns: Mapping[str, PdfColumn] = field(default_factory=dict)
    pdf_optional_columns: Mapping[str, PdfColumn] = field(default_factory=dict)
    geometry: Optional[PdfGeometry] = None
    value_transforms: Mapping[str, str] = field(default_factory=dict)
    blanket_nirms: Optional[BlanketValue] = None
    blanket_treatment: Optional[BlanketValue] = None
    invalid_sheets: tuple = ()
    find_unit_in_header: bool = False
    validate_country_of_origin: bool = False
    deprecated: bool = False

    def __post_init__(self):
        set_ = object.__setattr__
        set_(self, "establishment_number", compile_pattern(self.establishment_number))
        set_(self, "headers", _freeze_fields(self.model_id, self.headers, compile_pattern))
        set_(self, "optional_headers",
             _freeze_fields(self.model_id, self.optional_headers, compile_pattern))
        set_(self, "pdf_columns", _freeze_fields(self.model_id, self.pdf_columns, _as_column))
        set_(self, "pdf_optional_columns",
             _freeze_fields(self.model_id, self.pdf_optional_columns, _as_column))
        set_(self, "value_transforms",
             _freeze_fields(self.model_id, self.value_transforms, _as_transform))
        set_(self, "invalid_sheets", tuple(self.invalid_sheets))

        if self.document_format == DocumentFormat.PDF:
            if self.geometry is None or not self.pdf_columns:
                raise ValueError(f"{self.model_id}: PDF models need geometry and pdf_columns")
        elif not self.headers:
            raise ValueError(f"{self.model_id}: tabular models need headers")

    @property
    def is_pdf(self) -> bool:
        return self.document_format == DocumentFormat.PDF

    @property
    def has_blanket_nirms(self) -> bool:
        return self.blanket_nirms is not None


def _as_column(value) -> PdfColumn:
    if not isinstance(value, PdfColumn):
        raise TypeError(f"expected PdfColumn, got {type(value).__name__}")
    return value


def _as_transform(value: str) -> str:
    if value not in VALUE_TRANSFORMS:
        raise ValueError(f"unknown value transform '{value}'")
    return value
