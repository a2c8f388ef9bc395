"""
Packing list model catalog.

Every known retailer layout as a ModelDescriptor, plus the explicit
priority order in which the selection engine tries them per format.
Matching is first-match-wins, so order matters whenever two layouts
could both accept a document; never rely on dict iteration for it.

Adding a layout: declare a descriptor below and place its id in the
ORDER tuple for its format.
"""

from types import MappingProxyType

from models.matcher import DocumentFormat
from models.model_descriptor import (
    BlanketValue,
    ModelDescriptor,
    PdfColumn,
    PdfGeometry,
)

NET_WEIGHT = r"Net Weight"


# ===================
# SPREADSHEET MODELS
# ===================

ASDA1 = ModelDescriptor(
    model_id="ASDA1",
    document_format=DocumentFormat.SPREADSHEET,
    establishment_number=r"^RMS-GB-000015-\d{3}$",
    headers={
        "description": r"\[Description Of All Retail Goods\]",
        "nature_of_products": r"\[Nature Of Product\]",
        "type_of_treatment": r"\[Treatment Type\]",
        "number_of_packages": r"\[Number of Packages\]",
        "total_net_weight_kg": r"\[Net Weight\]",
    },
    optional_headers={
        "total_net_weight_unit": r"\[kilograms/grams\]",
    },
    deprecated=True,
)

ASDA3 = ModelDescriptor(
    model_id="ASDA3",
    document_format=DocumentFormat.SPREADSHEET,
    establishment_number=r"^RMS-GB-000015-\d{3}$",
    headers={
        "description": r"Description Of All Retail Goods",
        "nature_of_products": r"Nature of Product",
        "type_of_treatment": r"Treatment Type",
        "number_of_packages": r"Number of Packages",
        "total_net_weight_kg": NET_WEIGHT,
    },
    optional_headers={
        "total_net_weight_unit": r"kilograms/grams",
        "commodity_code": r"Commodity Code",
        "country_of_origin": r"Country of Origin",
        "nirms": r"NIRMs/Non-NIRMs",
    },
    validate_country_of_origin=True,
)

TESCO3 = ModelDescriptor(
    model_id="TESCO3",
    document_format=DocumentFormat.SPREADSHEET,
    establishment_number=r"RMS-GB-000022-(\d{3})?",
    headers={
        "description": r"Product Description",
        "commodity_code": r"Tariff Code UK",
        "number_of_packages": r"Packages",
        "total_net_weight_kg": NET_WEIGHT,
        "type_of_treatment": r"Treatment Type",
    },
    optional_headers={
        "country_of_origin": r"Country of Origin",
        "nirms": r"NIRMS / NON NIRMS",
    },
    find_unit_in_header=True,
    validate_country_of_origin=True,
)

FOWLERWELCH2 = ModelDescriptor(
    model_id="FOWLERWELCH2",
    document_format=DocumentFormat.SPREADSHEET,
    establishment_number=r"^RMS-GB-000216-\d{3}$",
    headers={
        "description": r"Description of goods",
        "commodity_code": r"Commodity code",
        "number_of_packages": r"No\.? of pkgs",
        "total_net_weight_kg": r"Item Net Weight",
        "nature_of_products": r"Nature of Product",
        "type_of_treatment": r"Type of Treatment",
    },
    optional_headers={
        "country_of_origin": r"Country of Origin",
        "nirms": r"NIRMS / NON NIRMS",
    },
    invalid_sheets=("GC REFERENCE", "GC REF"),
    find_unit_in_header=True,
    validate_country_of_origin=True,
)

KEPAK1 = ModelDescriptor(
    model_id="KEPAK1",
    document_format=DocumentFormat.SPREADSHEET,
    establishment_number=r"^RMS-GB-000280-\d{3}$",
    headers={
        "description": r"DESCRIPTION",
        "commodity_code": r"Tariff/Commodity",
        "number_of_packages": r"Cases",
        "total_net_weight_kg": r"Net Weight",
        "country_of_origin": r"Country of Origin",
    },
    blanket_nirms=BlanketValue(
        pattern=r"All goods on this manifest are NIRMS",
        value="NIRMS",
    ),
    blanket_treatment=BlanketValue(
        pattern=r"All goods are chilled",
        value="Chilled",
    ),
    value_transforms={
        "total_net_weight_kg": "strip_unit",
    },
    find_unit_in_header=True,
    validate_country_of_origin=True,
)


# ===================
# CSV MODELS
# ===================

ICELAND2 = ModelDescriptor(
    model_id="ICELAND2",
    document_format=DocumentFormat.CSV,
    establishment_number=r"RMS-GB-000040-\d{3}$",
    headers={
        "commodity_code": r"Tariff Code EU",
        "description": r"Product/Part Number description",
        "type_of_treatment": r"Treatment Type",
        "number_of_packages": r"Packages",
        "total_net_weight_kg": r"Net Weight/Package",
        "nature_of_products": r"Nature",
    },
    optional_headers={
        "nirms": r"NIRMS",
        "country_of_origin": r"Country of Origin Code",
    },
    find_unit_in_header=True,
    validate_country_of_origin=True,
)

ASDA4 = ModelDescriptor(
    model_id="ASDA4",
    document_format=DocumentFormat.CSV,
    establishment_number=r"^RMS-GB-000015-\d{3}$",
    headers={
        "commodity_code": r"classification_code",
        "description": r"article_description",
        "nature_of_products": r"article_nature",
        "type_of_treatment": r"treatment_type",
        "number_of_packages": r"quantity_ordered",
        "total_net_weight_kg": r"net_weight",
    },
    optional_headers={
        "nirms": r"nirms",
        "country_of_origin": r"country_of_origin",
    },
    find_unit_in_header=True,
    validate_country_of_origin=True,
)


# ===================
# PDF MODELS
# ===================

GIOVANNI3 = ModelDescriptor(
    model_id="GIOVANNI3",
    document_format=DocumentFormat.PDF,
    establishment_number=r"RMS-GB-000149(-\d{3})?",
    pdf_columns={
        "description": PdfColumn(r"DESCRIPTION", 125, 255),
        "commodity_code": PdfColumn(r"Commodity Code", 255, 350),
        "number_of_packages": PdfColumn(r"Quantity", 355, 389),
        "total_net_weight_kg": PdfColumn(r"Net", 389, 439),
    },
    geometry=PdfGeometry(
        min_headers_y=280,
        max_headers_y=300,
        min_row_cells=5,
    ),
    value_transforms={
        "commodity_code": "commodity_digits",
    },
    find_unit_in_header=True,
)

MANDS1 = ModelDescriptor(
    model_id="MANDS1",
    document_format=DocumentFormat.PDF,
    establishment_number=r"RMS-GB-000008-\d{3}",
    pdf_columns={
        "description": PdfColumn(r"Description", 60, 220),
        "commodity_code": PdfColumn(r"Commodity", 220, 300, value_pattern=r"^\d"),
        "number_of_packages": PdfColumn(r"Trays|Cases", 300, 360),
        "total_net_weight_kg": PdfColumn(r"Net Weight", 360, 430),
    },
    pdf_optional_columns={
        "country_of_origin": PdfColumn(r"Country of Origin", 430, 500),
        "nirms": PdfColumn(r"NIRMS", 500, 570),
    },
    geometry=PdfGeometry(
        min_headers_y=120,
        max_headers_y=145,
        footer=r"Disclaimer:",
        page_number=r"^Page \d+ of \d+$",
        headers_on_first_page_only=True,
        row_tolerance=1.0,
    ),
    value_transforms={
        "commodity_code": "commodity_digits",
    },
    find_unit_in_header=True,
    validate_country_of_origin=True,
)


# ===================
# REGISTRY
# ===================

MODELS = MappingProxyType({
    model.model_id: model
    for model in (
        ASDA1, ASDA3, TESCO3, FOWLERWELCH2, KEPAK1,
        ICELAND2, ASDA4,
        GIOVANNI3, MANDS1,
    )
})

# Priority order per format; first CORRECT wins
EXCEL_MODEL_ORDER = ("ASDA1", "ASDA3", "TESCO3", "FOWLERWELCH2", "KEPAK1")
CSV_MODEL_ORDER = ("ICELAND2", "ASDA4")
PDF_MODEL_ORDER = ("GIOVANNI3", "MANDS1")

_ORDERS = {
    DocumentFormat.SPREADSHEET: EXCEL_MODEL_ORDER,
    DocumentFormat.CSV: CSV_MODEL_ORDER,
    DocumentFormat.PDF: PDF_MODEL_ORDER,
}


def models_for(document_format: DocumentFormat) -> tuple:
    """Descriptors for a format in priority order, deprecated ones included."""
    return tuple(MODELS[model_id] for model_id in _ORDERS.get(document_format, ()))


def get_model(model_id: str) -> ModelDescriptor:
    return MODELS[model_id]
