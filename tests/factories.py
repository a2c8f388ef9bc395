"""
Test data factories.

Builders for packing list items, envelopes and PDF documents.
"""

from typing import Optional

from models.packing_list import PackingListItem, ParsedPackingList, RowLocation
from parsers.pdf_extractor import PdfDocument, PdfFragment, PdfPage


class ItemFactory:
    """
    Factory for creating PackingListItems.

    Usage:
        # Valid item with defaults
        item = ItemFactory.create()

        # Override fields
        item = ItemFactory.create(row_number=4, description=None)
    """

    DEFAULTS = {
        "description": "CHEESE",
        "nature_of_products": "DAIRY",
        "type_of_treatment": "Chilled",
        "commodity_code": "0406",
        "number_of_packages": 2,
        "total_net_weight_kg": 1.5,
        "total_net_weight_unit": "kg",
        "country_of_origin": "GB",
        "nirms": "NIRMS",
    }

    @classmethod
    def create(
        cls,
        row_number: int = 2,
        sheet_name: Optional[str] = "Sheet1",
        page_number: Optional[int] = None,
        **fields
    ) -> PackingListItem:
        values = {**cls.DEFAULTS, **fields}
        return PackingListItem(
            **values,
            row_location=RowLocation(
                row_number=row_number,
                sheet_name=sheet_name,
                page_number=page_number,
            ),
        )

    @classmethod
    def create_batch(cls, count: int, start_row: int = 2, **fields) -> list[PackingListItem]:
        return [cls.create(row_number=start_row + i, **fields) for i in range(count)]


class PackingListFactory:
    """Factory for creating ParsedPackingList envelopes."""

    @classmethod
    def create(cls, items: Optional[list] = None, **fields) -> ParsedPackingList:
        values = {
            "parser_model": "TESCO3",
            "registration_approval_number": "RMS-GB-000022-001",
            "establishment_numbers": ["RMS-GB-000022-001"],
            "items": [ItemFactory.create()] if items is None else items,
        }
        values.update(fields)
        return ParsedPackingList(**values)


def fragment(x: float, y: float, text: str, width: float = 10.0) -> PdfFragment:
    return PdfFragment(x=x, y=y, text=text, width=width)


def pdf_document(*pages: list) -> PdfDocument:
    """PdfDocument from lists of fragments; pages numbered from 1."""
    return PdfDocument(pages=[
        PdfPage(number=number, fragments=fragments)
        for number, fragments in enumerate(pages, start=1)
    ])


# ===================
# PDF LAYOUTS
# ===================

def giovanni_header(y: float = 290.0) -> list:
    return [
        fragment(130, y, "DESCRIPTION"),
        fragment(260, y, "Commodity Code"),
        fragment(360, y, "Quantity"),
        fragment(395, y - 5, "Net"),
        fragment(395, y + 5, "Weight (KG)"),
    ]


def giovanni_row(y: float, description: str, code: str, quantity: str, weight: str) -> list:
    return [
        fragment(40, y, "1"),
        fragment(130, y, description),
        fragment(260, y, code),
        fragment(360, y, quantity),
        fragment(395, y, weight),
    ]


def giovanni_page(rows: list, establishment: str = "RMS-GB-000149-001") -> list:
    """First page of a GIOVANNI3 packing list with the given (description, code, qty, kg) rows."""
    fragments = [fragment(40, 100, establishment)] + giovanni_header()
    for index, row in enumerate(rows):
        fragments.extend(giovanni_row(320 + index * 15, *row))
    return fragments


def mands_header(y: float = 130.0, optional: bool = True) -> list:
    fragments = [
        fragment(70, y, "Description"),
        fragment(230, y, "Commodity Code"),
        fragment(310, y, "Trays/Cases"),
        fragment(370, y, "Net Weight (kg)"),
    ]
    if optional:
        fragments += [
            fragment(440, y, "Country of Origin"),
            fragment(510, y, "NIRMS"),
        ]
    return fragments


def mands_row(y: float, description: str, code: str, trays: str, weight: str,
              country: str = "GB", nirms: str = "NIRMS") -> list:
    return [
        fragment(70, y, description),
        fragment(230, y, code),
        fragment(310, y, trays),
        fragment(370, y, weight),
        fragment(440, y, country),
        fragment(510, y, nirms),
    ]


def page_stamp(y: float = 800.0, text: str = "Printed 01/10/2025") -> list:
    """Print stamp at the foot of a page, below any table rows."""
    return [fragment(70, y, text)]
