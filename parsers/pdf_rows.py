"""
Coordinate-based row extraction for PDF packing lists.

Works purely on fragment geometry: a model declares the y band holding
its header cells and the x range of every column, and rows are built by
clustering fragments on y. Columns are assigned by x range rather than
by fragment index because the number of fragments per row drifts
between PDFs produced from the same template.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Pattern

import structlog

from models.model_descriptor import ModelDescriptor, PdfColumn, PdfGeometry
from parsers.pdf_extractor import PdfDocument, PdfFragment, PdfPage
from utils import regex_utils

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PdfRow:
    """An accepted data row: 1-based row number within its page."""
    page_number: int
    row_number: int
    y: float
    fragments: tuple


@dataclass
class HeaderInfo:
    """Header cells of a page (rounded x -> text) and what they reveal."""
    cells: dict = field(default_factory=dict)
    optional_fields: set = field(default_factory=set)
    net_weight_unit: Optional[str] = None

    @property
    def has_nirms(self) -> bool:
        return "nirms" in self.optional_fields

    @property
    def has_country_of_origin(self) -> bool:
        return "country_of_origin" in self.optional_fields


# ===================
# PREPROCESSING
# ===================

def sanitise_page(page: PdfPage) -> PdfPage:
    """Drop zero-width fragments and sort by (y, x); sort is stable."""
    fragments = [fragment for fragment in page.fragments if fragment.width != 0]
    fragments.sort(key=lambda fragment: (fragment.y, fragment.x))
    return PdfPage(number=page.number, fragments=fragments)


def sanitise_document(document: PdfDocument) -> PdfDocument:
    return PdfDocument(pages=[sanitise_page(page) for page in document.pages])


# ===================
# HEADERS
# ===================

def get_headers(page: PdfPage, geometry: PdfGeometry) -> dict[int, str]:
    """
    Group header-band fragments into cells keyed by rounded x.

    Multi-line labels ("Net" above "Weight") share an x and are joined
    top to bottom.
    """
    cells: dict[int, list[str]] = {}
    for fragment in page.fragments:
        if geometry.min_headers_y <= fragment.y <= geometry.max_headers_y:
            text = fragment.text.strip()
            if text:
                cells.setdefault(round(fragment.x), []).append(text)
    return {x: " ".join(parts) for x, parts in sorted(cells.items())}


def _find_header(cells: dict[int, str], column: PdfColumn) -> Optional[str]:
    for x, text in cells.items():
        if column.pattern.search(text) and column.x1 <= x <= column.x2:
            return text
    return None


def headers_match(cells: dict[int, str], columns: Mapping[str, PdfColumn]) -> bool:
    """Every column's label is present, positioned inside its x range."""
    return all(_find_header(cells, column) is not None for column in columns.values())


def header_info(page: PdfPage, descriptor: ModelDescriptor) -> HeaderInfo:
    """Header cells plus optional-column flags and the header net weight unit."""
    cells = get_headers(page, descriptor.geometry)
    info = HeaderInfo(cells=cells)
    for name, column in descriptor.pdf_optional_columns.items():
        if _find_header(cells, column) is not None:
            info.optional_fields.add(name)

    weight_column = descriptor.pdf_columns.get("total_net_weight_kg")
    if weight_column is not None:
        info.net_weight_unit = regex_utils.find_unit(_find_header(cells, weight_column))
    return info


# ===================
# ROWS
# ===================

def _first_y(page: PdfPage, pattern: Optional[Pattern]) -> Optional[float]:
    if pattern is None:
        return None
    for fragment in page.fragments:
        if pattern.search(fragment.text):
            return fragment.y
    return None


def row_bounds(page: PdfPage, geometry: PdfGeometry, first_page: bool) -> tuple:
    """
    y range holding data rows on a page.

    Returns (start_y, end_y, footer_seen). Rows lie strictly below
    start_y. When the model declares a footer, rows lie strictly above
    end_y: the footer if the page shows it, otherwise the page's last y
    (page furniture such as print stamps). Models without a footer read
    down to and including the last y.
    """
    start_y = geometry.max_headers_y
    if not first_page:
        marker_y = _first_y(page, geometry.page_number)
        if marker_y is not None:
            start_y = marker_y

    footer_y = _first_y(page, geometry.footer)
    if footer_y is not None:
        return start_y, footer_y, True

    last_y = max((fragment.y for fragment in page.fragments), default=start_y)
    return start_y, last_y, False


def group_rows(fragments: list[PdfFragment], tolerance: float) -> list[tuple]:
    """
    Cluster fragments into (y, fragments) rows.

    A fragment joins the current row while it is within `tolerance` of
    the row's first y. Fragments in each row are ordered by x.
    """
    rows: list[tuple] = []
    for fragment in sorted(fragments, key=lambda fragment: (fragment.y, fragment.x)):
        if rows and fragment.y - rows[-1][0] <= tolerance:
            rows[-1][1].append(fragment)
        else:
            rows.append((fragment.y, [fragment]))
    return [(y, sorted(members, key=lambda fragment: fragment.x)) for y, members in rows]


def extract_page_rows(page: PdfPage, geometry: PdfGeometry, first_page: bool) -> tuple:
    """
    Accepted data rows of one page.

    Returns (rows, footer_seen). Accepting stops at the first row with
    fewer than geometry.min_row_cells fragments or whose first fragment
    is "0" (a totals or drag-down line).
    """
    start_y, end_y, footer_seen = row_bounds(page, geometry, first_page)

    def in_table(fragment: PdfFragment) -> bool:
        if fragment.y <= start_y:
            return False
        if geometry.footer is not None:
            return fragment.y < end_y
        return fragment.y <= end_y

    candidates = [fragment for fragment in page.fragments if in_table(fragment)]
    rows = []
    for y, members in group_rows(candidates, geometry.row_tolerance):
        if len(members) < geometry.min_row_cells or members[0].text.strip() == "0":
            break
        rows.append(PdfRow(
            page_number=page.number,
            row_number=len(rows) + 1,
            y=y,
            fragments=tuple(members),
        ))
    return rows, footer_seen


def extract_document_rows(document: PdfDocument, descriptor: ModelDescriptor) -> list[PdfRow]:
    """
    Data rows across all pages, in page order.

    A page whose geometry cannot be processed contributes no rows. Once a
    page shows the footer, later pages are never read.
    """
    geometry = descriptor.geometry
    rows: list[PdfRow] = []
    for index, page in enumerate(document.pages):
        try:
            page_rows, footer_seen = extract_page_rows(page, geometry, first_page=index == 0)
        except Exception as e:
            logger.warning(
                "pdf_page_rows_failed",
                model=descriptor.model_id,
                page=page.number,
                error=str(e)
            )
            continue
        rows.extend(page_rows)
        if footer_seen:
            break
    return rows


def assign_columns(row: PdfRow, columns: Mapping[str, PdfColumn]) -> dict[str, Optional[str]]:
    """
    Map a row's fragments to fields by x range (and value pattern, if any).

    Fragments in the same column are joined with a space.
    """
    values = {}
    for name, column in columns.items():
        parts = []
        for fragment in row.fragments:
            text = fragment.text.strip()
            if not text or not column.contains(fragment.x):
                continue
            if column.value_pattern is not None and not column.value_pattern.search(text):
                continue
            parts.append(text)
        values[name] = " ".join(parts) if parts else None
    return values


# ===================
# ESTABLISHMENT NUMBERS
# ===================

def page_has_match(page: PdfPage, pattern: Pattern) -> bool:
    return regex_utils.test([pattern], page.text_rows())


def extract_establishment_numbers(document: PdfDocument) -> list[str]:
    """Distinct establishment numbers anywhere on any page."""
    found: list[str] = []
    for page in document.pages:
        regex_utils.find_establishment_numbers(page.text_rows(), found)
    return found
