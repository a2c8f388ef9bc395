"""
Unit tests for per-model matching.

Run: pytest tests/unit/test_matchers.py -v
"""

import pytest

from models.matcher import MatcherResult
from parsers.pdf_extractor import PdfDocument
from services import matchers
from services.model_catalog import (
    FOWLERWELCH2,
    GIOVANNI3,
    ICELAND2,
    KEPAK1,
    MANDS1,
    MODELS,
    TESCO3,
)
from tests.factories import (
    fragment,
    giovanni_page,
    mands_header,
    mands_row,
    pdf_document,
)

ALL_MODELS = list(MODELS.values())


def empty_document(descriptor):
    if descriptor.is_pdf:
        return PdfDocument()
    if descriptor.document_format.value == "csv":
        return []
    return {}


def wrong_establishment_document(descriptor):
    """Right shape, but neither the establishment number nor the headers."""
    if descriptor.is_pdf:
        return pdf_document([fragment(10, 10, "INCORRECT")])
    if descriptor.document_format.value == "csv":
        return [["INCORRECT"]]
    return {"Sheet1": [{"A": "INCORRECT"}]}


def tesco_workbook(establishment="RMS-GB-000022-001"):
    return {
        "Input Data Sheet": [
            {"A": None, "B": establishment, "C": None, "D": None, "E": None},
            {
                "A": "Product Description",
                "B": "Tariff Code UK",
                "C": "Treatment Type",
                "D": "Packages",
                "E": "Net Weight (KG)",
            },
            {"A": "CHEESE", "B": "0406", "C": "Chilled", "D": 2, "E": 1.5},
        ],
    }


def kepak_workbook():
    return {
        "KEPAK": [
            {"A": "RMS-GB-000280-001", "B": None, "C": None, "D": None, "E": None},
            {"A": "All goods on this manifest are NIRMS", "B": None, "C": None, "D": None, "E": None},
            {
                "A": "DESCRIPTION",
                "B": "Tariff/Commodity",
                "C": "Cases",
                "D": "Net Weight (KG)",
                "E": "Country of Origin",
            },
            {"A": "BEEF MINCE", "B": "0201300090", "C": 4, "D": "10.5 kg", "E": "IE"},
        ],
    }


def fowler_workbook():
    return {
        "Customer Order": [
            {"A": "RMS-GB-000216-001", "B": None, "C": None, "D": None, "E": None, "F": None},
            {
                "A": "Description of goods",
                "B": "Commodity code",
                "C": "No. of pkgs",
                "D": "Item Net Weight (kg)",
                "E": "Nature of Product",
                "F": "Type of Treatment",
            },
            {"A": "YOGHURT", "B": "0403", "C": 5, "D": 2.5, "E": "Dairy", "F": "Chilled"},
        ],
        "GC REFERENCE": [
            {"A": "lookup"},
        ],
    }


class TestEveryModel:
    """Behaviour every catalog model shares."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("descriptor", ALL_MODELS, ids=lambda d: d.model_id)
    async def test_empty_file(self, descriptor):
        """An empty document is EMPTY_FILE."""
        result = await matchers.matches(descriptor, empty_document(descriptor), "empty")
        assert result == MatcherResult.EMPTY_FILE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("descriptor", ALL_MODELS, ids=lambda d: d.model_id)
    async def test_wrong_establishment_checked_first(self, descriptor):
        """Wrong number and wrong headers reports the establishment number."""
        result = await matchers.matches(descriptor, wrong_establishment_document(descriptor), "x")
        assert result == MatcherResult.WRONG_ESTABLISHMENT_NUMBER

    @pytest.mark.asyncio
    @pytest.mark.parametrize("descriptor", ALL_MODELS, ids=lambda d: d.model_id)
    async def test_exception_becomes_generic_error(self, descriptor):
        """Malformed input never raises."""
        result = await matchers.matches(descriptor, 42, "broken")
        assert result == MatcherResult.GENERIC_ERROR


class TestTabularMatching:
    """Tests for spreadsheet and CSV models."""

    @pytest.mark.asyncio
    async def test_tesco_correct(self):
        """Establishment number and headers present."""
        result = await matchers.matches(TESCO3, tesco_workbook(), "tesco.xlsx")
        assert result == MatcherResult.CORRECT

    @pytest.mark.asyncio
    async def test_wrong_header(self):
        """Right number, missing a required header."""
        workbook = tesco_workbook()
        workbook["Input Data Sheet"][1]["E"] = "Weight"

        result = await matchers.matches(TESCO3, workbook, "tesco.xlsx")

        assert result == MatcherResult.WRONG_HEADER

    @pytest.mark.asyncio
    async def test_every_sheet_needs_establishment_number(self):
        """A second sheet without the number fails the match."""
        workbook = tesco_workbook()
        workbook["Sheet2"] = [{"A": "Product Description"}]

        result = await matchers.matches(TESCO3, workbook, "tesco.xlsx")

        assert result == MatcherResult.WRONG_ESTABLISHMENT_NUMBER

    @pytest.mark.asyncio
    async def test_invalid_sheets_ignored(self):
        """Named reference sheets are not checked."""
        result = await matchers.matches(FOWLERWELCH2, fowler_workbook(), "fowler.xlsx")
        assert result == MatcherResult.CORRECT

    @pytest.mark.asyncio
    async def test_only_invalid_sheets_is_empty(self):
        """A workbook holding only invalid sheets is EMPTY_FILE."""
        workbook = {"GC REFERENCE": [{"A": "RMS-GB-000216-001"}]}

        result = await matchers.matches(FOWLERWELCH2, workbook, "fowler.xlsx")

        assert result == MatcherResult.EMPTY_FILE

    @pytest.mark.asyncio
    async def test_kepak_correct(self):
        """KEPAK1 layout is recognised."""
        result = await matchers.matches(KEPAK1, kepak_workbook(), "kepak.xlsx")
        assert result == MatcherResult.CORRECT

    @pytest.mark.asyncio
    async def test_iceland_csv_correct(self, iceland_csv_rows):
        """ICELAND2 CSV layout is recognised."""
        result = await matchers.matches(ICELAND2, iceland_csv_rows, "iceland.csv")
        assert result == MatcherResult.CORRECT

    @pytest.mark.asyncio
    async def test_blank_table_is_empty(self):
        """Rows holding only None are EMPTY_FILE."""
        result = await matchers.matches(ICELAND2, [[None, None], [None]], "blank.csv")
        assert result == MatcherResult.EMPTY_FILE


class TestPdfMatching:
    """Tests for coordinate models."""

    @pytest.mark.asyncio
    async def test_giovanni_correct(self):
        """Headers inside the band and x ranges match."""
        document = pdf_document(giovanni_page([("CHEESE", "0406", "2", "1.5")]))

        result = await matchers.matches(GIOVANNI3, document, "giovanni.pdf")

        assert result == MatcherResult.CORRECT

    @pytest.mark.asyncio
    async def test_header_out_of_position(self):
        """A header outside its x range is WRONG_HEADER."""
        fragments = [
            f if f.text != "Quantity" else fragment(500, f.y, "Quantity")
            for f in giovanni_page([])
        ]

        result = await matchers.matches(GIOVANNI3, pdf_document(fragments), "giovanni.pdf")

        assert result == MatcherResult.WRONG_HEADER

    @pytest.mark.asyncio
    async def test_headers_on_first_page_only(self):
        """Continuation pages need neither headers nor the number."""
        document = pdf_document(
            [fragment(60, 50, "RMS-GB-000008-001")] + mands_header()
            + mands_row(160, "CHEESE", "0406", "2", "1.5"),
            [fragment(500, 40, "Page 2 of 2")] + mands_row(60, "HAM", "0210", "3", "2.0"),
        )

        result = await matchers.matches(MANDS1, document, "mands.pdf")

        assert result == MatcherResult.CORRECT

    @pytest.mark.asyncio
    async def test_every_page_needs_headers(self):
        """Without the first-page flag every page must carry the headers."""
        document = pdf_document(
            giovanni_page([("CHEESE", "0406", "2", "1.5")]),
            [fragment(40, 100, "RMS-GB-000149-001")],
        )

        result = await matchers.matches(GIOVANNI3, document, "giovanni.pdf")

        assert result == MatcherResult.WRONG_HEADER
