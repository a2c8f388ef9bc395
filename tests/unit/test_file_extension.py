"""
Unit tests for filename-based format classification.

Run: pytest tests/unit/test_file_extension.py -v
"""

import pytest

from models.matcher import DocumentFormat, MatcherResult
from utils import file_extension


class TestClassify:
    """Tests for classify()"""

    @pytest.mark.parametrize("filename,expected", [
        ("packing.xlsx", DocumentFormat.SPREADSHEET),
        ("PACKING.XLSX", DocumentFormat.SPREADSHEET),
        ("old-format.xls", DocumentFormat.SPREADSHEET),
        ("iceland.csv", DocumentFormat.CSV),
        ("giovanni.PDF", DocumentFormat.PDF),
        ("notes.txt", DocumentFormat.UNKNOWN),
        ("no_extension", DocumentFormat.UNKNOWN),
        ("", DocumentFormat.UNKNOWN),
        (None, DocumentFormat.UNKNOWN),
    ])
    def test_classify(self, filename, expected):
        """Extension decides the format, case-insensitively."""
        assert file_extension.classify(filename) == expected

    def test_only_last_suffix_counts(self):
        """A .pdf.csv file is CSV."""
        assert file_extension.classify("list.pdf.csv") == DocumentFormat.CSV

    def test_predicates(self):
        """is_excel / is_csv / is_pdf agree with classify."""
        assert file_extension.is_excel("a.xlsx")
        assert file_extension.is_csv("a.csv")
        assert file_extension.is_pdf("a.pdf")
        assert not file_extension.is_pdf("a.csv")


class TestMatches:
    """Tests for matches()"""

    def test_correct_extension(self):
        """Same extension with or without a leading dot."""
        assert file_extension.matches("list.PDF", "pdf") == MatcherResult.CORRECT
        assert file_extension.matches("list.pdf", ".pdf") == MatcherResult.CORRECT

    def test_wrong_extension(self):
        """Different extension reports WRONG_EXTENSION."""
        assert file_extension.matches("list.csv", "pdf") == MatcherResult.WRONG_EXTENSION
        assert file_extension.matches(None, "pdf") == MatcherResult.WRONG_EXTENSION
