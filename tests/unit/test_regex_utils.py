"""
Unit tests for regex helpers over table rows.

Run: pytest tests/unit/test_regex_utils.py -v
"""

import re

from utils import regex_utils


class TestPatternTests:
    """Tests for test() and test_all_patterns()"""

    def test_matches_any_string_cell(self):
        """One matching cell anywhere is enough."""
        rows = [["header"], {"A": 1, "B": "RMS-GB-000022-001"}]
        assert regex_utils.test([regex_utils.REMOS_PATTERN], rows)

    def test_skips_non_string_cells(self):
        """Numbers and None are never tested."""
        rows = [[None, 123, 4.5]]
        assert not regex_utils.test([re.compile("1")], rows)

    def test_all_patterns_in_one_row(self):
        """Every pattern must match some cell of the same row."""
        patterns = [re.compile("Description"), re.compile("Packages")]
        assert regex_utils.test_all_patterns(patterns, ["Description", "Packages", "x"])
        assert not regex_utils.test_all_patterns(patterns, ["Description", "x"])


class TestRemos:
    """Tests for establishment number helpers"""

    def test_contains_remos(self):
        """Detects an establishment number with or without site suffix."""
        assert regex_utils.contains_remos([["RMS-GB-000040"]])
        assert regex_utils.contains_remos([["rms-gb-000040-001"]])
        assert not regex_utils.contains_remos([["RMS-FR-000040-001"]])

    def test_find_match_returns_first(self):
        """First match in document order."""
        rows = [["x"], ["RMS-GB-000022-001"], ["RMS-GB-000015-002"]]
        assert regex_utils.find_match(regex_utils.REMOS_PATTERN, rows) == "RMS-GB-000022-001"

    def test_find_match_none(self):
        """None when nothing matches."""
        assert regex_utils.find_match(regex_utils.REMOS_PATTERN, [["x"]]) is None

    def test_find_all_matches_distinct(self):
        """Distinct values in order, accumulating into a given list."""
        found = ["RMS-GB-000001-001"]
        rows = [["RMS-GB-000022-001 and RMS-GB-000015-002"], ["RMS-GB-000022-001"]]

        result = regex_utils.find_all_matches(regex_utils.REMOS_PATTERN, rows, found)

        assert result is found
        assert result == ["RMS-GB-000001-001", "RMS-GB-000022-001", "RMS-GB-000015-002"]

    def test_establishment_numbers_ignore_bare_prefix(self):
        """A site prefix without its suffix is not a second number."""
        rows = [["RMS-GB-000040-001"], ["RMS-GB-000040"], ["Depot RMS-GB-000040"]]
        assert regex_utils.find_establishment_numbers(rows) == ["RMS-GB-000040-001"]

    def test_establishment_numbers_case_folded(self):
        """Case variants of one number collapse to the upper-case form."""
        rows = [["rms-gb-000040-001"], ["RMS-GB-000040-001"], ["RMS-GB-000041-002"]]
        assert regex_utils.find_establishment_numbers(rows) == [
            "RMS-GB-000040-001", "RMS-GB-000041-002"
        ]


class TestPositionFinder:
    """Tests for position_finder()"""

    def test_dict_row_returns_key(self):
        """Column letter for spreadsheet rows."""
        row = {"A": "Description", "B": None, "C": "Net Weight"}
        assert regex_utils.position_finder(row, re.compile("Net Weight")) == "C"

    def test_list_row_returns_index(self):
        """Index for CSV rows."""
        row = ["Description", None, "Net Weight"]
        assert regex_utils.position_finder(row, re.compile("Net Weight")) == 2

    def test_not_found(self):
        """None when no cell matches."""
        assert regex_utils.position_finder(["a"], re.compile("b")) is None


class TestFindUnit:
    """Tests for find_unit()"""

    def test_unit_in_label(self):
        """Unit token is returned as written."""
        assert regex_utils.find_unit("Net Weight (KG)") == "KG"
        assert regex_utils.find_unit("Net Weight/Package kgs") == "kgs"

    def test_no_unit(self):
        """None for labels without a unit and for non-strings."""
        assert regex_utils.find_unit("Net Weight") is None
        assert regex_utils.find_unit(None) is None
