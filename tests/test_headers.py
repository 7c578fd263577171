"""Tests for header matching and the HeaderIndex."""

import pytest

from paypal_liquidity.parsing import HEADER_RULES, LOGICAL_FIELDS, HeaderIndex, match_header


class TestMatchHeader:
    """Tests for single-cell header matching."""

    @pytest.mark.parametrize(
        "cell, field",
        [
            ("Transaction ID", "transaction_id"),
            ("transaction_id", "transaction_id"),
            ("Reference Transaction ID", "transaction_id"),
            ("Date", "date"),
            ("Timestamp", "date"),
            ("From Name", "name"),
            ("To Name", "name"),
            ("Transaction Type", "type"),
            ("Status", "status"),
            ("Currency Code", "currency"),
            ("Amount", "gross"),
            ("Gross Amount", "gross"),
            ("Fee Amount", "fee"),
            ("Net Amount", "net"),
            ("Account Balance", "balance"),
            ("Item Title", "note"),
            ("Subject Message", "note"),
        ],
    )
    def test_known_headers(self, cell, field):
        assert match_header(cell) == field

    def test_case_and_padding_ignored(self):
        """Cells are lower-cased and trimmed before matching."""
        assert match_header("  GROSS  ") == "gross"
        assert match_header("\tNet\t") == "net"

    def test_unknown_header(self):
        """Unrecognized columns map to nothing."""
        assert match_header("Shipping Address") is None
        assert match_header("") is None

    def test_near_misses_are_not_matched(self):
        """Equality rules do not match on substrings."""
        assert match_header("Gross Total") is None
        assert match_header("Balance Impact") is None
        assert match_header("Dates") is None

    def test_first_rule_wins_within_a_cell(self):
        """A transaction header is claimed by the id rule before any other."""
        assert match_header("Transaction Type") == "type"
        assert match_header("Transaction Status") == "status"
        # Contains both "transaction" and "id", so the id rule claims it
        assert match_header("Transaction Note Id") == "transaction_id"

    def test_note_substrings(self):
        """Anything containing note or message is a note."""
        assert match_header("Notes") == "note"
        assert match_header("Custom Message") == "note"
        assert match_header("Item Title") == "note"
        assert match_header("Item") is None

    def test_rules_cover_every_field(self):
        """Each logical field has at least one rule."""
        assert {field for _, field in HEADER_RULES} == set(LOGICAL_FIELDS)


class TestHeaderIndex:
    """Tests for the per-parse field to column mapping."""

    def test_from_header_row(self):
        """Known columns are indexed by position, unknown ones are ignored."""
        index = HeaderIndex.from_header_row(
            ["Transaction ID", "Shipping Address", "Gross", "Currency"]
        )
        assert dict(index) == {"transaction_id": 0, "gross": 2, "currency": 3}
        assert "date" not in index
        assert len(index) == 3

    def test_last_matching_column_wins(self):
        """A later synonym column overwrites an earlier one."""
        index = HeaderIndex.from_header_row(["Gross", "Name", "Amount", "Gross Amount"])
        assert index["gross"] == 3

    def test_index_is_read_only(self):
        """The mapping cannot be modified after construction."""
        index = HeaderIndex.from_header_row(["Transaction ID"])
        with pytest.raises(TypeError):
            index["gross"] = 1

    def test_source_mapping_is_copied(self):
        """Changing the source dict does not change the index."""
        positions = {"transaction_id": 0}
        index = HeaderIndex(positions)
        positions["gross"] = 1
        assert "gross" not in index

    def test_empty_header_row(self):
        assert len(HeaderIndex.from_header_row([])) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
