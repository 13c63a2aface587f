"""Tests for category and free-text filtering."""

from __future__ import annotations

import pytest

from unsent_archive.models import FilterState
from unsent_archive.query import (
    apply_filter_state,
    apply_filters,
    matches_query,
    next_category,
    normalize_query,
    unsent_entries,
)


def _ids(entries) -> list[str]:
    return [e.id for e in entries]


class TestApplyFilters:
    def test_all_with_empty_query_is_identity(self, collection):
        assert apply_filters(collection) == list(collection)

    def test_category_prose(self, collection):
        assert _ids(apply_filters(collection, "prose")) == ["p3", "p1", "p2"]

    def test_category_poem(self, collection):
        assert _ids(apply_filters(collection, "poem")) == ["q2", "q1"]

    def test_query_matches_title_case_insensitively(self, collection):
        assert _ids(apply_filters(collection, "all", "SALT")) == ["q1"]

    def test_query_matches_excerpt(self, collection):
        assert _ids(apply_filters(collection, "all", "two cups")) == ["p2"]

    def test_query_matches_tag_case_insensitively(self, make_entry):
        entry = make_entry("g", title="Kitchen", excerpt="Cups on the rack.", tags=("Grief",))
        assert apply_filters([entry], "all", "grief") == [entry]

    def test_query_is_trimmed(self, collection):
        assert _ids(apply_filters(collection, "all", "   salt  ")) == ["q1"]

    def test_whitespace_query_matches_everything(self, collection):
        assert apply_filters(collection, "all", "   ") == list(collection)

    def test_category_and_query_combine(self, collection):
        # "letter" is in p1's title; q2 ("Old address") has no match
        assert _ids(apply_filters(collection, "poem", "letter")) == []
        assert _ids(apply_filters(collection, "prose", "letter")) == ["p1"]

    def test_no_match_returns_empty_list(self, collection):
        assert apply_filters(collection, "all", "zebra") == []

    def test_substring_not_fuzzy(self, make_entry):
        entry = make_entry(title="Salt")
        assert apply_filters([entry], "all", "slat") == []

    def test_unknown_category_raises(self, collection):
        with pytest.raises(ValueError, match="Unknown category"):
            apply_filters(collection, "novel")

    def test_input_is_not_reordered(self, make_entry):
        entries = [make_entry("b", date="2020-01-01"), make_entry("a", date="2024-01-01")]
        assert _ids(apply_filters(entries)) == ["b", "a"]

    def test_repeated_calls_are_identical(self, collection):
        assert apply_filters(collection, "prose", "e") == apply_filters(collection, "prose", "e")


class TestFilterState:
    def test_defaults(self):
        assert FilterState() == FilterState("all", "")

    def test_unknown_category_is_clamped(self):
        assert FilterState(category="novel").category == "all"

    def test_apply_filter_state(self, collection):
        state = FilterState(category="poem", query="salt")
        assert _ids(apply_filter_state(collection, state)) == ["q1"]


class TestHelpers:
    def test_normalize_query(self):
        assert normalize_query("  Hello World ") == "hello world"

    @pytest.mark.parametrize(
        ("current", "expected"),
        [("all", "prose"), ("prose", "poem"), ("poem", "all"), ("bogus", "all")],
    )
    def test_next_category_cycles(self, current, expected):
        assert next_category(current) == expected

    def test_matches_query_expects_normalized_needle(self, make_entry):
        entry = make_entry(title="Salt")
        assert matches_query(entry, "salt")
        assert matches_query(entry, "")

    def test_unsent_entries_in_collection_order(self, collection):
        assert _ids(unsent_entries(collection)) == ["q2", "p2"]

    def test_unsent_entries_empty(self, make_entry):
        assert unsent_entries([make_entry()]) == []
