"""Tests for the location writer."""
import copy
import logging

import pytest

from common.paths import ParseError, parse_path
from remap import set_value_at_path, write_at


class TestConcreteWrites:
    """Writes to wildcard-free targets"""

    def test_creates_intermediate_objects(self):
        result = set_value_at_path({}, "$.storeSummary.maxPrice", 12.99)
        assert result == {"storeSummary": {"maxPrice": 12.99}}

    def test_creates_intermediate_lists(self):
        result = set_value_at_path({}, "$.rows[1].name", "b")
        assert result == {"rows": [None, {"name": "b"}]}

    def test_merges_with_existing(self):
        doc = {"summary": {"count": 3}}
        result = set_value_at_path(doc, "$.summary.total", 30)
        assert result == {"summary": {"count": 3, "total": 30}}

    def test_overwrites_existing_value(self):
        result = set_value_at_path({"a": {"b": 1}}, "$.a.b", 2)
        assert result == {"a": {"b": 2}}

    def test_writes_into_existing_list(self):
        result = set_value_at_path({"a": [1, 2, 3]}, "$.a[1]", 20)
        assert result == {"a": [1, 20, 3]}

    def test_list_value_at_concrete_target(self):
        result = set_value_at_path({}, "$.prices", [1, 2])
        assert result == {"prices": [1, 2]}

    def test_root_target_replaces_document(self):
        assert set_value_at_path({"old": 1}, "$", {"new": 2}) == {"new": 2}

    def test_replaces_scalar_intermediate(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = set_value_at_path({"a": 5}, "$.a.b", 1)
        assert result == {"a": {"b": 1}}
        assert "Replacing int" in caplog.text

    def test_replaces_root_of_wrong_kind(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = write_at({"keep": 1}, "$[0]", 5)
        assert result == [5]
        assert "Replacing dict at $ with a new list" in caplog.text

    def test_empty_root_replaced_quietly(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = set_value_at_path({}, "$[1]", "x")
        assert result == [None, "x"]
        assert caplog.text == ""

    def test_input_not_modified(self):
        doc = {"a": {"b": [1]}}
        before = copy.deepcopy(doc)
        set_value_at_path(doc, "$.a.b[3]", 4)
        set_value_at_path(doc, "$.a.c", 5)
        assert doc == before

    def test_value_is_copied(self):
        value = {"nested": [1, 2]}
        result = set_value_at_path({}, "$.x", value)
        value["nested"].append(3)
        assert result == {"x": {"nested": [1, 2]}}

    def test_wildcard_rejected(self):
        with pytest.raises(ParseError):
            set_value_at_path({}, "$.a[*].b", 1)

    def test_accepts_parsed_path(self):
        assert set_value_at_path({}, parse_path("$.a"), 1) == {"a": 1}


class TestWildcardWrites:
    """Wildcard targets expand positionally over a list of values"""

    def test_positional_expansion(self):
        result = write_at({}, "$.store.novel[*].cost", [8.95, 12.99, 8.99])

        assert len(result["store"]["novel"]) == 3
        assert [item["cost"] for item in result["store"]["novel"]] == [8.95, 12.99, 8.99]

    def test_second_write_merges_by_position(self):
        first = write_at({}, "$.store.novel[*].cost", [8.95, 12.99])
        second = write_at(first, "$.store.novel[*].bookTitle", ["A", "B"])

        assert second == {"store": {"novel": [
            {"cost": 8.95, "bookTitle": "A"},
            {"cost": 12.99, "bookTitle": "B"},
        ]}}
        assert first == {"store": {"novel": [{"cost": 8.95}, {"cost": 12.99}]}}

    def test_trailing_wildcard(self):
        result = write_at({}, "$.catalog.authors[*]", ["Nigel Rees", "Evelyn Waugh"])
        assert result == {"catalog": {"authors": ["Nigel Rees", "Evelyn Waugh"]}}

    def test_empty_list_writes_empty_array(self):
        result = write_at({}, "$.store.novel[*].cost", [])
        assert result == {"store": {"novel": []}}

    def test_empty_list_with_trailing_wildcard(self):
        assert write_at({}, "$.tags[*]", []) == {"tags": []}

    def test_scalar_treated_as_single_element(self):
        assert write_at({}, "$.items[*].price", 12.99) == {"items": [{"price": 12.99}]}

    def test_concrete_target_delegates(self):
        assert write_at({}, "$.a.b", [1, 2]) == {"a": {"b": [1, 2]}}

    def test_multiple_wildcards_rejected(self):
        with pytest.raises(ParseError, match="more than one"):
            write_at({}, "$.a[*].b[*]", [[1], [2]])

    def test_input_not_modified(self):
        doc = {"store": {"novel": [{"cost": 1}]}}
        before = copy.deepcopy(doc)
        write_at(doc, "$.store.novel[*].title", ["x", "y"])
        write_at(doc, "$.store.novel[*].cost", [])
        assert doc == before

    def test_round_trip_order(self):
        """Values extracted with a wildcard land back in the same order"""
        from automaton import match

        source = {"a": {"b": [{"c": 3}, {"c": 1}, {"c": 2}]}}
        values = [m.value for m in match(source, "$.a.b[*].c")]
        result = write_at({}, "$.x[*].c", values)

        assert result == {"x": [{"c": 3}, {"c": 1}, {"c": 2}]}
