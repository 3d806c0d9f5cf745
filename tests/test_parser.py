"""Tests for JSON parser."""

import json
import logging
import pytest
from json_reformatter.parser import JSONParser, MAX_NESTING_DEPTH
from json_reformatter.models import Value
from json_reformatter.types import ValueKind, ParseFailure, ErrorType


class TestJSONParser:
    """Tests for JSONParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = JSONParser()

    def test_parse_object_preserves_member_order(self):
        """Test that object members keep their source order."""
        value = self.parser.parse('{"zebra": 1, "apple": 2, "mango": 3}')

        assert value.kind == ValueKind.OBJECT
        assert value.keys() == ("zebra", "apple", "mango")

    def test_parse_array_of_pairs_stays_array(self):
        """Test that an array of two-element arrays is not mistaken for an object."""
        value = self.parser.parse('[["a", 1], ["b", 2]]')

        assert value.kind == ValueKind.ARRAY
        assert all(child.kind == ValueKind.ARRAY for child in value.children())

    def test_parse_nested_objects_are_tagged(self):
        """Test that objects inside arrays are tagged as objects."""
        value = self.parser.parse('[{"a": {"b": [1]}}]')

        inner = value.data[0]
        assert inner.kind == ValueKind.OBJECT
        nested = dict(inner.data)["a"]
        assert nested.kind == ValueKind.OBJECT
        assert dict(nested.data)["b"].kind == ValueKind.ARRAY

    def test_parse_null_and_empty_array(self):
        """Test that null and [] parse to distinct values."""
        value = self.parser.parse('[null, []]')

        null, empty = value.data
        assert null.kind == ValueKind.NULL
        assert empty.kind == ValueKind.ARRAY
        assert empty.is_empty()

    def test_parse_numbers(self):
        """Test integer and float parsing."""
        value = self.parser.parse('[1, 1.5, -3, 2e3]')

        assert [child.data for child in value.data] == [1, 1.5, -3, 2000.0]
        assert isinstance(value.data[0].data, int)
        assert isinstance(value.data[3].data, float)

    def test_parse_string_escapes(self):
        """Test that escapes are decoded."""
        value = self.parser.parse('{"text": "line\\nbreak \\u00e9"}')

        assert dict(value.data)["text"] == Value.string("line\nbreak é")

    def test_parse_duplicate_keys_last_wins(self):
        """Test duplicate keys keep the first position and the last value."""
        value = self.parser.parse('{"a": 1, "b": 2, "a": 3}')

        assert value.keys() == ("a", "b")
        assert dict(value.data)["a"] == Value.number(3)

    def test_parse_scalar_root(self):
        """Test parsing a scalar document."""
        assert self.parser.parse('"just a string"') == Value.string("just a string")
        assert self.parser.parse('true') == Value.boolean(True)

    def test_parse_invalid_json_syntax(self):
        """Test parsing invalid JSON syntax."""
        json_string = '{"users": {"user1": {"name": "Alice"}'  # Missing closing braces

        with pytest.raises(ParseFailure, match="JSON parsing failed") as exc_info:
            self.parser.parse(json_string)

        assert exc_info.value.text == json_string
        assert exc_info.value.error_type == ErrorType.SYNTAX
        assert exc_info.value.location.startswith("line 1")

    def test_parse_empty_json(self):
        """Test parsing empty JSON string."""
        with pytest.raises(ParseFailure, match="input is empty"):
            self.parser.parse("   ")

    def test_parse_rejects_non_finite_constants(self):
        """Test that NaN and Infinity are not accepted."""
        with pytest.raises(ParseFailure, match="NaN"):
            self.parser.parse('[NaN]')
        with pytest.raises(ParseFailure, match="Infinity"):
            self.parser.parse('{"a": -Infinity}')

    @pytest.mark.parametrize("json_string", ['[1e400]', '{"a": 1e400}', '-1e400', '[[{"b": [2e999]}]]'])
    def test_parse_rejects_overflowing_numbers(self, json_string):
        """Test that numbers outside the float range fail wherever they sit."""
        with pytest.raises(ParseFailure, match="out of range") as exc_info:
            self.parser.parse(json_string)

        assert exc_info.value.text == json_string

    def test_parse_at_nesting_limit(self):
        """Test that documents at the nesting limit still parse."""
        json_string = "[" * MAX_NESTING_DEPTH + "]" * MAX_NESTING_DEPTH

        value = self.parser.parse(json_string)

        assert value.nesting_depth() == MAX_NESTING_DEPTH

    @pytest.mark.parametrize("opener,closer", [("[", "]"), ('{"a": ', "}")])
    def test_parse_rejects_deep_nesting(self, opener, closer):
        """Test that very deep documents fail as parse errors."""
        json_string = opener * 3000 + "1" + closer * 3000

        with pytest.raises(ParseFailure, match="nesting too deep"):
            self.parser.parse(json_string)

    def test_nesting_ignores_brackets_in_strings(self):
        """Test that brackets inside string literals do not count as nesting."""
        json_string = '["' + "[" * 500 + '\\"{"]'

        value = self.parser.parse(json_string)

        assert value.data[0].data == "[" * 500 + '"{'

    def test_parse_matches_from_python(self, sample_nested_json):
        """Test that parsing agrees with building from Python data."""
        value = self.parser.parse(json.dumps(sample_nested_json))
        assert value == Value.from_python(sample_nested_json)

    def test_parse_does_not_walk_tree_for_logging(self, monkeypatch):
        """Test that parsing never walks the finished tree just to log its depth."""
        def fail(self):
            raise AssertionError("nesting_depth should not be called")

        monkeypatch.setattr(Value, "nesting_depth", fail)
        parser = JSONParser(logging.getLogger("test.parser"))
        parser.logger.setLevel(logging.DEBUG)

        assert parser.parse('[[1], {"a": []}]').kind == ValueKind.ARRAY
