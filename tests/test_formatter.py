"""Tests for the depth-bounded formatter."""

import pytest
from json_reformatter.formatter import DepthBoundedFormatter, format_value
from json_reformatter.models import Value
from json_reformatter.parser import JSONParser
from json_reformatter.types import UNBOUNDED


class TestDepthBoundedFormatter:
    """Tests for DepthBoundedFormatter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.formatter = DepthBoundedFormatter()
        self.parser = JSONParser()

    def _format(self, json_string, depth=UNBOUNDED, column=0):
        return self.formatter.format(self.parser.parse(json_string), depth, column)

    def test_depth_one_expands_top_level_only(self):
        """Test the single-level expansion example."""
        result = self._format('{"a":1,"b":[1,2]}', depth=1)

        assert result == '{\n  "a": 1,\n  "b": [1, 2]\n}'

    def test_unbounded_depth_expands_everything(self):
        """Test full expansion of nested collections."""
        result = self._format('{"a":1,"b":[1,2]}')

        assert result == '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'

    def test_depth_zero_minifies(self):
        """Test that depth 0 renders a collection on one line."""
        result = self._format('{"a":1,"b":[1,{"c":null}]}', depth=0)

        assert result == '{"a": 1, "b": [1, {"c": null}]}'

    def test_depth_two(self):
        """Test that depth 2 expands two levels and minifies the rest."""
        result = self._format('[[1,[2]],3]', depth=2)

        assert result == '[\n  [\n    1,\n    [2]\n  ],\n  3\n]'

    def test_scalars_ignore_depth(self):
        """Test that scalars always render minified."""
        assert self.formatter.format(Value.string("x"), 5, 3) == '"x"'
        assert self.formatter.format(Value.number(2.5), UNBOUNDED, 0) == '2.5'
        assert self.formatter.format(Value.boolean(False), 1, 0) == 'false'
        assert self.formatter.format(Value.null(), 1, 0) == 'null'

    @pytest.mark.parametrize("depth", [0, 1, 3, UNBOUNDED])
    @pytest.mark.parametrize("column", [0, 7])
    def test_empty_array_never_expands(self, depth, column):
        """Test that an empty array always renders as []."""
        assert self.formatter.format(Value.array([]), depth, column) == "[]"

    def test_empty_object_never_expands(self):
        """Test that an empty object renders as {}."""
        assert self.formatter.format(Value.object([]), UNBOUNDED, 4) == "{}"

    def test_empty_children_inside_expanded_parent(self):
        """Test empty collections nested in an expanded container."""
        result = self._format('{"a": [], "b": {}, "c": null}')

        assert result == '{\n  "a": [],\n  "b": {},\n  "c": null\n}'

    def test_column_anchors_indentation(self):
        """Test that nested output is indented relative to the base column."""
        result = self._format('{"a":[1]}', column=4)

        assert result == '{\n      "a": [\n        1\n      ]\n    }'

    @pytest.mark.parametrize("column", [0, 3, 8])
    def test_members_and_closer_land_on_expected_columns(self, column):
        """Test member lines at column+2 and the closer at column."""
        result = self._format('{"a": 1, "b": {"c": 2}, "d": [3]}', depth=1, column=column)
        lines = result.split("\n")

        assert lines[0] == "{"
        for line in lines[1:-1]:
            assert len(line) - len(line.lstrip(" ")) == column + 2
        assert lines[-1] == " " * column + "}"

    def test_keys_are_re_encoded(self):
        """Test that keys with special characters are escaped."""
        value = Value.object([('say "hi"\n', Value.number(1))])

        assert self.formatter.format(value, 1, 0) == '{\n  "say \\"hi\\"\\n": 1\n}'

    def test_unicode_kept_by_default(self):
        """Test that non-ASCII text is left unescaped by default."""
        result = self._format('{"café": "naïve"}')

        assert result == '{\n  "café": "naïve"\n}'

    def test_ensure_ascii_escapes_unicode(self):
        """Test ASCII-only output."""
        formatter = DepthBoundedFormatter(ensure_ascii=True)
        value = Value.from_python({"café": "é"})

        assert formatter.format(value, 1, 0) == '{\n  "caf\\u00e9": "\\u00e9"\n}'

    def test_custom_indent_width(self):
        """Test a wider indent per level."""
        formatter = DepthBoundedFormatter(indent_width=4)
        value = Value.from_python({"a": [1]})

        assert formatter.format(value, UNBOUNDED, 0) == '{\n    "a": [\n        1\n    ]\n}'

    def test_negative_indent_width_rejected(self):
        """Test indent width validation."""
        with pytest.raises(ValueError, match="indent_width must be non-negative"):
            DepthBoundedFormatter(indent_width=-1)

    def test_output_has_no_tabs(self):
        """Test that indentation uses spaces only."""
        result = self._format('{"a": {"b": {"c": [1, 2]}}}', column=5)

        assert "\t" not in result

    def test_minify_uses_spaced_separators(self):
        """Test the single-line encoding."""
        value = Value.from_python({"a": [1, 2], "b": {"c": "d"}})

        assert self.formatter.minify(value) == '{"a": [1, 2], "b": {"c": "d"}}'

    def test_format_value_defaults(self):
        """Test the module-level convenience function."""
        assert format_value(Value.from_python([1])) == "[\n  1\n]"


class TestFormatterProperties:
    """Property-style checks for the formatter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.formatter = DepthBoundedFormatter()
        self.parser = JSONParser()

    def test_round_trip(self, sample_nested_json):
        """Test that parsing the full expansion gives back the same tree."""
        value = Value.from_python(sample_nested_json)

        reparsed = self.parser.parse(self.formatter.format(value, UNBOUNDED, 0))

        assert reparsed == value
        assert reparsed.keys() == value.keys()

    @pytest.mark.parametrize("column", [0, 6])
    def test_full_expansion_is_idempotent(self, sample_nested_json, column):
        """Test that formatting the output again changes nothing."""
        value = Value.from_python(sample_nested_json)

        once = self.formatter.format(value, UNBOUNDED, column)
        twice = self.formatter.format(self.parser.parse(once), UNBOUNDED, column)

        assert once == twice

    def test_depth_monotonicity(self, sample_nested_json):
        """Test that a larger depth never produces fewer lines."""
        value = Value.from_python(sample_nested_json)

        line_counts = [
            self.formatter.format(value, depth, 2).count("\n")
            for depth in range(0, value.nesting_depth() + 2)
        ]

        assert line_counts == sorted(line_counts)
        assert line_counts[-1] == self.formatter.format(value, UNBOUNDED, 2).count("\n")

    def test_bounded_output_parses_to_same_tree(self, sample_nested_json):
        """Test that every depth renders the same data."""
        value = Value.from_python(sample_nested_json)

        for depth in range(0, 4):
            assert self.parser.parse(self.formatter.format(value, depth, 0)) == value
