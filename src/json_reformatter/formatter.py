"""Depth-bounded JSON pretty-printer."""

import json
from typing import List
from .models import Value
from .types import Depth, UNBOUNDED, ValueKind


class DepthBoundedFormatter:
    """
    Pretty-printer that expands collections down to a target depth.

    Collections above the target depth are laid out one child per line;
    anything at or below it is minified onto a single line. Indentation is
    anchored at the column of the opening delimiter, so a fragment formats
    correctly wherever it sits in its host document.
    """

    def __init__(self, indent_width: int = 2, ensure_ascii: bool = False):
        """
        Initialize the formatter.

        Args:
            indent_width: Spaces added per expanded nesting level
            ensure_ascii: Escape non-ASCII characters in strings and keys
        """
        if indent_width < 0:
            raise ValueError("indent_width must be non-negative")
        self.indent_width = indent_width
        self.ensure_ascii = ensure_ascii

    def format(self, value: Value, depth: Depth = UNBOUNDED, column: int = 0) -> str:
        """
        Render a value, expanding collections while depth remains.

        Args:
            value: Value tree to render
            depth: Levels left to expand; UNBOUNDED expands everything
            column: Column of the value's opening delimiter

        Returns:
            Rendered text; the first line carries no leading indentation
        """
        if not value.is_collection() or depth <= 0 or value.is_empty():
            return self.minify(value)

        child_column = column + self.indent_width
        child_indent = " " * child_column
        lines: List[str] = []

        if value.kind == ValueKind.OBJECT:
            opening, closing = "{", "}"
            for key, member in value.data:
                rendered = self.format(member, depth - 1, child_column)
                lines.append(f"{child_indent}{self._encode_string(key)}: {rendered.lstrip()}")
        else:
            opening, closing = "[", "]"
            for item in value.data:
                rendered = self.format(item, depth - 1, child_column)
                lines.append(f"{child_indent}{rendered.lstrip()}")

        return f"{opening}\n" + ",\n".join(lines) + f"\n{' ' * column}{closing}"

    def minify(self, value: Value) -> str:
        """Render a value on a single line with ', ' and ': ' separators."""
        return json.dumps(value.to_python(), ensure_ascii=self.ensure_ascii)

    def _encode_string(self, text: str) -> str:
        return json.dumps(text, ensure_ascii=self.ensure_ascii)


def format_value(value: Value, depth: Depth = UNBOUNDED, column: int = 0) -> str:
    """Format with default settings (two-space indent, unescaped unicode)."""
    return DepthBoundedFormatter().format(value, depth, column)
