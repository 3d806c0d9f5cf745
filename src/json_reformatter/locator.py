"""Locate the JSON array or object that encloses a position in a document."""

import logging
from typing import List, Optional, Tuple
from .types import NoFragmentFound, TextSpan


_PAIRS = {"[": "]", "{": "}"}
_CLOSERS = {"]": "[", "}": "{"}


class FragmentLocator:
    """
    Finds balanced bracket pairs in arbitrary text.

    Double-quoted strings are skipped (escaped quotes included), so brackets
    inside JSON string values do not count. A closer that does not match the
    innermost open bracket is ignored.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the fragment locator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def locate(self, document: str, offset: int) -> TextSpan:
        """
        Find the innermost array or object containing an offset.

        Args:
            document: Host text
            offset: Position inside the document (0-based)

        Returns:
            TextSpan covering the fragment from opening to closing bracket

        Raises:
            NoFragmentFound: If the offset is outside the document or no
                bracket pair encloses it
        """
        if offset < 0 or offset >= len(document):
            raise NoFragmentFound(f"Offset {offset} is outside the document", offset)

        enclosing = [(start, end) for start, end in self.find_pairs(document)
                     if start <= offset < end]
        if not enclosing:
            raise NoFragmentFound(f"No enclosing JSON array or object at offset {offset}", offset)

        start, end = max(enclosing, key=lambda pair: pair[0])
        self.logger.debug(f"Located fragment [{start}:{end}] around offset {offset}")
        return self._make_span(document, start, end)

    def locate_first(self, document: str) -> TextSpan:
        """
        Find the first top-level array or object in a document.

        Raises:
            NoFragmentFound: If the document holds no balanced bracket pair
        """
        pairs = self.find_pairs(document)
        if not pairs:
            raise NoFragmentFound("No JSON array or object found in document")

        start, end = min(pairs, key=lambda pair: (pair[0], -pair[1]))
        return self._make_span(document, start, end)

    def find_pairs(self, document: str) -> List[Tuple[int, int]]:
        """
        Scan a document for balanced bracket pairs.

        Returns:
            List of (start, end) offsets, end exclusive
        """
        pairs = []
        stack: List[Tuple[str, int]] = []
        in_string = False
        escaped = False

        for index, char in enumerate(document):
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char in _PAIRS:
                stack.append((char, index))
            elif char in _CLOSERS and stack and stack[-1][0] == _CLOSERS[char]:
                _, start = stack.pop()
                pairs.append((start, index + 1))

        return pairs

    @staticmethod
    def column_of(document: str, offset: int) -> int:
        """Characters between the previous line feed and an offset."""
        return offset - (document.rfind("\n", 0, offset) + 1)

    def _make_span(self, document: str, start: int, end: int) -> TextSpan:
        return TextSpan(
            text=document[start:end],
            column=self.column_of(document, start),
            start=start,
            end=end,
        )
