"""JSON parser producing tagged Value trees."""

import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple
from .models import Value
from .types import ParseFailure


# Deeper documents are rejected before any recursive conversion or formatting
MAX_NESTING_DEPTH = 200


class JSONParser:
    """
    JSON parser that tags every collection by the delimiter it came from.

    Objects are built through ``object_pairs_hook`` so member order is kept
    and an object is never mistaken for an array of pairs.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Value:
        """
        Parse JSON text into a Value tree.

        Args:
            json_string: JSON text to parse

        Returns:
            Root Value

        Raises:
            ParseFailure: If the text is empty, not valid JSON, holds a number
                outside the float range or nests deeper than MAX_NESTING_DEPTH
        """
        if not json_string.strip():
            raise ParseFailure("JSON parsing failed: input is empty", json_string)

        depth = self._measure_nesting(json_string)
        if depth > MAX_NESTING_DEPTH:
            raise ParseFailure(f"JSON parsing failed: nesting too deep "
                               f"({depth} levels, limit {MAX_NESTING_DEPTH})", json_string)

        try:
            data = json.loads(
                json_string,
                object_pairs_hook=self._build_object,
                parse_constant=self._reject_constant,
                parse_float=self._parse_finite_float,
            )
            value = self._to_value(data)
        except json.JSONDecodeError as e:
            location = f"line {e.lineno}, column {e.colno}"
            raise ParseFailure(f"JSON parsing failed: {e.msg} at {location}",
                               json_string, location) from e
        except RecursionError as e:
            raise ParseFailure("JSON parsing failed: nesting too deep", json_string) from e
        except ValueError as e:
            raise ParseFailure(f"JSON parsing failed: {e}", json_string) from e

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Parsed JSON {value.kind.value} with nesting depth {depth}")
        return value

    @staticmethod
    def _measure_nesting(json_string: str) -> int:
        # Bracket depth outside string literals; an upper bound on the tree depth
        depth = max_depth = 0
        in_string = False
        escaped = False

        for char in json_string:
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
            elif char in "[{":
                depth += 1
                max_depth = max(max_depth, depth)
            elif char in "]}" and depth:
                depth -= 1

        return max_depth

    def _build_object(self, pairs: List[Tuple[str, Any]]) -> Value:
        # Later duplicates win but keep the first key's position, like dict()
        members: Dict[str, Any] = {}
        for key, item in pairs:
            members[key] = item
        return Value.object((key, self._to_value(item)) for key, item in members.items())

    def _to_value(self, data: Any) -> Value:
        if isinstance(data, Value):
            return data
        if isinstance(data, list):
            return Value.array(self._to_value(item) for item in data)
        return Value.from_python(data)

    @staticmethod
    def _reject_constant(name: str) -> Any:
        raise ValueError(f"{name} is not a valid JSON number")

    @staticmethod
    def _parse_finite_float(literal: str) -> float:
        number = float(literal)
        if math.isinf(number):
            raise ValueError(f"number {literal} is out of range")
        return number
