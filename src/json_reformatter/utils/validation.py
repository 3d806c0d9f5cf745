"""Validation utilities for reformatting inputs."""

import json
from typing import Any, List
from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating fragments and operation parameters."""

    MAX_COMFORTABLE_DEPTH = 20

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax and structure.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if string is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Try to parse JSON
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not isinstance(data, (dict, list)):
            warnings.append(f"Root element is a {type(data).__name__}; it will be rendered as-is")

        max_depth = ValidationUtils._calculate_max_depth(data)
        if max_depth > ValidationUtils.MAX_COMFORTABLE_DEPTH:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). "
                            "Consider a bounded depth for readable output.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if not isinstance(data, (dict, list)):
            return current_depth

        children = data.values() if isinstance(data, dict) else data
        max_child_depth = current_depth + 1
        for child in children:
            max_child_depth = max(max_child_depth,
                                  ValidationUtils._calculate_max_depth(child, current_depth + 1))

        return max_child_depth

    @staticmethod
    def validate_depth(depth: Any) -> ValidationResult:
        """
        Validate a caller-supplied expansion depth.

        Args:
            depth: Depth to validate

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if isinstance(depth, bool) or not isinstance(depth, int):
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message=f"Depth must be an integer, got {type(depth).__name__}",
                location="depth"
            ))
        elif depth < 0:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message="Depth must be non-negative",
                location="depth"
            ))
        elif depth == 0:
            warnings.append("Depth 0 expands the top level only, the same as compact formatting.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_offset(document: str, offset: Any) -> ValidationResult:
        """
        Validate an offset into a document.

        Args:
            document: Host text
            offset: Offset to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if isinstance(offset, bool) or not isinstance(offset, int):
            errors.append(ValidationError(
                type=ErrorType.OFFSET,
                message=f"Offset must be an integer, got {type(offset).__name__}",
                location="offset"
            ))
        elif not 0 <= offset < len(document):
            errors.append(ValidationError(
                type=ErrorType.OFFSET,
                message=f"Offset {offset} is outside the document (length {len(document)})",
                location="offset"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=[]
        )
