"""Error handling implementation for the JSON Reformatter."""

import logging
from typing import Any, Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ReformatError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Reformatter operations.

    Validates inputs and parameters and turns reformatting errors into
    user-facing responses with a suggested action.
    """

    DIAGNOSTIC_PREVIEW_CHARS = 200

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate a fragment before formatting.

        Args:
            input_data: Fragment text to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data)
        except RecursionError as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def validate_depth(self, depth: Any) -> ValidationResult:
        """Validate a caller-supplied expansion depth."""
        return ValidationUtils.validate_depth(depth)

    def validate_offset(self, document: str, offset: Any) -> ValidationResult:
        """Validate an offset into a host document."""
        return ValidationUtils.validate_offset(document, offset)

    def handle_reformat_error(self, error: ReformatError) -> ErrorResponse:
        """
        Handle reformatting errors and suggest a next step.

        Args:
            error: ReformatError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Reformat error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.NO_FRAGMENT:
            return self._handle_no_fragment_error(error)
        elif error.error_type == ErrorType.SYNTAX:
            return self._handle_syntax_error(error)
        elif error.error_type == ErrorType.DEPTH:
            return self._handle_depth_error(error)
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
            )

    def _handle_no_fragment_error(self, error: ReformatError) -> ErrorResponse:
        """Handle a missing fragment."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Place the offset inside a JSON array or object, "
                             "or pass input that contains one.",
        )

    def _handle_syntax_error(self, error: ReformatError) -> ErrorResponse:
        """Handle a fragment that is not valid JSON."""
        text = error.context.get("text")
        if text is not None and len(text) > self.DIAGNOSTIC_PREVIEW_CHARS:
            self.logger.debug(f"Unparseable text (truncated): {text[:self.DIAGNOSTIC_PREVIEW_CHARS]}...")

        if error.context.get("repaired"):
            action = ("The fragment is still invalid after cleanup. "
                      "Fix the remaining syntax by hand.")
        else:
            action = "Run the cleanup command to repair common malformations, then retry."

        return ErrorResponse(
            can_recover=True,
            suggested_action=action,
            diagnostic_text=text,
        )

    def _handle_depth_error(self, error: ReformatError) -> ErrorResponse:
        """Handle an unusable expansion depth."""
        return ErrorResponse(
            can_recover=True,
            suggested_action=f"Pass a non-negative integer depth instead of {error.context.get('depth')!r}.",
        )
