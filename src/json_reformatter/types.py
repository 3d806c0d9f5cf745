"""Core type definitions for the JSON Reformatter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class ValueKind(Enum):
    """Enumeration of JSON value kinds."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class FormatMode(Enum):
    """Enumeration of reformatting operations."""
    FULL = "full"
    COMPACT = "compact"
    DEPTH = "depth"
    CLEANUP = "cleanup"


class ErrorType(Enum):
    """Enumeration of error types."""
    NO_FRAGMENT = "no_fragment"
    SYNTAX = "syntax"
    DEPTH = "depth"
    OFFSET = "offset"


# Sentinel depth meaning "expand every nested collection"
UNBOUNDED = float("inf")

Depth = Union[int, float]


@dataclass(frozen=True)
class TextSpan:
    """An isolated piece of text and the column its first character sits at."""
    text: str
    column: int = 0
    start: Optional[int] = None
    end: Optional[int] = None

    def __post_init__(self):
        if self.column < 0:
            raise ValueError("column must be non-negative")
        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must be given together")
        if self.start is not None and self.end < self.start:
            raise ValueError("end must not precede start")


@dataclass
class ReformatResult:
    """Result of a reformat operation."""
    text: str
    column: int
    start: Optional[int] = None
    end: Optional[int] = None
    repaired_text: Optional[str] = None

    def apply(self, document: str) -> str:
        """
        Splice the replacement text into the host document.

        Args:
            document: Document the span was located in

        Returns:
            The document with the span replaced
        """
        if self.start is None or self.end is None:
            return self.text
        return document[:self.start] + self.text + document[self.end:]


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    diagnostic_text: Optional[str] = None


class ReformatError(Exception):
    """Base exception for reformatting errors."""

    def __init__(self, message: str, error_type: ErrorType,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context or {}


class NoFragmentFound(ReformatError):
    """Raised when no enclosing array or object could be located."""

    def __init__(self, message: str = "No enclosing JSON array or object found",
                 offset: Optional[int] = None):
        super().__init__(message, ErrorType.NO_FRAGMENT, {"offset": offset})
        self.offset = offset


class ParseFailure(ReformatError):
    """Raised when a fragment (after optional repair) is not valid JSON."""

    def __init__(self, message: str, text: str, location: Optional[str] = None):
        super().__init__(message, ErrorType.SYNTAX, {"text": text, "location": location})
        self.text = text
        self.location = location


class InvalidDepth(ReformatError, ValueError):
    """Raised when an expansion depth is negative or not an integer."""

    def __init__(self, message: str, depth: Any = None):
        super().__init__(message, ErrorType.DEPTH, {"depth": depth})
        self.depth = depth


# Abstract base classes for interfaces

class JSONReformatterInterface(ABC):
    """Abstract interface for the JSON Reformatter."""

    @abstractmethod
    def format_full(self, span: Optional[TextSpan]) -> ReformatResult:
        """Expand every nested collection."""
        pass

    @abstractmethod
    def format_compact(self, span: Optional[TextSpan]) -> ReformatResult:
        """Expand the top level only."""
        pass

    @abstractmethod
    def format_to_depth(self, span: Optional[TextSpan], depth: int) -> ReformatResult:
        """Expand collections up to the given depth."""
        pass

    @abstractmethod
    def cleanup_and_format(self, span: Optional[TextSpan]) -> ReformatResult:
        """Repair a malformed fragment and expand it fully."""
        pass


class RepairStepInterface(ABC):
    """Abstract interface for a single repair rewrite."""

    @abstractmethod
    def apply(self, text: str) -> str:
        """Rewrite text, returning it unchanged when nothing matches."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_reformat_error(self, error: ReformatError) -> ErrorResponse:
        """Handle reformatting errors."""
        pass
