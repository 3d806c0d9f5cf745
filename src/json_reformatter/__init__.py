"""
JSON Reformatter - Reformat JSON fragments embedded in text.

Expands, compacts or depth-limits a JSON array or object relative to the
column it starts at, optionally repairing common malformations first.
"""

__version__ = "1.0.0"

from .json_reformatter import JSONReformatter
from .models import Value
from .formatter import DepthBoundedFormatter, format_value
from .repair import RepairPipeline, repair
from .locator import FragmentLocator
from .parser import JSONParser
from .types import (
    TextSpan,
    ReformatResult,
    FormatMode,
    ReformatError,
    NoFragmentFound,
    ParseFailure,
    InvalidDepth,
    UNBOUNDED,
)

__all__ = [
    "JSONReformatter",
    "Value",
    "DepthBoundedFormatter",
    "format_value",
    "RepairPipeline",
    "repair",
    "FragmentLocator",
    "JSONParser",
    "TextSpan",
    "ReformatResult",
    "FormatMode",
    "ReformatError",
    "NoFragmentFound",
    "ParseFailure",
    "InvalidDepth",
    "UNBOUNDED",
]
