"""Main JSON Reformatter implementation."""

import logging
from contextlib import nullcontext
from typing import Optional
from .types import (
    JSONReformatterInterface,
    TextSpan,
    ReformatResult,
    FormatMode,
    NoFragmentFound,
    ParseFailure,
    InvalidDepth,
    Depth,
    UNBOUNDED
)
from .parser import JSONParser
from .formatter import DepthBoundedFormatter
from .repair import RepairPipeline
from .locator import FragmentLocator
from .error_handler import ErrorHandler
from .profiler import PerformanceProfiler


class JSONReformatter(JSONReformatterInterface):
    """
    Main implementation of the JSON Reformatter interface.

    Parses an isolated fragment, optionally repairs it first, and renders
    it anchored at the fragment's original column. Every operation either
    returns a complete ReformatResult or raises; nothing is partially
    applied.
    """

    def __init__(self, indent_width: int = 2,
                 ensure_ascii: bool = False,
                 enable_profiling: bool = True,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON Reformatter.

        Args:
            indent_width: Spaces added per expanded nesting level
            ensure_ascii: Escape non-ASCII characters in the output
            enable_profiling: Record duration and memory of each operation
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger)
        self.parser = JSONParser(self.logger)
        self.formatter = DepthBoundedFormatter(indent_width=indent_width, ensure_ascii=ensure_ascii)
        self.repair_pipeline = RepairPipeline(logger=self.logger)
        self.locator = FragmentLocator(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def format_full(self, span: Optional[TextSpan]) -> ReformatResult:
        """
        Expand every nested collection.

        Args:
            span: Fragment to reformat

        Returns:
            ReformatResult with the replacement text

        Raises:
            NoFragmentFound: If no span is supplied
            ParseFailure: If the fragment is not valid JSON
        """
        return self._reformat("format_full", span, UNBOUNDED)

    def format_compact(self, span: Optional[TextSpan]) -> ReformatResult:
        """Put each top-level member on its own line, minifying its contents."""
        return self._reformat("format_compact", span, 1)

    def format_to_depth(self, span: Optional[TextSpan], depth: int) -> ReformatResult:
        """
        Expand collections down to a given depth.

        Depth 0 behaves like compact formatting: the outermost container is
        always expanded.

        Args:
            span: Fragment to reformat
            depth: Non-negative number of levels to expand

        Returns:
            ReformatResult with the replacement text

        Raises:
            InvalidDepth: If depth is negative or not an integer
        """
        validation = self.error_handler.validate_depth(depth)
        if not validation.is_valid:
            raise InvalidDepth("; ".join(error.message for error in validation.errors), depth)

        return self._reformat("format_to_depth", span, max(depth, 1))

    def cleanup_and_format(self, span: Optional[TextSpan]) -> ReformatResult:
        """
        Repair a malformed fragment, then expand it fully.

        Raises:
            NoFragmentFound: If no span is supplied
            ParseFailure: If the repaired text is still not valid JSON; the
                exception carries the repaired text
        """
        if span is None:
            raise NoFragmentFound()

        repaired = self.repair_pipeline.repair(span.text)
        return self._reformat("cleanup_and_format", span, UNBOUNDED, repaired_text=repaired)

    def reformat(self, span: Optional[TextSpan], mode: FormatMode,
                 depth: Optional[int] = None) -> ReformatResult:
        """
        Dispatch to the operation for a mode.

        Args:
            span: Fragment to reformat
            mode: Operation to run
            depth: Required for FormatMode.DEPTH, ignored otherwise
        """
        if mode == FormatMode.FULL:
            return self.format_full(span)
        elif mode == FormatMode.COMPACT:
            return self.format_compact(span)
        elif mode == FormatMode.DEPTH:
            if depth is None:
                raise ValueError("depth is required for depth formatting")
            return self.format_to_depth(span, depth)
        else:  # CLEANUP
            return self.cleanup_and_format(span)

    def reformat_at(self, document: str, offset: Optional[int], mode: FormatMode,
                    depth: Optional[int] = None) -> ReformatResult:
        """
        Locate the fragment around an offset and reformat it.

        Args:
            document: Host text
            offset: Position inside the fragment; None picks the first
                fragment in the document
            mode: Operation to run
            depth: Required for FormatMode.DEPTH

        Returns:
            ReformatResult whose apply() splices the replacement into document
        """
        if offset is None:
            span = self.locator.locate_first(document)
        else:
            validation = self.error_handler.validate_offset(document, offset)
            if not validation.is_valid:
                raise NoFragmentFound(validation.errors[0].message, offset)
            span = self.locator.locate(document, offset)

        return self.reformat(span, mode, depth)

    def repair(self, text: str) -> str:
        """Run the repair pipeline without parsing."""
        return self.repair_pipeline.repair(text)

    def _reformat(self, operation: str, span: Optional[TextSpan], depth: Depth,
                  repaired_text: Optional[str] = None) -> ReformatResult:
        if span is None:
            raise NoFragmentFound()

        source = span.text if repaired_text is None else repaired_text
        input_size = len(source.encode('utf-8'))
        profiling = (self.profiler.profile_operation(operation, input_size)
                     if self.profiler else nullcontext())

        with profiling as profiler:
            try:
                value = self.parser.parse(source)
            except ParseFailure as e:
                if repaired_text is not None:
                    e.context["repaired"] = True
                    self.logger.error(f"{operation} failed: {e} (repaired text: {repaired_text[:200]!r})")
                else:
                    self.logger.error(f"{operation} failed: {e}")
                raise

            if profiler:
                profiler.sample_performance()

            rendered = self.formatter.format(value, depth, span.column)

            if profiler:
                profiler.output_size = len(rendered.encode('utf-8'))

        line_count = rendered.count("\n") + 1
        self.logger.info(f"{operation}: reformatted {len(span.text)} chars at column {span.column} "
                         f"into {line_count} lines")

        return ReformatResult(
            text=rendered,
            column=span.column,
            start=span.start,
            end=span.end,
            repaired_text=repaired_text
        )
