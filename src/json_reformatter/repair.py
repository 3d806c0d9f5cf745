"""Ordered text rewrites that turn JSON-alike text into parseable JSON."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
from .types import RepairStepInterface


_LINE_BREAK = r'(?:\r\n|\r|\n)'

_MID_TOKEN_BREAK = re.compile(r'(\w)' + _LINE_BREAK + r'(?=[\w"])')
_REMAINING_BREAK = re.compile(_LINE_BREAK + r'[ \t]*')
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ufeff\ufffd]')
_SPACED_IDENTIFIER = re.compile(r'(?<!\w)[A-Z0-9_](?: [A-Z0-9_]){2,}(?!\w)')
_SINGLE_QUOTED = re.compile(r"'([^']*)'")
_UNQUOTED_KEY = re.compile(r'(?<=[{,\s])([A-Za-z_][A-Za-z0-9_]*)(\s*):')
# Inner text must hold something besides separators, so "", "" stays two strings
_DOUBLED_QUOTES = re.compile(r'""([^"]*[^"\s,:][^"]*)""')
_DOUBLED_QUOTES_BEFORE_STRUCTURE = re.compile(r'(:\s*)""(?=[{\[])')
_DOUBLED_QUOTES_AFTER_STRUCTURE = re.compile(r'([}\]])""')
_COLON_LINE_BREAK = re.compile(r':[ \t]*' + _LINE_BREAK + r'\s*')
_PRE_COLON_SPACE = re.compile(r'"\s+:')
_POST_COLON_SPACE = re.compile(r':[ \t]{2,}')


def join_mid_token_breaks(text: str) -> str:
    """Remove a line break between word characters, or before a quote."""
    return _MID_TOKEN_BREAK.sub(r'\1', text)


def collapse_line_breaks(text: str) -> str:
    """Replace each line break and the indentation after it with one space."""
    return _REMAINING_BREAK.sub(' ', text)


def strip_control_characters(text: str) -> str:
    """Drop raw control characters, byte-order marks and replacement characters."""
    return _CONTROL_CHARS.sub('', text)


def collapse_spaced_identifiers(text: str) -> str:
    """
    Rejoin spaced-out upper-case tokens such as ``A L W A Y S``.

    Only runs of three or more single characters are touched, so two
    capitalised words like ``MGU Navigation`` survive.
    """
    return _SPACED_IDENTIFIER.sub(lambda match: match.group(0).replace(' ', ''), text)


def convert_single_quotes(text: str) -> str:
    return _SINGLE_QUOTED.sub(r'"\1"', text)


def quote_unquoted_keys(text: str) -> str:
    """Wrap bare identifiers that precede a colon in double quotes."""
    return _UNQUOTED_KEY.sub(r'"\1"\2:', text)


def unwrap_doubled_quotes(text: str) -> str:
    """Turn ``""value""`` into ``"value"``, trimming the inner text."""
    return _DOUBLED_QUOTES.sub(lambda match: '"' + match.group(1).strip() + '"', text)


def unwrap_quoted_structures(text: str) -> str:
    """
    Drop doubled quotes wrapped around an embedded object or array.

    ``"key": ""{...}""`` becomes ``"key": {...}``. The scalar unwrap cannot
    reach these because the embedded document contains quotes of its own.
    """
    text = _DOUBLED_QUOTES_BEFORE_STRUCTURE.sub(r'\1', text)
    return _DOUBLED_QUOTES_AFTER_STRUCTURE.sub(r'\1', text)


def join_key_value_lines(text: str) -> str:
    """
    Pull a value that starts on the line after its colon up to the key.

    Does nothing once collapse_line_breaks has run; it only matters if the
    step order changes.
    """
    return _COLON_LINE_BREAK.sub(': ', text)


def remove_space_before_colons(text: str) -> str:
    return _PRE_COLON_SPACE.sub('":', text)


def normalize_space_after_colons(text: str) -> str:
    return _POST_COLON_SPACE.sub(': ', text)


@dataclass(frozen=True)
class RepairStep(RepairStepInterface):
    """A named rewrite within the repair pipeline."""
    name: str
    rewrite: Callable[[str], str]

    def apply(self, text: str) -> str:
        return self.rewrite(text)


# Later steps rely on earlier ones having normalized the text; do not reorder.
DEFAULT_STEPS: Tuple[RepairStep, ...] = (
    RepairStep("join_mid_token_breaks", join_mid_token_breaks),
    RepairStep("collapse_line_breaks", collapse_line_breaks),
    RepairStep("strip_control_characters", strip_control_characters),
    RepairStep("collapse_spaced_identifiers", collapse_spaced_identifiers),
    RepairStep("convert_single_quotes", convert_single_quotes),
    RepairStep("quote_unquoted_keys", quote_unquoted_keys),
    RepairStep("unwrap_doubled_quotes", unwrap_doubled_quotes),
    RepairStep("unwrap_quoted_structures", unwrap_quoted_structures),
    RepairStep("join_key_value_lines", join_key_value_lines),
    RepairStep("remove_space_before_colons", remove_space_before_colons),
    RepairStep("normalize_space_after_colons", normalize_space_after_colons),
)


class RepairPipeline:
    """
    Applies repair steps strictly in sequence.

    The pipeline is total: a step whose pattern does not match leaves the
    text as it is, and the result is not guaranteed to be valid JSON.
    """

    def __init__(self, steps: Optional[Sequence[RepairStep]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the repair pipeline.

        Args:
            steps: Ordered steps to apply (defaults to DEFAULT_STEPS)
            logger: Optional logger instance
        """
        self.steps = tuple(steps) if steps is not None else DEFAULT_STEPS
        self.logger = logger or logging.getLogger(__name__)

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]

    def repair(self, text: str) -> str:
        """
        Run every step over the text.

        Args:
            text: Raw JSON-alike text

        Returns:
            Normalized text
        """
        for step in self.steps:
            rewritten = step.apply(text)
            if rewritten != text:
                self.logger.debug(f"Repair step '{step.name}' rewrote {len(text)} -> {len(rewritten)} chars")
            text = rewritten
        return text

    def trace(self, text: str) -> List[Tuple[str, str]]:
        """
        Run the pipeline and record the steps that changed the text.

        Args:
            text: Raw JSON-alike text

        Returns:
            List of (step name, text after the step) for each effective step
        """
        changes = []
        for step in self.steps:
            rewritten = step.apply(text)
            if rewritten != text:
                changes.append((step.name, rewritten))
            text = rewritten
        return changes


_default_pipeline = RepairPipeline()


def repair(text: str) -> str:
    """Repair text with the default step order."""
    return _default_pipeline.repair(text)
