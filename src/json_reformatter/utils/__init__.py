"""Utility functions for the JSON Reformatter."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
