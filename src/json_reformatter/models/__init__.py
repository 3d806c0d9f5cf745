"""Data models for the JSON Reformatter."""

from .value import Value

__all__ = ["Value"]
