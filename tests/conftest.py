"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_nested_json():
    """Sample nested structure for formatting tests."""
    return {
        "metadata": {
            "version": "1.0",
            "tags": ["a", "b"]
        },
        "data": [
            {"type": "A", "values": [1, 2, 3]},
            {"type": "B", "values": []},
        ],
        "enabled": True,
        "owner": None
    }


@pytest.fixture
def malformed_fragment():
    """JSON-alike text with single quotes and bare keys."""
    return "{ name: 'Bob', AGE: 30 }"


@pytest.fixture
def embedded_document():
    """Source code with a JSON object embedded after an assignment."""
    return 'const config = {"a": [1, 2], "b": {"c": 3}};\n'
