"""Shared pytest fixtures for all tests."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mixed_buffer():
    """A buffer holding a JSON object, a blank line and a CSV table."""
    return '{\n"a":1\n}\n\nx,y,z\n1,2,3\n'


@pytest.fixture
def notes_buffer():
    """Plain text around an inline JSON record and a CSV table."""
    return (
        "Export notes\n"
        '{"id": 7, "tags": ["a", "b"]}\n'
        "\n"
        "name,age\n"
        "Alice,30\n"
        "Bob,4\n"
        "\n"
        "end of file"
    )


@pytest.fixture
def mock_config():
    """Create a configuration with a small size cap and caching enabled."""
    from siftview_mcp.config import (
        AnalysisConfig,
        CacheConfig,
        ServerConfig,
        SiftViewConfig,
    )

    return SiftViewConfig(
        analysis=AnalysisConfig(
            max_buffer_bytes=4096,
            diff_context_lines=3,
            left_label="current",
            right_label="clipboard",
        ),
        cache=CacheConfig(enabled=True, max_size=16, max_age_seconds=60),
        server=ServerConfig(transport="stdio"),
    )
