"""
Pytest plugin for mergeready testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["mergeready.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from mergeready.testing.fixtures import (
    conflicted_snapshot,
    draft_snapshot,
    mock_client,
    sample_raw_pr_data,
    sample_snapshot,
)

__all__ = [
    "mock_client",
    "sample_raw_pr_data",
    "sample_snapshot",
    "draft_snapshot",
    "conflicted_snapshot",
]
