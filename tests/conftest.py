"""Shared fixtures for the mergeready test suite."""

from mergeready.testing.fixtures import (  # noqa: F401
    conflicted_snapshot,
    draft_snapshot,
    mock_client,
    sample_raw_pr_data,
    sample_snapshot,
)
