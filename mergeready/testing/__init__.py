"""mergeready testing utilities.

Provides a mock client, payload builders and fixtures for testing
applications that use mergeready.
"""

from mergeready.testing.fixtures import (
    create_mock_check_run,
    create_mock_snapshot,
    make_check_run_payload,
    make_pr_payload,
    make_raw_pr_data,
    make_review_payload,
)
from mergeready.testing.mock import MockCall, MockMergeReadyClient, MockResponse

__all__ = [
    # Mock client
    "MockMergeReadyClient",
    "MockCall",
    "MockResponse",
    # Builders
    "make_pr_payload",
    "make_review_payload",
    "make_check_run_payload",
    "make_raw_pr_data",
    "create_mock_check_run",
    "create_mock_snapshot",
]
