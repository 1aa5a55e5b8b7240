"""mergeready - pull request readiness assessment for GitHub."""

from mergeready.async_client import AsyncMergeReadyClient
from mergeready.classify import MAX_NEXT_ACTIONS, classify, next_actions
from mergeready.client import MergeReadyClient
from mergeready.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    MergeReadyError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from mergeready.extract import extract, normalize_check_state
from mergeready.logging import configure_logging, get_logger
from mergeready.report import ReadinessReport, build_report
from mergeready.transport import HTTPTransport, RetryConfig
from mergeready.types import CheckRun, CheckSummary, PRSnapshot, RawPRData, Review, Verdict

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Clients
    "MergeReadyClient",
    "AsyncMergeReadyClient",
    # Readiness
    "extract",
    "normalize_check_state",
    "classify",
    "next_actions",
    "MAX_NEXT_ACTIONS",
    "build_report",
    "ReadinessReport",
    # Types
    "CheckRun",
    "Review",
    "PRSnapshot",
    "RawPRData",
    "Verdict",
    "CheckSummary",
    # Exceptions
    "MergeReadyError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "ConfigurationError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
