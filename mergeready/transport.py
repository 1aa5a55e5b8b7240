"""
HTTP Transport for the GitHub REST API.

Handles HTTP communication with automatic retry logic, authentication headers
and error handling.
"""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from mergeready.exceptions import (
    AuthenticationError,
    AuthorizationError,
    MergeReadyError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from mergeready.logging import log_http_request, log_http_response

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_ACCEPT_HEADER = "application/vnd.github+json"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_USER_AGENT = "mergeready/0.1.0"


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


def build_headers(token: str | None, user_agent: str) -> dict[str, str]:
    """Default request headers for the GitHub REST API."""
    headers = {
        "Accept": DEFAULT_ACCEPT_HEADER,
        "X-GitHub-Api-Version": DEFAULT_API_VERSION,
        "User-Agent": user_agent,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def get_backoff_time(
    retry_config: RetryConfig, attempt: int, retry_after: str | None
) -> float:
    """
    Calculate backoff time for retry.

    Uses exponential backoff with jitter, respecting Retry-After header
    if present.

    Args:
        retry_config: Retry configuration
        attempt: Current attempt number (0-indexed)
        retry_after: Value of Retry-After header (if present)

    Returns:
        Time to wait in seconds
    """
    if retry_after and retry_config.respect_retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass  # Fall through to exponential backoff

    # Exponential backoff: backoff_factor ^ attempt
    base_wait = retry_config.backoff_factor ** attempt

    # Apply jitter (±jitter%)
    jitter_range = base_wait * retry_config.jitter
    wait_time = base_wait + random.uniform(-jitter_range, jitter_range)

    return min(wait_time, retry_config.max_backoff)


def should_retry(retry_config: RetryConfig, status_code: int, attempt: int) -> bool:
    """
    Determine if a request should be retried.

    Args:
        retry_config: Retry configuration
        status_code: HTTP status code
        attempt: Current attempt number (0-indexed)

    Returns:
        True if the request should be retried
    """
    if attempt >= retry_config.max_retries:
        return False

    return status_code in retry_config.retry_on


def decode_json(response: httpx.Response) -> Any:
    """
    Decode a successful response body.

    Raises:
        ServerError: If the body is not valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise ServerError(
            "INVALID_RESPONSE",
            f"Invalid JSON in HTTP {response.status_code} response",
            response.headers.get("X-GitHub-Request-Id"),
        ) from e


def parse_error_response(response: httpx.Response) -> MergeReadyError:
    """
    Parse a GitHub error response into a typed exception.

    GitHub reports errors as ``{"message": "...", "documentation_url": "..."}``.
    A 403 with an exhausted rate limit is reported as RateLimitedError.

    Args:
        response: HTTP response with error status

    Returns:
        Appropriate MergeReadyError subclass
    """
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    status_code = response.status_code
    message = data.get("message") or f"HTTP {status_code}"
    request_id = response.headers.get("X-GitHub-Request-Id")

    rate_limited = status_code == 429 or (
        status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
    )

    if rate_limited:
        return RateLimitedError(
            "RATE_LIMITED", message, _retry_after_seconds(response), request_id
        )
    elif status_code == 401:
        return AuthenticationError("UNAUTHORIZED", message, request_id)
    elif status_code == 403:
        return AuthorizationError("FORBIDDEN", message, request_id)
    elif status_code == 404:
        return NotFoundError("NOT_FOUND", message, request_id)
    elif status_code >= 500:
        return ServerError("SERVER_ERROR", message, request_id)
    else:
        return ValidationError("VALIDATION_ERROR", message, request_id)


def _retry_after_seconds(response: httpx.Response) -> int:
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return int(retry_after)
        except ValueError:
            pass

    reset = response.headers.get("X-RateLimit-Reset")
    if reset:
        try:
            return max(0, int(reset) - int(time.time()))
        except ValueError:
            pass

    return 60


class HTTPTransport:
    """
    HTTP transport layer for the GitHub REST API.

    Handles:
    - Authentication and API version headers
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Optional GitHub token; unauthenticated requests are rate limited harder
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            user_agent: User-Agent header value
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=build_headers(token, user_agent),
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a request with automatic retry.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/octo/repo/pulls/1")
            params: Query parameters

        Returns:
            Parsed JSON response (a dict or a list, depending on the endpoint)

        Raises:
            MergeReadyError: On API errors
        """
        def make_request() -> httpx.Response:
            log_http_request(method, f"{self.base_url}{path}", dict(self._client.headers), params)
            started = time.monotonic()
            response = self._client.request(method, path, params=params)
            log_http_response(
                response.status_code,
                f"{self.base_url}{path}",
                elapsed_ms=(time.monotonic() - started) * 1000,
                rate_limit_remaining=response.headers.get("X-RateLimit-Remaining"),
            )
            return response

        return self._execute_with_retry(make_request)

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            Parsed JSON response

        Raises:
            MergeReadyError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = request_fn()

                if response.status_code < 400:
                    return decode_json(response)

                error = parse_error_response(response)

                if not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error

                retry_after = response.headers.get("Retry-After")
                time.sleep(self._get_backoff_time(attempt, retry_after))

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                time.sleep(self._get_backoff_time(attempt, None))

        if last_error:
            if isinstance(last_error, MergeReadyError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        return should_retry(self.retry_config, status_code, attempt)

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        return get_backoff_time(self.retry_config, attempt, retry_after)
