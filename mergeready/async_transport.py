"""
Async HTTP Transport for the GitHub REST API.

Handles async HTTP communication with automatic retry logic and error
handling using the httpx async client.
"""

import asyncio
import time
from collections.abc import Callable, Coroutine
from typing import Any

import httpx

from mergeready.exceptions import MergeReadyError, ServerError
from mergeready.logging import log_http_request, log_http_response
from mergeready.transport import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    RetryConfig,
    build_headers,
    decode_json,
    get_backoff_time,
    parse_error_response,
    should_retry,
)


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for the GitHub REST API.

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
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Optional GitHub token
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            user_agent: User-Agent header value
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=build_headers(token, user_agent),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a request with automatic retry.

        Args:
            method: HTTP method
            path: API path
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            MergeReadyError: On API errors
        """
        async def make_request() -> httpx.Response:
            log_http_request(method, f"{self.base_url}{path}", dict(self._client.headers), params)
            started = time.monotonic()
            response = await self._client.request(method, path, params=params)
            log_http_response(
                response.status_code,
                f"{self.base_url}{path}",
                elapsed_ms=(time.monotonic() - started) * 1000,
                rate_limit_remaining=response.headers.get("X-RateLimit-Remaining"),
            )
            return response

        return await self._execute_with_retry(make_request)

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def _execute_with_retry(
        self, request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]]
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Async function that makes the HTTP request

        Returns:
            Parsed JSON response

        Raises:
            MergeReadyError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = await request_fn()

                if response.status_code < 400:
                    return decode_json(response)

                error = parse_error_response(response)

                if not should_retry(self.retry_config, response.status_code, attempt):
                    raise error

                last_error = error

                retry_after = response.headers.get("Retry-After")
                await asyncio.sleep(get_backoff_time(self.retry_config, attempt, retry_after))

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                await asyncio.sleep(get_backoff_time(self.retry_config, attempt, None))

        if last_error:
            if isinstance(last_error, MergeReadyError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")
