"""
mergeready async client.

Same interface as MergeReadyClient; the secondary fetches run concurrently.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from mergeready.async_clients import AsyncPullsClient
from mergeready.async_transport import AsyncHTTPTransport
from mergeready.classify import classify
from mergeready.client import MergeReadyClient, load_settings, pr_ref
from mergeready.exceptions import MergeReadyError
from mergeready.extract import extract, head_sha
from mergeready.logging import get_logger, log_classification
from mergeready.report import ReadinessReport, build_report
from mergeready.transport import DEFAULT_BASE_URL, RetryConfig
from mergeready.types.pulls import RawPRData

T = TypeVar("T")

logger = get_logger()


class AsyncMergeReadyClient:
    """
    Async client for assessing pull request readiness.

    Example:
        ```python
        from mergeready import AsyncMergeReadyClient

        async with AsyncMergeReadyClient.from_env() as client:
            report = await client.assess("octo", "hello-world", 42)
        ```
    """

    DEFAULT_TIMEOUT = MergeReadyClient.DEFAULT_TIMEOUT

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the async client.

        Args:
            token: GitHub token (optional)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.pulls = AsyncPullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float | None = None,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncMergeReadyClient":
        """
        Create an async client from environment variables.

        Raises:
            ConfigurationError: If an environment variable is invalid
        """
        return cls(retry_config=retry_config, **load_settings(timeout))

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport."""
        return self._transport

    async def fetch(self, owner: str, repo: str, number: int) -> RawPRData:
        """
        Fetch the raw data a readiness assessment needs.

        The pull request is fetched first for its head commit; the four
        secondary fetches then run concurrently and fail softly.

        Raises:
            MergeReadyError: If the pull request metadata cannot be fetched
        """
        ref = pr_ref(owner, repo, number)
        pr = await self.pulls.get(owner, repo, number)

        sha = head_sha(pr)
        if sha:
            checks_fetch = self._soft(
                ref, "check runs", self.pulls.list_check_runs(owner, repo, sha)
            )
        else:
            logger.warning("%s has no head commit; skipping check runs", ref)
            checks_fetch = _nothing()

        reviews, check_runs, files, comments = await asyncio.gather(
            self._soft(ref, "reviews", self.pulls.list_reviews(owner, repo, number)),
            checks_fetch,
            self._soft(ref, "files", self.pulls.list_files(owner, repo, number)),
            self._soft(ref, "comments", self.pulls.list_comments(owner, repo, number)),
        )

        return RawPRData(
            pr=pr,
            reviews=reviews,
            check_runs=check_runs,
            files=files,
            comments=comments,
        )

    async def assess(self, owner: str, repo: str, number: int) -> ReadinessReport:
        """
        Fetch a pull request and classify its readiness.

        Raises:
            NotFoundError: If the pull request does not exist
            MergeReadyError: If the pull request metadata cannot be fetched
        """
        snapshot = extract(await self.fetch(owner, repo, number))
        verdict = classify(snapshot)
        log_classification(pr_ref(owner, repo, number), verdict.status, verdict.issues)
        return build_report(snapshot, verdict)

    async def _soft(
        self, ref: str, what: str, fetch: Coroutine[Any, Any, T]
    ) -> T | None:
        try:
            return await fetch
        except MergeReadyError as e:
            logger.warning("Could not fetch %s for %s: %s", what, ref, e)
            return None

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncMergeReadyClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()


async def _nothing() -> None:
    return None
