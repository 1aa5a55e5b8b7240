"""
mergeready main client.

Fetches a pull request from GitHub and assesses whether it is ready to merge.
"""

import os
from collections.abc import Callable
from typing import Any, TypeVar

from mergeready.classify import classify
from mergeready.clients import PullsClient
from mergeready.exceptions import ConfigurationError, MergeReadyError
from mergeready.extract import extract, head_sha
from mergeready.logging import get_logger, log_classification
from mergeready.report import ReadinessReport, build_report
from mergeready.transport import DEFAULT_BASE_URL, HTTPTransport, RetryConfig
from mergeready.types.pulls import RawPRData

T = TypeVar("T")

logger = get_logger()


def load_settings(timeout: float | None = None) -> dict[str, Any]:
    """
    Read client settings from environment variables.

    Environment variables:
        GITHUB_TOKEN: API token (optional)
        MERGEREADY_BASE_URL: Base URL for API (optional, default: https://api.github.com)
        MERGEREADY_TIMEOUT: Request timeout in seconds (optional, default: 30)

    Args:
        timeout: Explicit timeout that overrides MERGEREADY_TIMEOUT

    Returns:
        Keyword arguments for a client constructor

    Raises:
        ConfigurationError: If MERGEREADY_TIMEOUT is not a positive number
    """
    if timeout is None:
        raw_timeout = os.environ.get("MERGEREADY_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid MERGEREADY_TIMEOUT: {raw_timeout!r}. Must be a number of seconds"
                ) from None
            if timeout <= 0:
                raise ConfigurationError("MERGEREADY_TIMEOUT must be greater than zero")
        else:
            timeout = MergeReadyClient.DEFAULT_TIMEOUT

    return {
        "token": os.environ.get("GITHUB_TOKEN") or None,
        "base_url": os.environ.get("MERGEREADY_BASE_URL", DEFAULT_BASE_URL),
        "timeout": timeout,
    }


def pr_ref(owner: str, repo: str, number: int) -> str:
    return f"{owner}/{repo}#{number}"


class MergeReadyClient:
    """
    Client for assessing pull request readiness.

    Example:
        ```python
        from mergeready import MergeReadyClient

        with MergeReadyClient.from_env() as client:
            report = client.assess("octo", "hello-world", 42)
            print(report.status, report.verdict.next_actions)
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: GitHub token (optional)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.pulls = PullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float | None = None,
        retry_config: RetryConfig | None = None,
    ) -> "MergeReadyClient":
        """
        Create a client from environment variables.

        See ``load_settings`` for the variables read.

        Raises:
            ConfigurationError: If an environment variable is invalid
        """
        return cls(retry_config=retry_config, **load_settings(timeout))

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def fetch(self, owner: str, repo: str, number: int) -> RawPRData:
        """
        Fetch the raw data a readiness assessment needs.

        The pull request itself must load. Reviews, check runs, files and
        comments are fetched softly: a failure is logged and leaves that
        field empty.

        Raises:
            MergeReadyError: If the pull request metadata cannot be fetched
        """
        ref = pr_ref(owner, repo, number)
        pr = self.pulls.get(owner, repo, number)

        sha = head_sha(pr)
        check_runs = None
        if sha:
            check_runs = self._soft(
                ref, "check runs", lambda: self.pulls.list_check_runs(owner, repo, sha)
            )
        else:
            logger.warning("%s has no head commit; skipping check runs", ref)

        return RawPRData(
            pr=pr,
            reviews=self._soft(ref, "reviews", lambda: self.pulls.list_reviews(owner, repo, number)),
            check_runs=check_runs,
            files=self._soft(ref, "files", lambda: self.pulls.list_files(owner, repo, number)),
            comments=self._soft(
                ref, "comments", lambda: self.pulls.list_comments(owner, repo, number)
            ),
        )

    def assess(self, owner: str, repo: str, number: int) -> ReadinessReport:
        """
        Fetch a pull request and classify its readiness.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            ReadinessReport with the verdict and display counts

        Raises:
            NotFoundError: If the pull request does not exist
            MergeReadyError: If the pull request metadata cannot be fetched
        """
        snapshot = extract(self.fetch(owner, repo, number))
        verdict = classify(snapshot)
        log_classification(pr_ref(owner, repo, number), verdict.status, verdict.issues)
        return build_report(snapshot, verdict)

    def _soft(self, ref: str, what: str, fetch: Callable[[], T]) -> T | None:
        try:
            return fetch()
        except MergeReadyError as e:
            logger.warning("Could not fetch %s for %s: %s", what, ref, e)
            return None

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "MergeReadyClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
