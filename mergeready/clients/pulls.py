"""Pull requests resource client.

Returns the raw GitHub payloads; normalization happens in
``mergeready.extract``.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mergeready.transport import HTTPTransport

PER_PAGE = 100
MAX_PAGES = 10


def pull_path(owner: str, repo: str, number: int) -> str:
    return f"/repos/{owner}/{repo}/pulls/{number}"


class PullsClient:
    """Client for the pull request endpoints a readiness check needs."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        """
        Get pull request metadata.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            Raw pull request payload

        Raises:
            NotFoundError: If the pull request does not exist
        """
        return self.transport.get(pull_path(owner, repo, number))

    def list_reviews(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """List submitted reviews in chronological order."""
        return self._paginate(f"{pull_path(owner, repo, number)}/reviews")

    def list_check_runs(self, owner: str, repo: str, sha: str) -> list[dict[str, Any]]:
        """
        List check runs for a commit.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Head commit SHA of the pull request

        Returns:
            Raw check run payloads
        """
        return self._paginate(
            f"/repos/{owner}/{repo}/commits/{sha}/check-runs", key="check_runs"
        )

    def list_files(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """List changed files."""
        return self._paginate(f"{pull_path(owner, repo, number)}/files")

    def list_comments(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """List conversation comments (issue comments on the pull request)."""
        return self._paginate(f"/repos/{owner}/{repo}/issues/{number}/comments")

    def _paginate(self, path: str, key: str | None = None) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        for page in range(1, MAX_PAGES + 1):
            data = self.transport.get(path, params={"per_page": PER_PAGE, "page": page})
            batch = data.get(key, []) if key and isinstance(data, dict) else data
            if not isinstance(batch, list):
                break
            items.extend(batch)
            if len(batch) < PER_PAGE:
                break
        return items
