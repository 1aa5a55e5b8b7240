"""Async pull requests resource client."""

from typing import TYPE_CHECKING, Any

from mergeready.clients.pulls import MAX_PAGES, PER_PAGE, pull_path

if TYPE_CHECKING:
    from mergeready.async_transport import AsyncHTTPTransport


class AsyncPullsClient:
    """Async client for the pull request endpoints a readiness check needs."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        """Get pull request metadata."""
        return await self.transport.get(pull_path(owner, repo, number))

    async def list_reviews(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """List submitted reviews in chronological order."""
        return await self._paginate(f"{pull_path(owner, repo, number)}/reviews")

    async def list_check_runs(self, owner: str, repo: str, sha: str) -> list[dict[str, Any]]:
        """List check runs for a commit."""
        return await self._paginate(
            f"/repos/{owner}/{repo}/commits/{sha}/check-runs", key="check_runs"
        )

    async def list_files(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """List changed files."""
        return await self._paginate(f"{pull_path(owner, repo, number)}/files")

    async def list_comments(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """List conversation comments."""
        return await self._paginate(f"/repos/{owner}/{repo}/issues/{number}/comments")

    async def _paginate(self, path: str, key: str | None = None) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        for page in range(1, MAX_PAGES + 1):
            data = await self.transport.get(path, params={"per_page": PER_PAGE, "page": page})
            batch = data.get(key, []) if key and isinstance(data, dict) else data
            if not isinstance(batch, list):
                break
            items.extend(batch)
            if len(batch) < PER_PAGE:
                break
        return items
