"""MCP server exposing the pull request readiness check as a tool."""

from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from mergeready.async_client import AsyncMergeReadyClient
from mergeready.exceptions import MergeReadyError
from mergeready.logging import get_logger

SERVER_NAME = "mergeready"

_mcp_instance: FastMCP | None = None
logger = get_logger("server")


def get_mcp() -> FastMCP:
    global _mcp_instance
    if _mcp_instance is None:
        _mcp_instance = FastMCP(SERVER_NAME)
        _register_tools(_mcp_instance)
    return _mcp_instance


async def fetch_github_pr_impl(
    owner: str,
    repo: str,
    pr_number: int,
    client: AsyncMergeReadyClient | None = None,
) -> dict[str, Any]:
    """Assess one pull request and return the report payload.

    Any failure to load the pull request becomes a single tool error rather
    than a verdict.

    Args:
        owner: Repository owner
        repo: Repository name
        pr_number: Pull request number
        client: Client to use; one is created from the environment and closed
            afterwards when omitted
    """
    owns_client = client is None
    try:
        if client is None:
            client = AsyncMergeReadyClient.from_env()
        report = await client.assess(owner, repo, pr_number)
    except MergeReadyError as e:
        logger.warning("fetch-github-pr failed for %s/%s#%d: %s", owner, repo, pr_number, e)
        raise ToolError(f"Error fetching PR data: {e.message}") from e
    finally:
        if owns_client and client is not None:
            await client.close()

    logger.info("fetch-github-pr %s/%s#%d: %s", owner, repo, pr_number, report.status)
    return report.to_dict()


def _register_tools(mcp: FastMCP) -> None:
    @mcp.tool(
        name="fetch-github-pr",
        description="""Fetch GitHub pull request data for readiness assessment.

Aggregates approvals, CI check runs, merge conflicts and draft state into a
single status ("ready", "pending" or "not-ready") with the blocking issues in
the order they were found and up to three next actions in priority order.
""",
    )
    async def fetch_github_pr(
        owner: Annotated[str, Field(description="The GitHub repository owner (user or organization)")],
        repo: Annotated[str, Field(description="The repository name")],
        prNumber: Annotated[int, Field(description="The pull request number", ge=1)],  # noqa: N803
    ) -> dict[str, Any]:
        return await fetch_github_pr_impl(owner, repo, prNumber)
