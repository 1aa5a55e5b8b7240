"""
Tests for the async transport and client.
"""

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from mergeready.async_client import AsyncMergeReadyClient
from mergeready.async_clients.pulls import AsyncPullsClient
from mergeready.async_transport import AsyncHTTPTransport
from mergeready.exceptions import NotFoundError, ServerError
from mergeready.testing.fixtures import (
    make_check_run_payload,
    make_pr_payload,
    make_review_payload,
)
from mergeready.transport import RetryConfig


def stub_pulls(client: AsyncMergeReadyClient, **overrides: Any) -> MagicMock:
    pulls = MagicMock()
    pulls.get = AsyncMock(return_value=overrides.get("pr", make_pr_payload()))
    pulls.list_reviews = AsyncMock(return_value=overrides.get("reviews", [make_review_payload("hubot")]))
    pulls.list_check_runs = AsyncMock(
        return_value=overrides.get("check_runs", [make_check_run_payload()])
    )
    pulls.list_files = AsyncMock(return_value=overrides.get("files", []))
    pulls.list_comments = AsyncMock(return_value=overrides.get("comments", [{"body": "lgtm"}]))
    client.pulls = pulls
    return pulls


class TestAsyncTransport:
    def test_retries_then_succeeds(self) -> None:
        async def run() -> Any:
            transport = AsyncHTTPTransport(retry_config=RetryConfig(max_retries=1))
            request = httpx.Request("GET", "https://api.github.com/x")
            responses = [
                httpx.Response(502, json={"message": "bad gateway"}, request=request),
                httpx.Response(200, json={"ok": True}, request=request),
            ]
            with patch.object(transport._client, "request", AsyncMock(side_effect=responses)), patch(
                "mergeready.async_transport.asyncio.sleep", AsyncMock()
            ):
                result = await transport.get("/x")
            await transport.close()
            return result

        assert asyncio.run(run()) == {"ok": True}

    def test_not_found_raises(self) -> None:
        async def run() -> None:
            transport = AsyncHTTPTransport()
            request = httpx.Request("GET", "https://api.github.com/x")
            response = httpx.Response(404, json={"message": "Not Found"}, request=request)
            try:
                with patch.object(transport._client, "request", AsyncMock(return_value=response)):
                    await transport.get("/x")
            finally:
                await transport.close()

        with pytest.raises(NotFoundError):
            asyncio.run(run())

    def test_non_json_body_is_invalid_response(self) -> None:
        async def run() -> None:
            transport = AsyncHTTPTransport()
            request = httpx.Request("GET", "https://api.github.com/x")
            response = httpx.Response(200, content=b"<html>oops</html>", request=request)
            try:
                with patch.object(transport._client, "request", AsyncMock(return_value=response)):
                    await transport.get("/x")
            finally:
                await transport.close()

        with pytest.raises(ServerError) as exc_info:
            asyncio.run(run())

        assert exc_info.value.code == "INVALID_RESPONSE"


class TestAsyncPullsClient:
    def test_check_runs_unwrap_envelope(self) -> None:
        transport = MagicMock()
        transport.get = AsyncMock(return_value={"check_runs": [make_check_run_payload("lint")]})

        runs = asyncio.run(AsyncPullsClient(transport).list_check_runs("octo", "repo", "abc"))

        assert runs == [make_check_run_payload("lint")]


class TestAsyncMergeReadyClient:
    def test_assess(self) -> None:
        client = AsyncMergeReadyClient()
        stub_pulls(client)

        report = asyncio.run(client.assess("octo", "repo", 42))

        assert report.status == "ready"
        assert report.snapshot.comments_count == 1

    def test_secondary_failures_degrade_to_empty(self) -> None:
        client = AsyncMergeReadyClient()
        pulls = stub_pulls(client)
        pulls.list_reviews.side_effect = ServerError("SERVER_ERROR", "boom")
        pulls.list_check_runs.side_effect = ServerError("SERVER_ERROR", "boom")

        raw = asyncio.run(client.fetch("octo", "repo", 42))

        assert raw.reviews is None
        assert raw.check_runs is None
        assert raw.comments == [{"body": "lgtm"}]

    def test_undecodable_secondary_body_degrades_to_empty(self) -> None:
        async def run() -> Any:
            client = AsyncMergeReadyClient()
            request = httpx.Request("GET", "https://api.github.com/x")

            async def respond(method: str, path: str, params: Any = None) -> httpx.Response:
                if path == "/repos/octo/repo/pulls/42":
                    return httpx.Response(200, json=make_pr_payload(), request=request)
                if path.endswith("/reviews"):
                    return httpx.Response(200, content=b"<html>oops</html>", request=request)
                return httpx.Response(200, json=[], request=request)

            try:
                with patch.object(client.transport._client, "request", side_effect=respond):
                    return await client.assess("octo", "repo", 42)
            finally:
                await client.close()

        report = asyncio.run(run())

        assert report.snapshot.reviews == ()
        assert report.status == "pending"

    def test_pull_request_failure_propagates(self) -> None:
        client = AsyncMergeReadyClient()
        pulls = stub_pulls(client)
        pulls.get.side_effect = NotFoundError("NOT_FOUND", "Not Found")

        with pytest.raises(NotFoundError):
            asyncio.run(client.assess("octo", "repo", 42))

        pulls.list_reviews.assert_not_called()

    def test_missing_head_sha_skips_check_runs(self) -> None:
        client = AsyncMergeReadyClient()
        pulls = stub_pulls(client, pr=make_pr_payload(head_sha=None))

        raw = asyncio.run(client.fetch("octo", "repo", 42))

        assert raw.check_runs is None
        pulls.list_check_runs.assert_not_called()

    def test_secondary_fetches_run_concurrently(self) -> None:
        client = AsyncMergeReadyClient()
        pulls = stub_pulls(client)
        in_flight = 0
        peak = 0

        def tracked(result: Any):
            async def fetch(*args: Any) -> Any:
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return result

            return fetch

        pulls.list_reviews = tracked([])
        pulls.list_check_runs = tracked([])
        pulls.list_files = tracked([])
        pulls.list_comments = tracked([])

        asyncio.run(client.fetch("octo", "repo", 42))

        assert peak == 4
