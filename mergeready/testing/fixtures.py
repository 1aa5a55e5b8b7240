"""
Builders and pytest fixtures for testing code that uses mergeready.

The ``make_*_payload`` builders produce GitHub REST payloads with only the
fields the extractor reads; the ``create_mock_*`` helpers build normalized
models directly.
"""

from typing import Any, Generator

import pytest

from mergeready.extract import normalize_check_state
from mergeready.testing.mock import MockMergeReadyClient
from mergeready.types.pulls import CheckRun, PRSnapshot, RawPRData, Review

DEFAULT_HEAD_SHA = "6dcb09b5b57875f334f61aebed695e2e4193db5e"


# ============================================================================
# Raw Payload Builders
# ============================================================================


def make_pr_payload(
    number: int = 42,
    title: str = "Add readiness check",
    author: str = "octocat",
    draft: bool = False,
    mergeable: bool | None = True,
    requested_reviewers: list[str] | None = None,
    changed_files: int = 3,
    additions: int = 120,
    deletions: int = 15,
    head_sha: str | None = DEFAULT_HEAD_SHA,
) -> dict[str, Any]:
    """Build a pull request payload as returned by GET /repos/{owner}/{repo}/pulls/{number}."""
    payload: dict[str, Any] = {
        "number": number,
        "title": title,
        "user": {"login": author},
        "draft": draft,
        "mergeable": mergeable,
        "requested_reviewers": [{"login": name} for name in requested_reviewers or []],
        "changed_files": changed_files,
        "additions": additions,
        "deletions": deletions,
    }
    if head_sha is not None:
        payload["head"] = {"sha": head_sha, "ref": "feature"}
    return payload


def make_review_payload(reviewer: str, state: str = "APPROVED") -> dict[str, Any]:
    """Build one entry of the reviews list."""
    return {"user": {"login": reviewer}, "state": state}


def make_check_run_payload(
    name: str = "build",
    status: str = "completed",
    conclusion: str | None = "success",
) -> dict[str, Any]:
    """Build one entry of the check-runs list."""
    return {"name": name, "status": status, "conclusion": conclusion}


def make_raw_pr_data(
    pr: dict[str, Any] | None = None,
    reviews: list[dict[str, Any]] | None = None,
    check_runs: list[dict[str, Any]] | None = None,
    files: list[str] | None = None,
    comments: int = 0,
) -> RawPRData:
    """Assemble RawPRData, wrapping check runs the way the API does."""
    return RawPRData(
        pr=pr if pr is not None else make_pr_payload(),
        reviews=reviews if reviews is not None else [],
        check_runs={"total_count": len(check_runs or []), "check_runs": check_runs or []},
        files=[{"filename": path} for path in files or []],
        comments=[{"body": f"comment {i}"} for i in range(comments)],
    )


# ============================================================================
# Model Builders
# ============================================================================


def create_mock_check_run(
    name: str = "build",
    status: str = "completed",
    conclusion: str | None = "success",
) -> CheckRun:
    """Create a CheckRun with its state normalized from status and conclusion."""
    return CheckRun(
        name=name,
        status=status.lower(),
        conclusion=conclusion,
        state=normalize_check_state(status, conclusion),
    )


def create_mock_snapshot(
    mergeable: bool | None = True,
    draft: bool = False,
    approvals: int = 1,
    requested_reviewers: int = 0,
    checks: list[CheckRun] | None = None,
    number: int = 42,
    title: str = "Add readiness check",
    author: str = "octocat",
) -> PRSnapshot:
    """
    Create a PRSnapshot from signal counts.

    Example:
        ```python
        snapshot = create_mock_snapshot(mergeable=False, approvals=3)
        assert classify(snapshot).status == "not-ready"
        ```
    """
    return PRSnapshot(
        number=number,
        title=title,
        author=author,
        draft=draft,
        mergeable=mergeable,
        requested_reviewers=tuple(f"reviewer-{i}" for i in range(requested_reviewers)),
        reviews=tuple(Review(reviewer=f"approver-{i}", decision="APPROVED") for i in range(approvals)),
        checks=tuple(checks or ()),
    )


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockMergeReadyClient, None, None]:
    """
    Provide a MockMergeReadyClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.configure_fetch(response=make_raw_pr_data(...))
            report = my_function(mock_client)
            assert mock_client.was_called("assess")
        ```
    """
    client = MockMergeReadyClient()
    yield client
    client.reset()


@pytest.fixture
def sample_raw_pr_data() -> RawPRData:
    """Provide raw data for a pull request that is ready to merge."""
    return make_raw_pr_data(
        pr=make_pr_payload(requested_reviewers=["hubot"]),
        reviews=[make_review_payload("hubot")],
        check_runs=[make_check_run_payload("build"), make_check_run_payload("lint")],
        files=["README.md", "src/app.py"],
        comments=2,
    )


@pytest.fixture
def sample_snapshot() -> PRSnapshot:
    """Provide a snapshot that is ready to merge."""
    return create_mock_snapshot(
        approvals=2,
        requested_reviewers=2,
        checks=[create_mock_check_run("build"), create_mock_check_run("test")],
    )


@pytest.fixture
def draft_snapshot() -> PRSnapshot:
    """Provide a draft snapshot that is otherwise ready."""
    return create_mock_snapshot(draft=True, approvals=1)


@pytest.fixture
def conflicted_snapshot() -> PRSnapshot:
    """Provide a snapshot with confirmed merge conflicts."""
    return create_mock_snapshot(mergeable=False, approvals=1)
