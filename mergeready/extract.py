"""
Signal extraction.

Turns loosely-typed GitHub REST payloads into a canonical PRSnapshot. Every
field that is missing or has an unexpected shape maps to a named default, so
extraction never fails on partial data.
"""

from typing import Any

from mergeready.types.pulls import CheckRun, CheckState, PRSnapshot, RawPRData, Review

UNKNOWN_AUTHOR = "unknown"
UNNAMED_CHECK = "unnamed check"

# Conclusions of completed check runs. Anything not listed is treated as
# indeterminate and reads as pending.
_CONCLUSION_STATES: dict[str, CheckState] = {
    "success": "success",
    "failure": "failure",
    "timed_out": "failure",
    "action_required": "failure",
    "startup_failure": "failure",
    "cancelled": "error",
    "neutral": "error",
    "skipped": "error",
    "stale": "error",
}

# Review states that replace an earlier decision by the same reviewer.
_DECISIVE_REVIEW_STATES = frozenset({"APPROVED", "CHANGES_REQUESTED", "DISMISSED"})


def normalize_check_state(status: str | None, conclusion: str | None) -> CheckState:
    """
    Map a check run's raw status and conclusion to a normalized state.

    Only runs whose status is "completed" can succeed or fail; everything
    still queued or running is pending.

    Args:
        status: Raw platform status ("queued", "in_progress", "completed", ...)
        conclusion: Raw platform conclusion, None until the run completes

    Returns:
        One of "success", "failure", "pending", "error"
    """
    if (status or "").lower() != "completed":
        return "pending"
    if conclusion is None:
        return "pending"
    return _CONCLUSION_STATES.get(str(conclusion).lower(), "pending")


def extract(raw: RawPRData) -> PRSnapshot:
    """
    Build a PRSnapshot from raw platform data.

    Args:
        raw: Raw pull request, review, check run, file and comment payloads

    Returns:
        The canonical snapshot
    """
    pr = raw.pr if isinstance(raw.pr, dict) else {}

    return PRSnapshot(
        number=_as_int(pr.get("number")),
        title=_as_str(pr.get("title")),
        author=_login(pr.get("user")) or UNKNOWN_AUTHOR,
        draft=pr.get("draft") is True,
        mergeable=_parse_mergeable(pr.get("mergeable")),
        requested_reviewers=_parse_requested_reviewers(pr.get("requested_reviewers")),
        changed_files=_as_int(pr.get("changed_files")),
        additions=_as_int(pr.get("additions")),
        deletions=_as_int(pr.get("deletions")),
        head_sha=head_sha(pr),
        checks=tuple(_parse_check_run(item) for item in _check_run_items(raw.check_runs)),
        reviews=_resolve_reviews(_as_list(raw.reviews)),
        files=tuple(
            item["filename"]
            for item in _as_list(raw.files)
            if isinstance(item.get("filename"), str)
        ),
        comments_count=len(_as_list(raw.comments)),
    )


def head_sha(pr: dict[str, Any]) -> str | None:
    """Return the head commit SHA of a pull request payload, if present."""
    head = pr.get("head")
    if not isinstance(head, dict):
        return None
    sha = head.get("sha")
    return sha if isinstance(sha, str) and sha else None


def _parse_mergeable(value: Any) -> bool | None:
    # Only an explicit boolean counts; null means GitHub is still computing.
    if value is True or value is False:
        return value
    return None


def _parse_requested_reviewers(value: Any) -> tuple[str, ...]:
    names: list[str] = []
    for item in _as_list(value):
        name = _login(item)
        if name and name not in names:
            names.append(name)
    return tuple(names)


def _check_run_items(value: Any) -> list[dict[str, Any]]:
    # The check-runs endpoint wraps the list in {"total_count": n, "check_runs": [...]}
    if isinstance(value, dict):
        value = value.get("check_runs")
    return _as_list(value)


def _parse_check_run(item: dict[str, Any]) -> CheckRun:
    status = _as_str(item.get("status")).lower()
    conclusion = item.get("conclusion")
    if not isinstance(conclusion, str):
        conclusion = None
    return CheckRun(
        name=_as_str(item.get("name")) or UNNAMED_CHECK,
        status=status,
        conclusion=conclusion,
        state=normalize_check_state(status, conclusion),
    )


def _resolve_reviews(items: list[dict[str, Any]]) -> tuple[Review, ...]:
    """Collapse the review history to one effective decision per reviewer.

    A reviewer's latest decisive review wins. Comments only count while the
    reviewer has made no decision.
    """
    decisions: dict[str, str] = {}
    for item in items:
        reviewer = _login(item.get("user"))
        state = _as_str(item.get("state")).upper()
        if not reviewer or not state:
            continue
        current = decisions.get(reviewer)
        if (
            current is None
            or state in _DECISIVE_REVIEW_STATES
            or current not in _DECISIVE_REVIEW_STATES
        ):
            decisions[reviewer] = state
    return tuple(Review(reviewer=name, decision=state) for name, state in decisions.items())


def _login(value: Any) -> str | None:
    if not isinstance(value, dict):
        return None
    login = value.get("login") or value.get("slug")
    return login if isinstance(login, str) and login else None


def _as_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""
