"""Pull request signal models."""

from dataclasses import dataclass
from typing import Any, Literal

CheckState = Literal["success", "failure", "pending", "error"]

APPROVED = "APPROVED"


@dataclass(frozen=True)
class CheckRun:
    """One CI/status check on the pull request's head commit."""

    name: str
    status: str  # "queued", "in_progress", "completed", ...
    conclusion: str | None  # "success", "failure", "cancelled", ... (None until completed)
    state: CheckState

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def is_failing(self) -> bool:
        return self.state in ("failure", "error")


@dataclass(frozen=True)
class Review:
    """A reviewer's effective decision on a pull request."""

    reviewer: str
    decision: str  # "APPROVED", "CHANGES_REQUESTED", "COMMENTED", "DISMISSED", "PENDING"


@dataclass(frozen=True)
class PRSnapshot:
    """Immutable point-in-time view of a pull request's readiness signals."""

    number: int
    title: str
    author: str
    draft: bool
    mergeable: bool | None  # None while the platform is still computing it
    requested_reviewers: tuple[str, ...] = ()
    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    head_sha: str | None = None
    checks: tuple[CheckRun, ...] = ()
    reviews: tuple[Review, ...] = ()
    files: tuple[str, ...] = ()
    comments_count: int = 0

    @property
    def approvals(self) -> int:
        return sum(1 for review in self.reviews if review.decision == APPROVED)

    @property
    def required_approvals(self) -> int:
        # At least one approval is needed even when nobody was requested.
        return max(1, len(self.requested_reviewers))

    @property
    def reviewers(self) -> tuple[str, ...]:
        return tuple(review.reviewer for review in self.reviews)

    @property
    def has_conflicts(self) -> bool:
        return self.mergeable is False

    @property
    def failing_checks(self) -> tuple[CheckRun, ...]:
        return tuple(check for check in self.checks if check.is_failing)

    @property
    def pending_checks(self) -> tuple[CheckRun, ...]:
        return tuple(check for check in self.checks if check.state == "pending")


@dataclass
class RawPRData:
    """Un-normalized payloads as returned by the GitHub REST API.

    Only ``pr`` is mandatory. ``None`` for any other field means the fetch
    was skipped or failed and the extractor treats it as empty.
    """

    pr: dict[str, Any]
    reviews: list[dict[str, Any]] | None = None
    check_runs: dict[str, Any] | list[dict[str, Any]] | None = None
    files: list[dict[str, Any]] | None = None
    comments: list[dict[str, Any]] | None = None
