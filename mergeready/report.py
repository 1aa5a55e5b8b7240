"""Readiness report combining a snapshot with its verdict for display."""

from dataclasses import dataclass
from typing import Any

from mergeready.classify import classify, summarize_checks
from mergeready.types.pulls import PRSnapshot
from mergeready.types.readiness import CheckSummary, Verdict

# Changed files listed in the report; the full count is still reported.
MAX_DISPLAY_FILES = 10


@dataclass(frozen=True)
class ReadinessReport:
    """A pull request snapshot, its verdict and the display counts."""

    snapshot: PRSnapshot
    verdict: Verdict
    checks: CheckSummary

    @property
    def status(self) -> str:
        return self.verdict.status

    def to_dict(self) -> dict[str, Any]:
        """Render the report as a JSON-ready dict with camelCase keys."""
        snapshot = self.snapshot
        return {
            "prNumber": snapshot.number,
            "title": snapshot.title,
            "author": snapshot.author,
            "status": self.verdict.status,
            "draft": snapshot.draft,
            "hasConflicts": snapshot.has_conflicts,
            "mergeable": snapshot.mergeable,
            "approvals": snapshot.approvals,
            "requiredApprovals": snapshot.required_approvals,
            "requestedReviewers": list(snapshot.requested_reviewers),
            "reviewers": list(snapshot.reviewers),
            "commentsCount": snapshot.comments_count,
            "checkStatus": {
                "passing": self.checks.passing,
                "failing": self.checks.failing,
                "pending": self.checks.pending,
                "completed": self.checks.completed,
                "total": self.checks.total,
                "passRate": self.checks.pass_rate,
            },
            "additions": snapshot.additions,
            "deletions": snapshot.deletions,
            "changedFiles": snapshot.changed_files,
            "files": list(snapshot.files[:MAX_DISPLAY_FILES]),
            "issues": list(self.verdict.issues),
            "nextActions": list(self.verdict.next_actions),
        }


def build_report(snapshot: PRSnapshot, verdict: Verdict | None = None) -> ReadinessReport:
    """
    Build a readiness report.

    Args:
        snapshot: Snapshot to report on
        verdict: Precomputed verdict; classified from the snapshot when omitted

    Returns:
        ReadinessReport
    """
    if verdict is None:
        verdict = classify(snapshot)
    return ReadinessReport(snapshot=snapshot, verdict=verdict, checks=summarize_checks(snapshot))
