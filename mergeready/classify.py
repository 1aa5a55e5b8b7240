"""
Readiness classification.

Maps a PRSnapshot to a Verdict. The status is a fold over an ordered list of
rules: each rule either leaves the status alone or asks for a downgrade, and
the fold only ever moves toward "not-ready".

Two kinds of downgrade exist. A blocking rule (conflicts, draft) sets
"not-ready" outright. A degrading rule (approvals, checks) moves the status
one step down: ready to pending, pending to not-ready.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from mergeready.types.pulls import PRSnapshot
from mergeready.types.readiness import CheckSummary, ReadinessStatus, Verdict

READY: ReadinessStatus = "ready"
PENDING: ReadinessStatus = "pending"
NOT_READY: ReadinessStatus = "not-ready"

# Best first.
STATUS_ORDER: tuple[ReadinessStatus, ...] = (READY, PENDING, NOT_READY)

# Consumers see at most this many next actions; the rest are dropped.
MAX_NEXT_ACTIONS = 3

CONFLICTS_ISSUE = "Resolve the existing merge conflicts before merging"
DRAFT_ISSUE = "PR is still in draft"
CONFLICTS_ACTION = CONFLICTS_ISSUE
DRAFT_ACTION = "Mark the PR as ready for review"

Severity = Literal["block", "degrade"]


@dataclass(frozen=True)
class RuleOutcome:
    """A rule's request to downgrade the status, with the issue that caused it."""

    severity: Severity
    issue: str


Rule = Callable[[PRSnapshot], RuleOutcome | None]


def worst(a: ReadinessStatus, b: ReadinessStatus) -> ReadinessStatus:
    """Return whichever status is closer to not-ready."""
    return a if STATUS_ORDER.index(a) >= STATUS_ORDER.index(b) else b


def step_down(status: ReadinessStatus) -> ReadinessStatus:
    """Return the next status toward not-ready; not-ready stays put."""
    index = STATUS_ORDER.index(status)
    return STATUS_ORDER[min(index + 1, len(STATUS_ORDER) - 1)]


def apply_outcome(status: ReadinessStatus, outcome: RuleOutcome) -> ReadinessStatus:
    if outcome.severity == "block":
        target = NOT_READY
    else:
        target = step_down(status)
    return worst(status, target)


def conflicts_rule(snapshot: PRSnapshot) -> RuleOutcome | None:
    if snapshot.has_conflicts:
        return RuleOutcome("block", CONFLICTS_ISSUE)
    return None


def draft_rule(snapshot: PRSnapshot) -> RuleOutcome | None:
    if snapshot.draft:
        return RuleOutcome("block", DRAFT_ISSUE)
    return None


def approvals_rule(snapshot: PRSnapshot) -> RuleOutcome | None:
    missing = missing_approvals(snapshot)
    if missing > 0:
        return RuleOutcome("degrade", f"Needs {missing} more approval(s)")
    return None


def checks_rule(snapshot: PRSnapshot) -> RuleOutcome | None:
    failing = len(snapshot.failing_checks)
    if failing > 0:
        return RuleOutcome("degrade", f"{failing} check(s) failing")
    return None


# Evaluation order; it fixes the order of issues in the verdict.
RULES: tuple[Rule, ...] = (conflicts_rule, draft_rule, approvals_rule, checks_rule)


def missing_approvals(snapshot: PRSnapshot) -> int:
    return max(0, snapshot.required_approvals - snapshot.approvals)


def evaluate_rules(
    snapshot: PRSnapshot, rules: tuple[Rule, ...] = RULES
) -> tuple[ReadinessStatus, tuple[str, ...]]:
    """
    Fold the rules over a snapshot.

    Args:
        snapshot: Snapshot to evaluate
        rules: Rules in evaluation order

    Returns:
        The final status and the issues in discovery order
    """
    status: ReadinessStatus = READY
    issues: list[str] = []
    for rule in rules:
        outcome = rule(snapshot)
        if outcome is None:
            continue
        status = apply_outcome(status, outcome)
        issues.append(outcome.issue)
    return status, tuple(issues)


def next_actions(snapshot: PRSnapshot) -> tuple[str, ...]:
    """
    Build the remediation actions for a snapshot in priority order.

    The priority order differs from the issue order: failing checks come
    before missing approvals. Pending checks never block on their own and are
    only worth waiting for once nothing has failed. Only the first
    MAX_NEXT_ACTIONS are returned.
    """
    actions: list[str] = []

    if snapshot.has_conflicts:
        actions.append(CONFLICTS_ACTION)

    if snapshot.draft:
        actions.append(DRAFT_ACTION)

    failing = len(snapshot.failing_checks)
    if failing > 0:
        actions.append(f"Fix {failing} failing {_plural(failing, 'check')}")

    missing = missing_approvals(snapshot)
    if missing > 0:
        actions.append(f"Get {missing} more {_plural(missing, 'approval')}")

    pending = len(snapshot.pending_checks)
    if pending > 0 and failing == 0:
        actions.append(f"Wait for {pending} pending {_plural(pending, 'check')} to complete")

    return tuple(actions[:MAX_NEXT_ACTIONS])


def classify(snapshot: PRSnapshot) -> Verdict:
    """
    Classify a pull request snapshot.

    Args:
        snapshot: Snapshot to classify

    Returns:
        Verdict with status, blocking issues and next actions
    """
    status, issues = evaluate_rules(snapshot)
    return Verdict(status=status, issues=issues, next_actions=next_actions(snapshot))


def summarize_checks(snapshot: PRSnapshot) -> CheckSummary:
    """Count checks by state for display."""
    checks = snapshot.checks
    return CheckSummary(
        passing=sum(1 for check in checks if check.is_completed and check.state == "success"),
        failing=len(snapshot.failing_checks),
        pending=len(snapshot.pending_checks),
        completed=sum(1 for check in checks if check.is_completed),
        total=len(checks),
    )


def _plural(count: int, noun: str) -> str:
    return noun if count == 1 else f"{noun}s"
