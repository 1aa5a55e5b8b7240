"""Readiness verdict models."""

from dataclasses import dataclass
from typing import Literal

ReadinessStatus = Literal["ready", "pending", "not-ready"]


@dataclass(frozen=True)
class Verdict:
    """Result of classifying a pull request snapshot."""

    status: ReadinessStatus
    issues: tuple[str, ...]  # discovery order
    next_actions: tuple[str, ...]  # priority order, at most three entries


@dataclass(frozen=True)
class CheckSummary:
    """Check counts echoed for display."""

    passing: int
    failing: int
    pending: int
    completed: int
    total: int

    @property
    def pass_rate(self) -> float | None:
        """Share of completed checks that passed, or None when none completed."""
        if self.completed == 0:
            return None
        return self.passing / self.completed
