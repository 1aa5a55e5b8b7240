"""mergeready type definitions.

This module exports all data model types used by the package.
"""

from mergeready.types.pulls import CheckRun, CheckState, PRSnapshot, RawPRData, Review
from mergeready.types.readiness import CheckSummary, ReadinessStatus, Verdict

__all__ = [
    # Pull request signals
    "CheckRun",
    "CheckState",
    "Review",
    "PRSnapshot",
    "RawPRData",
    # Readiness
    "ReadinessStatus",
    "Verdict",
    "CheckSummary",
]
