"""mergeready resource clients."""

from mergeready.clients.pulls import PullsClient

__all__ = [
    "PullsClient",
]
