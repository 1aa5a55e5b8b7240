"""mergeready async resource clients."""

from mergeready.async_clients.pulls import AsyncPullsClient

__all__ = [
    "AsyncPullsClient",
]
