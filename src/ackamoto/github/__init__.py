"""GitHub integration for ackamoto."""

from ackamoto.github.client import FetchError, FetchResult, GitHubClient

__all__ = [
    "FetchError",
    "FetchResult",
    "GitHubClient",
]
