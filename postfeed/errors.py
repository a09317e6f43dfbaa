"""
Postfeed exceptions.

The novelty guard never raises; these cover the collaborators around it
(model providers, trend source, feed file).
"""

from typing import Optional


class PostFeedError(Exception):
    """Base exception for all postfeed errors."""
    pass


class ModelProviderError(PostFeedError):
    """Raised when a model provider call fails or returns an unusable body."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.provider = provider
        self.status_code = status_code
        prefix = f"{provider} error"
        if status_code is not None:
            prefix += f": {status_code}"
        super().__init__(f"{prefix} {message}".strip())


class TrendFetchError(PostFeedError):
    """Raised when the news search request fails."""
    pass


class FeedStoreError(PostFeedError):
    """
    Raised when the posts feed cannot be read or written.

    Examples:
    - posts file missing
    - file is not JSON or lacks a "posts" list
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Feed file {path}: {reason}")
