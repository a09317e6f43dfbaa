"""
Feed module - JSON posts feed read/append.
"""

from .store import (
    FeedStore,
    PostEntry,
    build_post_entry,
    MAX_POSTS,
)

__all__ = [
    "FeedStore",
    "PostEntry",
    "build_post_entry",
    "MAX_POSTS",
]
