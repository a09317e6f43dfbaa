"""API request/response schemas."""

from .dedup import NoveltyEvaluateRequest, NoveltyEvaluateResponse
from .posts import PostItem, PostListResponse

__all__ = [
    "NoveltyEvaluateRequest",
    "NoveltyEvaluateResponse",
    "PostItem",
    "PostListResponse",
]
