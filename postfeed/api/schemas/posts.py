"""
Post listing schemas.
"""

from typing import List

from pydantic import BaseModel, Field


class PostItem(BaseModel):
    """One feed entry."""

    id: str
    date: str
    title: str
    html: str
    hashtags: List[str] = Field(default_factory=list)
    permalink: str = ""


class PostListResponse(BaseModel):
    """Recent posts, newest first."""

    posts: List[PostItem]
    total: int
