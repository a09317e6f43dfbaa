"""
Posts router.

Endpoints:
- GET /posts/recent - Most recent feed entries
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from postfeed.errors import FeedStoreError
from postfeed.feed.store import FeedStore

from ..schemas.posts import PostItem, PostListResponse

logger = logging.getLogger("postfeed")

router = APIRouter()


@router.get("/recent", response_model=PostListResponse)
async def list_recent_posts(
    limit: int = Query(default=15, ge=1, le=365, description="Number of posts to return"),
):
    """List the newest posts in the feed."""
    try:
        posts = FeedStore().recent(limit)
    except FeedStoreError as e:
        logger.error(f"[PostsAPI] Feed unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    items = [
        PostItem(
            id=p.get("id", ""),
            date=p.get("date", ""),
            title=p.get("title", ""),
            html=p.get("html", ""),
            hashtags=p.get("hashtags") or [],
            permalink=p.get("permalink") or "",
        )
        for p in posts
    ]
    return PostListResponse(posts=items, total=len(items))
