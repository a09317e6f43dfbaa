"""
Feed Store - JSON feed of published posts.

The feed is a single JSON document ``{"posts": [...]}`` ordered newest
first. The static site reads it directly; the generator reads the most
recent entries as novelty references and prepends each accepted post.
"""

import hashlib
import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from postfeed.errors import FeedStoreError
from postfeed.infra.data_paths import get_posts_file_path

logger = logging.getLogger("postfeed")

MAX_POSTS = 365  # keep one year of daily posts
DEFAULT_RECENT = 15


@dataclass
class PostEntry:
    """One post in the feed."""
    id: str
    date: str
    title: str
    html: str
    hashtags: List[str]
    sources: List[Dict[str, Any]] = field(default_factory=list)
    permalink: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_post_entry(
    body: str,
    html: str,
    title: str,
    hashtags: List[str],
    date: Optional[str] = None
) -> PostEntry:
    """
    Build a feed entry from a generated post body.

    The id is the first 12 hex chars of SHA-1(body + date), so the same
    body published on another day gets a different id.

    Args:
        body: Generated markdown text
        html: Rendered body stored in the feed
        title: Post title
        hashtags: Hashtags without the leading '#'
        date: ISO timestamp (now, UTC, if None)

    Returns:
        PostEntry: Entry ready to append
    """
    date = date or datetime.now(timezone.utc).isoformat()
    post_id = hashlib.sha1((body + date).encode("utf-8")).hexdigest()[:12]
    return PostEntry(
        id=post_id,
        date=date,
        title=title,
        html=html,
        hashtags=list(hashtags),
    )


class FeedStore:
    """
    Read/append access to the posts feed file.

    Usage:
        store = FeedStore()
        references = store.recent_html(15)
        store.append(entry)
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, max_posts: int = MAX_POSTS):
        """
        Initialize the feed store.

        Args:
            path: Feed file. If None, uses POSTS_FILE env var or data/posts.json.
            max_posts: Number of entries kept after each append
        """
        self.path = Path(path) if path else get_posts_file_path()
        self.max_posts = max_posts

    def load(self) -> List[Dict[str, Any]]:
        """
        Load all posts, newest first.

        Raises:
            FeedStoreError: If the file is missing or not JSON, or if it lacks
                a posts list of objects
        """
        if not self.path.exists():
            raise FeedStoreError(str(self.path), "file not found")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise FeedStoreError(str(self.path), f"invalid JSON ({e})") from e

        posts = data.get("posts") if isinstance(data, dict) else None
        if not isinstance(posts, list):
            raise FeedStoreError(str(self.path), 'expected {"posts": [...]}')
        if not all(isinstance(post, dict) for post in posts):
            raise FeedStoreError(str(self.path), "posts entries must be objects")

        logger.debug(f"[Feed] Loaded {len(posts)} posts from {self.path}")
        return posts

    def recent(self, limit: int = DEFAULT_RECENT) -> List[Dict[str, Any]]:
        """Return the newest ``limit`` posts."""
        return self.load()[:max(limit, 0)]

    def recent_html(self, limit: int = DEFAULT_RECENT) -> List[str]:
        """Return the HTML bodies of the newest ``limit`` posts."""
        return [post.get("html", "") for post in self.recent(limit)]

    def append(self, entry: Union[PostEntry, Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Prepend a post and rewrite the feed, trimmed to ``max_posts``.

        A missing feed file is created with the single entry.

        Returns:
            List[Dict]: The posts as written
        """
        record = entry.to_dict() if isinstance(entry, PostEntry) else dict(entry)

        try:
            posts = self.load()
        except FeedStoreError:
            if self.path.exists():
                raise
            logger.info(f"[Feed] Creating new feed file: {self.path}")
            posts = []

        updated = [record] + posts
        updated = updated[:self.max_posts]

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"posts": updated}, f, ensure_ascii=False, indent=2)

        logger.info(f"[Feed] Wrote post {record.get('id')} ({record.get('title')})")
        return updated
