"""API routers."""

from . import dedup, posts

__all__ = ["dedup", "posts"]
