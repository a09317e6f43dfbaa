"""
Data path helpers for postfeed.

Directory structure:
data/
 └── posts.json        # Feed consumed by the static site, newest first

Environment Variables:
- POSTS_FILE: Override the feed file location (default: data/posts.json)
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger("postfeed")


def get_project_root() -> Path:
    """
    Get the project root directory.

    File lives at postfeed/infra/data_paths.py, so project root is 2 levels up.

    Returns:
        Path: Project root directory
    """
    return Path(__file__).parent.parent.parent.resolve()


def get_data_root() -> Path:
    """Get the data/ directory path."""
    return get_project_root() / "data"


def get_posts_file_path() -> Path:
    """
    Get the posts feed file path.

    Returns:
        Path: POSTS_FILE if set, otherwise data/posts.json
    """
    env_path = os.getenv("POSTS_FILE")
    if env_path:
        return Path(env_path)
    return get_data_root() / "posts.json"


def ensure_data_directories() -> None:
    """Create the directory holding the feed file if needed."""
    parent = get_posts_file_path().parent
    if not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"[DataPaths] Created directory: {parent}")
