"""
Infrastructure module - logging, paths and environment readers.
"""

from .data_paths import (
    get_project_root,
    get_data_root,
    get_posts_file_path,
    ensure_data_directories,
)
from .env import get_env_bool, get_env_float, get_env_int
from .logging_config import setup_logging, DailyRotatingFileHandler

__all__ = [
    # data_paths
    "get_project_root",
    "get_data_root",
    "get_posts_file_path",
    "ensure_data_directories",
    # env
    "get_env_bool",
    "get_env_float",
    "get_env_int",
    # logging
    "setup_logging",
    "DailyRotatingFileHandler",
]
