"""
Typed environment variable readers.

Invalid values fall back to the default with a warning instead of failing
the run.
"""

import logging
import os

logger = logging.getLogger("postfeed")


def get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    val = os.getenv(key)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            logger.warning(f"[Config] Invalid integer for {key}: {val}, using default: {default}")
    return default


def get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable."""
    val = os.getenv(key)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            logger.warning(f"[Config] Invalid float for {key}: {val}, using default: {default}")
    return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """True for "1", "true", "yes" or "on" (case-insensitive)."""
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")
