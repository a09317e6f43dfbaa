"""API dependencies."""

from .auth import AuthSettings, get_auth_settings, require_api_key

__all__ = ["AuthSettings", "get_auth_settings", "require_api_key"]
