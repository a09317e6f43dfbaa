"""
Shared-key access control for the feed API.

Settings are read from the environment on every request, so changing
them does not need a process restart:

- API_AUTH_ENABLED: "true"/"1"/"yes"/"on" turns the check on
- API_KEY: expected value of the X-API-Key header
"""

import hmac
import os
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from postfeed.infra.env import get_env_bool

API_KEY_HEADER = "X-API-Key"

api_key_header = APIKeyHeader(
    name=API_KEY_HEADER,
    auto_error=False,
    description="Shared key for /dedup and /posts (checked when API_AUTH_ENABLED is on)",
)


@dataclass(frozen=True)
class AuthSettings:
    enabled: bool = False
    api_key: str = ""

    @classmethod
    def from_env(cls) -> "AuthSettings":
        return cls(
            enabled=get_env_bool("API_AUTH_ENABLED", False),
            api_key=os.getenv("API_KEY", ""),
        )


def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_env()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def require_api_key(
    api_key: Optional[str] = Security(api_key_header),
    settings: AuthSettings = Depends(get_auth_settings),
) -> Optional[str]:
    """
    Reject the request unless it carries the configured feed API key.

    Returns None when access control is off. An enabled check with an empty
    API_KEY rejects every request.
    """
    if not settings.enabled:
        return None

    if not api_key:
        raise _unauthorized(f"Feed API key required in the {API_KEY_HEADER} header")

    expected = settings.api_key.encode("utf-8")
    if not expected or not hmac.compare_digest(api_key.encode("utf-8"), expected):
        raise _unauthorized("Feed API key not recognized")

    return api_key
