"""
Shared route dependencies: bearer authentication, role gate and rate limits
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from campus_events.core.config import settings
from campus_events.core.exceptions import AuthenticationError
from campus_events.core.permissions import authorize
from campus_events.core.rate_limiter import InMemoryRateLimitStore, RateLimiter
from campus_events.core.security import decode_token

security = HTTPBearer(auto_error=False)

rate_limit_store = InMemoryRateLimitStore()

general_limiter = RateLimiter(
    rate_limit_store,
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    key_prefix="general",
)

auth_limiter = RateLimiter(
    rate_limit_store,
    max_requests=settings.AUTH_RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    key_prefix="auth",
    message="Too many authentication attempts, please try again later",
)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Decode the bearer token and attach its claims to the request"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token is required")

    payload = decode_token(credentials.credentials)
    if not payload.get("id") or not payload.get("role"):
        raise AuthenticationError("Invalid token")

    request.state.user = payload
    return payload


def require_permission(resource: str, action: str):
    """Dependency factory: authenticated admin whose role may perform ``action``"""

    async def checker(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        authorize(user["role"], resource, action)
        return user

    return checker
