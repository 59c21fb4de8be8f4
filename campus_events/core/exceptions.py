"""
Application exception hierarchy.

Every error a request can end in is one of these. The handlers registered in
``main.py`` turn them into the standard error envelope::

    {"success": false, "message": ..., "errors": ..., "timestamp": ...}

Usage:
    from campus_events.core.exceptions import NotFoundError

    if not event:
        raise NotFoundError("Event", event_id)
"""

from typing import Any, Optional


class CampusEventsError(Exception):
    """Base exception for all application errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        errors: Any = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


# ============================================
# Client input errors (400)
# ============================================

class ValidationFailed(CampusEventsError):
    """Request payload did not match its schema"""

    status_code = 400

    def __init__(self, errors: list, message: str = "Validation failed"):
        super().__init__(message, errors=errors)


class DomainValidationError(CampusEventsError):
    """A record broke one of its construct-time invariants"""

    status_code = 400


# ============================================
# Resource errors
# ============================================

class NotFoundError(CampusEventsError):
    """Referenced entity does not exist"""

    status_code = 404

    def __init__(self, resource: str, resource_id: Any = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ConflictError(CampusEventsError):
    """Uniqueness violation"""

    status_code = 409


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(CampusEventsError):
    """Missing or bad credentials"""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")


class InvalidTokenError(AuthenticationError):
    """JWT token is malformed or its signature does not verify"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class AuthorizationError(CampusEventsError):
    """Authenticated but not allowed"""

    status_code = 403

    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message)


class RateLimitError(CampusEventsError):
    """Too many requests from one key within the window"""

    status_code = 429

    def __init__(self, message: str, limit: int, reset_time: str, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            message,
            errors={"limit": limit, "remaining": 0, "reset_time": reset_time},
        )


# ============================================
# Infrastructure errors
# ============================================

class PersistenceError(CampusEventsError):
    """Database failure wrapped with operation context"""

    status_code = 500


class ConfigurationError(CampusEventsError):
    """Required configuration is missing; raised at startup only"""

    status_code = 500
