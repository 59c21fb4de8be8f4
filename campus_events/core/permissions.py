"""
Role-based permission table.

Roles are a closed enum; every authorization decision goes through
``authorize`` against ``PERMISSIONS`` instead of comparing role strings at
the call site.
"""

from typing import Dict, FrozenSet, Tuple, Union

from campus_events.core.exceptions import AuthorizationError
from campus_events.models.admin import Role

ALL_ROLES: FrozenSet[Role] = frozenset(Role)
SUPER_ADMIN_ONLY: FrozenSet[Role] = frozenset({Role.SUPER_ADMIN})

READ, WRITE, DELETE, MANAGE = "read", "write", "delete", "manage"

PERMISSIONS: Dict[Tuple[str, str], FrozenSet[Role]] = {
    ("colleges", READ): ALL_ROLES,
    ("colleges", WRITE): ALL_ROLES,
    ("students", READ): ALL_ROLES,
    ("students", WRITE): ALL_ROLES,
    ("students", DELETE): ALL_ROLES,
    ("events", READ): ALL_ROLES,
    ("events", WRITE): ALL_ROLES,
    ("events", DELETE): ALL_ROLES,
    ("registrations", READ): ALL_ROLES,
    ("registrations", WRITE): ALL_ROLES,
    ("registrations", DELETE): ALL_ROLES,
    ("attendance", READ): ALL_ROLES,
    ("attendance", WRITE): ALL_ROLES,
    ("feedback", READ): ALL_ROLES,
    ("feedback", WRITE): ALL_ROLES,
    ("reports", READ): ALL_ROLES,
    ("admins", READ): SUPER_ADMIN_ONLY,
    ("admins", MANAGE): SUPER_ADMIN_ONLY,
}

def is_allowed(role: Union[str, Role], resource: str, action: str) -> bool:
    """Unknown (resource, action) pairs are denied"""
    try:
        role = Role(role)
    except ValueError:
        return False
    return role in PERMISSIONS.get((resource, action), frozenset())

def authorize(role: Union[str, Role], resource: str, action: str) -> None:
    if not is_allowed(role, resource, action):
        if PERMISSIONS.get((resource, action)) == SUPER_ADMIN_ONLY:
            raise AuthorizationError("Super admin access required")
        raise AuthorizationError("Insufficient permissions")
