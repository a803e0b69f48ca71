"""Role gate consulted by every role-scoped operation"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from bluechain_mrv.exceptions import AuthorizationError
from bluechain_mrv.models import Profile, UserRole
from bluechain_mrv.monitoring.metrics import denied_operations_total

logger = logging.getLogger(__name__)


@dataclass
class Caller:
    """
    Authenticated caller passed explicitly into each service call.

    `profile` is None when the identity has no profile row (or the lookup
    failed); such callers are denied by every role check.
    """
    user_id: UUID
    email: Optional[str]
    profile: Optional[Profile]
    token: Optional[str] = None

    @property
    def role(self) -> Optional[str]:
        return self.profile.role if self.profile else None


def authorize(profile: Optional[Profile], required_role: UserRole) -> bool:
    """Return True when the profile exists and carries the required role"""
    if profile is None:
        return False
    return profile.role == UserRole(required_role).value


def require_role(caller: Caller, required_role: UserRole, operation: str) -> None:
    """
    Raise unless the caller holds `required_role`.

    Raises:
        AuthorizationError: missing profile or a different role
    """
    if authorize(caller.profile, required_role):
        return

    denied_operations_total.labels(
        operation=operation, required_role=UserRole(required_role).value
    ).inc()
    logger.warning(
        f"Denied {operation} for user {caller.user_id} with role {caller.role!r}"
    )
    raise AuthorizationError(f"Only {UserRole(required_role).value}s can {operation}")
