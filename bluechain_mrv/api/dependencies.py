"""API dependencies for authentication and authorization"""

import logging
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.database import get_db
from bluechain_mrv.exceptions import AuthenticationError
from bluechain_mrv.models import User, Profile, UserRole
from bluechain_mrv.services.auth_service import AuthService
from bluechain_mrv.services.redis_service import RedisService
from bluechain_mrv.services.role_gate import Caller, require_role

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """
    Resolve the bearer token into a Caller with the profile loaded.

    Raises:
        AuthenticationError: missing, revoked or invalid token, or unknown user
    """
    if not credentials:
        raise AuthenticationError("Missing authentication credentials")

    token = credentials.credentials

    # Check if token is blacklisted (logged out)
    if await RedisService().is_token_blacklisted(token):
        raise AuthenticationError("Token has been revoked")

    payload = AuthService.validate_token(token, token_type="access")
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = UUID(payload.get("sub") or "")
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    user = await db.get(User, user_id)
    if not user:
        raise AuthenticationError("User not found")

    # A failed profile lookup leaves the caller without a role; the role gate denies it
    try:
        profile = await db.get(Profile, user_id)
    except SQLAlchemyError as e:
        logger.warning(f"Profile lookup failed for {user_id}: {e}")
        profile = None

    return Caller(user_id=user.id, email=user.email, profile=profile, token=token)


def role_required(role: UserRole, operation: str) -> Callable:
    """
    Dependency factory gating an endpoint on the caller's role.

    Runs before the request body is validated, so a caller with the wrong
    role is refused regardless of the payload.
    """
    async def dependency(caller: Caller = Depends(get_current_user)) -> Caller:
        require_role(caller, role, operation)
        return caller

    return dependency
