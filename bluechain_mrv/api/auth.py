"""Authentication endpoints"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.api.dependencies import security
from bluechain_mrv.config import settings
from bluechain_mrv.database import get_db
from bluechain_mrv.exceptions import AuthenticationError, RateLimitError
from bluechain_mrv.models import User, Profile
from bluechain_mrv.schemas.auth import (
    LoginRequest,
    RefreshTokenResponse,
    SignupRequest,
    TokenResponse,
)
from bluechain_mrv.schemas.profile import ProfileResponse
from bluechain_mrv.services.auth_service import AuthService
from bluechain_mrv.services.redis_service import RedisService

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def _token_response(user: User, profile: Profile) -> TokenResponse:
    access_token, refresh_token = AuthService.issue_tokens(user, profile)
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_hours * 3600,
        profile=ProfileResponse.model_validate(profile) if profile else None,
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(signup_data: SignupRequest, db: AsyncSession = Depends(get_db)):
    """
    Register a generator, validator or consumer account

    Validator registration is invite-only unless enabled in configuration.
    """
    user, profile = await AuthService.register(db, signup_data)
    return _token_response(user, profile)


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def login(
    login_data: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Authenticate user and return JWT tokens

    - **email**: User email address
    - **password**: User password
    """
    redis_service = RedisService()

    client_ip = request.client.host if request.client else "unknown"

    attempts = await redis_service.get_login_attempts(client_ip)
    if attempts >= settings.max_login_attempts:
        raise RateLimitError("Maximum login attempts exceeded. Please try again in 15 minutes.")

    try:
        user, profile = await AuthService.authenticate(db, login_data.email, login_data.password)
    except AuthenticationError:
        await redis_service.increment_login_attempts(client_ip)
        raise

    await redis_service.reset_login_attempts(client_ip)
    return _token_response(user, profile)


@router.post("/refresh", response_model=RefreshTokenResponse, status_code=status.HTTP_200_OK)
async def refresh_token(
    credentials=Depends(security),
    db: AsyncSession = Depends(get_db)
):
    """
    Refresh access token using refresh token

    - **Authorization**: Bearer {refresh_token}
    """
    if not credentials:
        raise AuthenticationError("Missing authentication credentials")

    payload = AuthService.validate_token(credentials.credentials, token_type="refresh")
    if not payload:
        raise AuthenticationError("Invalid or expired refresh token")

    try:
        user_id = UUID(payload.get("sub") or "")
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    user = await db.get(User, user_id)
    if not user:
        raise AuthenticationError("User not found")

    profile = await db.get(Profile, user.id)
    access_token = AuthService.create_access_token(
        str(user.id), user.email, profile.role if profile else None
    )

    return RefreshTokenResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_hours * 3600,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(credentials=Depends(security)):
    """
    Logout user by blacklisting the access token

    Returns 204 No Content on success
    """
    if not credentials:
        return

    token = credentials.credentials
    payload = AuthService.decode_token(token)

    if not payload:
        # Even if token is invalid, return success (idempotent operation)
        return

    exp = payload.get("exp")
    if exp:
        remaining = int(exp - datetime.now(timezone.utc).timestamp())
        if remaining > 0:
            await RedisService().blacklist_token(token, remaining)
