"""Authentication service for JWT token management, password hashing and sign-up"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Tuple
from jose import JWTError, jwt
import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.config import settings
from bluechain_mrv.database import commit_or_raise
from bluechain_mrv.exceptions import AuthenticationError, AuthorizationError, ConflictError
from bluechain_mrv.models import User, Profile, UserRole
from bluechain_mrv.schemas.auth import SignupRequest

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "bluechain-mrv"


class AuthService:
    """Service for handling authentication, JWT tokens, and password management"""

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using bcrypt with salt rounds >= 12

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=12)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash

        Args:
            plain_password: Plain text password to verify
            hashed_password: Hashed password to compare against

        Returns:
            True if password matches, False otherwise
        """
        return bcrypt.checkpw(
            plain_password.encode('utf-8'), hashed_password.encode('utf-8')
        )

    @staticmethod
    def generate_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None,
        token_type: str = "access"
    ) -> str:
        """
        Generate a JWT token with the provided data

        Args:
            data: Dictionary of claims to include in the token
            expires_delta: Optional expiration time delta (defaults to 24 hours for access, 7 days for refresh)
            token_type: Type of token ('access' or 'refresh')

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()

        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            hours = settings.jwt_expiration_hours if token_type == "access" else 168
            expire = datetime.utcnow() + timedelta(hours=hours)

        to_encode.update({
            "exp": expire,
            "iat": datetime.utcnow(),
            "iss": TOKEN_ISSUER,
            "type": token_type
        })

        # Use jwt_secret if available, otherwise fall back to secret_key
        secret = settings.jwt_secret or settings.secret_key
        return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_token(token: str) -> Optional[Dict[str, Any]]:
        """
        Decode and validate a JWT token

        Returns:
            Dictionary of token claims if valid, None otherwise
        """
        try:
            secret = settings.jwt_secret or settings.secret_key
            return jwt.decode(
                token,
                secret,
                algorithms=[settings.jwt_algorithm],
                issuer=TOKEN_ISSUER,
            )
        except JWTError:
            return None

    @staticmethod
    def validate_token(token: str, token_type: str = "access") -> Optional[Dict[str, Any]]:
        """
        Validate a JWT token including signature, expiration, and type

        Args:
            token: JWT token string to validate
            token_type: Expected token type ('access' or 'refresh')

        Returns:
            Dictionary of token claims if valid, None otherwise
        """
        payload = AuthService.decode_token(token)

        if not payload:
            return None

        if payload.get("type") != token_type:
            return None

        # jose already validates exp, but double-check
        exp = payload.get("exp")
        if exp and datetime.fromtimestamp(exp, tz=timezone.utc) < datetime.now(timezone.utc):
            return None

        return payload

    @staticmethod
    def create_access_token(user_id: str, email: str, role: Optional[str]) -> str:
        """Create an access token carrying the caller's role claim"""
        data = {
            "sub": user_id,
            "email": email,
            "role": role,
        }
        return AuthService.generate_token(data, token_type="access")

    @staticmethod
    def create_refresh_token(user_id: str) -> str:
        """Create a refresh token for a user"""
        return AuthService.generate_token({"sub": user_id}, token_type="refresh")

    @staticmethod
    def issue_tokens(user: User, profile: Optional[Profile]) -> Tuple[str, str]:
        """Return an (access, refresh) token pair for a user"""
        role = profile.role if profile else None
        access_token = AuthService.create_access_token(str(user.id), user.email, role)
        refresh_token = AuthService.create_refresh_token(str(user.id))
        return access_token, refresh_token

    @staticmethod
    async def register(db: AsyncSession, signup: SignupRequest) -> Tuple[User, Profile]:
        """
        Create an identity and its role profile in a single transaction.

        Raises:
            AuthorizationError: validator sign-up while registration is invite-only
            ConflictError: email already registered
        """
        if signup.role == UserRole.VALIDATOR and not settings.allow_validator_signup:
            logger.warning(f"Refused validator self-registration for {signup.email}")
            raise AuthorizationError(
                "Validator registration is invite-only. Please contact the administrator for access."
            )

        email = signup.email.lower()
        existing = await db.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("An account with this email already exists")

        user = User(email=email, password_hash=AuthService.hash_password(signup.password))
        db.add(user)
        await db.flush()

        profile = Profile(
            id=user.id,
            role=signup.role.value,
            organization_name=signup.organization_name,
            registration_number=signup.registration_number,
            email=email,
        )
        db.add(profile)
        await commit_or_raise(db)

        logger.info(f"Registered {profile.role} account {user.id}")
        return user, profile

    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> Tuple[User, Optional[Profile]]:
        """
        Check credentials and return the user with their profile.

        Raises:
            AuthenticationError: unknown email or wrong password (same message for both)
        """
        result = await db.execute(select(User).where(User.email == email.lower()))
        user = result.scalar_one_or_none()

        if not user or not AuthService.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        profile = await db.get(Profile, user.id)
        return user, profile
