"""Redis service for token revocation and login throttling"""

import redis.asyncio as redis
from typing import Optional
from bluechain_mrv.config import settings

LOGIN_LOCKOUT_SECONDS = 900  # 15 minutes


class RedisService:
    """Service for Redis operations including token blacklisting"""

    _client: Optional[redis.Redis] = None

    @classmethod
    async def get_client(cls) -> redis.Redis:
        """Get or create Redis client"""
        if cls._client is None:
            cls._client = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
        return cls._client

    @classmethod
    async def close(cls):
        """Close Redis connection"""
        if cls._client:
            await cls._client.aclose()
            cls._client = None

    async def blacklist_token(self, token: str, expiration_seconds: int):
        """
        Add a token to the blacklist

        Args:
            token: JWT token to blacklist
            expiration_seconds: How long to keep the token in blacklist (should match token expiration)
        """
        client = await self.get_client()
        await client.setex(f"blacklist:{token}", expiration_seconds, "1")

    async def is_token_blacklisted(self, token: str) -> bool:
        """Check if a token is blacklisted"""
        client = await self.get_client()
        result = await client.get(f"blacklist:{token}")
        return result is not None

    async def increment_login_attempts(self, ip_address: str) -> int:
        """
        Increment failed login attempts for an IP address

        Returns:
            Current number of attempts
        """
        client = await self.get_client()
        key = f"login_attempts:{ip_address}"
        count = await client.incr(key)

        # Set expiration on first attempt
        if count == 1:
            await client.expire(key, LOGIN_LOCKOUT_SECONDS)

        return count

    async def reset_login_attempts(self, ip_address: str):
        client = await self.get_client()
        await client.delete(f"login_attempts:{ip_address}")

    async def get_login_attempts(self, ip_address: str) -> int:
        """Get current failed login attempts for an IP address"""
        client = await self.get_client()
        result = await client.get(f"login_attempts:{ip_address}")
        return int(result) if result else 0
