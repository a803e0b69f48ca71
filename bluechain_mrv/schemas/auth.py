"""Authentication and sign-up schemas"""

import re
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from bluechain_mrv.models.profile import UserRole
from bluechain_mrv.schemas.profile import ProfileResponse

_HAS_LETTER = re.compile(r"[a-zA-Z]")
_HAS_DIGIT = re.compile(r"[0-9]")


class SignupRequest(BaseModel):
    """Sign-up request; creates the identity and its role profile together"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="Minimum 8 characters with letters and numbers")
    role: UserRole = Field(..., description="generator, validator or consumer")
    organization_name: str = Field(..., max_length=255, description="Organization or company name")
    registration_number: str = Field(..., max_length=100, description="Registration number / tax id")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Validate password meets security requirements"""
        if len(v) < 8 or not _HAS_LETTER.search(v) or not _HAS_DIGIT.search(v):
            raise ValueError("Min 8 characters with letters & numbers")
        return v

    @field_validator("organization_name", "registration_number")
    @classmethod
    def validate_not_blank(cls, v, info):
        if not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v.strip()


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")
    profile: Optional[ProfileResponse] = Field(None, description="Caller's role profile")


class RefreshTokenResponse(BaseModel):
    """Refresh token response schema"""
    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")
