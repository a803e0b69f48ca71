"""Profile endpoints"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.api.dependencies import get_current_user
from bluechain_mrv.database import commit_or_raise, get_db
from bluechain_mrv.exceptions import NotFoundError
from bluechain_mrv.schemas.profile import ProfileResponse, ProfileUpdate
from bluechain_mrv.services.role_gate import Caller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileResponse, status_code=status.HTTP_200_OK)
async def get_my_profile(caller: Caller = Depends(get_current_user)):
    """Get the authenticated caller's role profile"""
    if caller.profile is None:
        raise NotFoundError("Profile not found")
    return ProfileResponse.model_validate(caller.profile)


@router.patch("/me", response_model=ProfileResponse, status_code=status.HTTP_200_OK)
async def update_my_profile(
    profile_update: ProfileUpdate,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update organization name or registration number

    Role, email and verification status cannot be changed here
    """
    profile = caller.profile
    if profile is None:
        raise NotFoundError("Profile not found")

    for field, value in profile_update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(profile, field, value.strip())

    profile.updated_at = datetime.utcnow()
    await commit_or_raise(db)
    await db.refresh(profile)
    logger.info(f"Updated profile {profile.id}")

    return ProfileResponse.model_validate(profile)
