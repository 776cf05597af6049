"""
API routes for the caller's stored profile
"""
import logging
from fastapi import APIRouter, Depends, HTTPException

from ..models.user import UserProfile
from .deps import get_store, require_identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserProfile)
async def get_profile(identity: str = Depends(require_identity), store=Depends(get_store)):
    """
    Get the caller's stored profile
    """
    try:
        profile = await store.get_user_profile(identity)

        if profile is None:
            raise HTTPException(status_code=404, detail=f"Profile not found for user: {identity}")

        return profile

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching profile for {identity}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve profile: {str(e)}")


@router.put("/profile", response_model=UserProfile)
async def update_profile(
    profile: UserProfile,
    identity: str = Depends(require_identity),
    store=Depends(get_store)
):
    """
    Create or replace the caller's stored profile
    """
    try:
        return await store.save_user_profile(identity, profile)
    except Exception as e:
        logger.error(f"Error saving profile for {identity}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save profile: {str(e)}")
