"""
User Routes

Location and notification preferences of the acting user.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.api.deps import get_current_user_id
from tourmates.db.session import get_async_db
from tourmates.features.notifications import NotificationService
from tourmates.features.users import (
    UserRepository,
    LocationSettingsUpdate,
    LocationSettingsResponse,
    UserUpdateResponse,
)

router = APIRouter()


@router.get("/location-settings", response_model=LocationSettingsResponse)
async def get_location_settings(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """Current location settings of the acting user."""
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return LocationSettingsResponse.model_validate(user)


@router.patch("/location-settings", response_model=UserUpdateResponse)
async def update_location_settings(
    request: LocationSettingsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Update location settings.

    Only fields present in the body change. Ranges (radius 5-200 km,
    valid coordinates) are checked by the request schema.
    """
    success = await NotificationService(db).update_user_location_settings(user_id, request)
    return UserUpdateResponse(success=success)
