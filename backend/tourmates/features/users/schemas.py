"""
User schemas.

Pydantic models for location preferences.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional

from tourmates.shared.constants import (
    MIN_NOTIFICATION_RADIUS_KM,
    MAX_NOTIFICATION_RADIUS_KM,
)


class LocationSettingsUpdate(BaseModel):
    """
    Partial location settings update.

    Only fields present in the request are written; use
    model_dump(exclude_unset=True) to get them.
    """

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location: Optional[str] = Field(default=None, max_length=255)
    notification_radius: Optional[int] = Field(
        default=None,
        ge=MIN_NOTIFICATION_RADIUS_KM,
        le=MAX_NOTIFICATION_RADIUS_KM,
    )
    notifications_enabled: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one location setting must be provided")
        if "notifications_enabled" in self.model_fields_set and self.notifications_enabled is None:
            raise ValueError("notifications_enabled cannot be null")
        return self


class LocationSettingsResponse(BaseModel):
    """Current location settings of a user."""

    latitude: Optional[float]
    longitude: Optional[float]
    location: Optional[str]
    notification_radius: Optional[int]
    notifications_enabled: bool

    model_config = ConfigDict(from_attributes=True, frozen=True)


class UserUpdateResponse(BaseModel):
    """Response for user update actions."""
    success: bool
