"""
Notification schemas.

Frozen value types passed between the selector, the materializer and the
API layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tourmates.shared.geo import GeoPoint


# =============================================================================
# Selection value types
# =============================================================================

@dataclass(frozen=True)
class TourOrigin:
    """The parts of a tour the proximity scan needs."""
    id: str
    title: str
    created_by_id: str
    start_date: datetime
    start: Optional[GeoPoint]

    @classmethod
    def from_tour(cls, tour) -> "TourOrigin":
        start = None
        if tour.has_start_coordinates:
            start = GeoPoint(float(tour.start_latitude), float(tour.start_longitude))
        return cls(
            id=tour.id,
            title=tour.title,
            created_by_id=tour.created_by_id,
            start_date=tour.start_date,
            start=start,
        )


@dataclass(frozen=True)
class NotifiableUser:
    """An opted-in user with a known position."""
    id: str
    point: GeoPoint
    notification_radius: Optional[int] = None

    @classmethod
    def from_user(cls, user) -> "NotifiableUser":
        return cls(
            id=user.id,
            point=GeoPoint(float(user.latitude), float(user.longitude)),
            notification_radius=user.notification_radius,
        )


@dataclass(frozen=True)
class Candidate:
    """A user inside their radius of a tour start."""
    user: NotifiableUser
    distance_km: float


# =============================================================================
# API schemas
# =============================================================================

class TourSummary(BaseModel):
    """Tour fields embedded in a notification."""

    id: str
    title: str
    start_location: str
    start_date: datetime
    image_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class NotificationResponse(BaseModel):
    """Notification with its tour summary (None if the tour is gone)."""

    id: int
    type: str
    title: str
    message: str
    is_read: bool
    distance: Optional[float] = None
    created_at: Optional[datetime] = None
    tour: Optional[TourSummary] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class UnreadCountResponse(BaseModel):
    """Badge count."""
    count: int


class MarkReadResponse(BaseModel):
    """Response for marking one notification as read."""
    success: bool


class MarkAllReadResponse(BaseModel):
    """Response for marking all notifications as read."""
    marked_count: int
