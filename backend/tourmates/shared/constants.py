"""
Unified constants for notifications and location preferences.
"""

from enum import Enum

from tourmates.config import settings


class NotificationType(str, Enum):
    """
    Notification kinds stored in notifications.type.

    Only NEARBY_TOUR is produced by the proximity scan; the others are
    reserved for tour features that write their own rows.
    """
    NEARBY_TOUR = "nearby_tour"
    TOUR_UPDATE = "tour_update"
    JOIN_REQUEST = "join_request"
    REMINDER = "reminder"


# Column default and in-code fallback both read this value
DEFAULT_NOTIFICATION_RADIUS_KM: int = settings.default_notification_radius_km

# Slider bounds of the location settings UI, enforced at the API boundary
MIN_NOTIFICATION_RADIUS_KM: int = settings.min_notification_radius_km
MAX_NOTIFICATION_RADIUS_KM: int = settings.max_notification_radius_km

NEARBY_TOUR_TITLE = "New Ride Near You!"

# Fields a location settings update may touch
LOCATION_SETTING_FIELDS: tuple[str, ...] = (
    "latitude",
    "longitude",
    "location",
    "notification_radius",
    "notifications_enabled",
)
