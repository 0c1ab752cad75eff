"""
Shared utilities (NOT business logic).

Usage:
    from tourmates.shared import haversine, GeoPoint
    from tourmates.shared.formatters import format_distance_km
"""
from .geo import (
    haversine,
    distance_between,
    GeoPoint,
    EARTH_RADIUS_KM,
)
from .formatters import (
    round_km,
    format_distance_km,
    format_tour_date,
)
from .constants import (
    NotificationType,
    DEFAULT_NOTIFICATION_RADIUS_KM,
    MIN_NOTIFICATION_RADIUS_KM,
    MAX_NOTIFICATION_RADIUS_KM,
    NEARBY_TOUR_TITLE,
    LOCATION_SETTING_FIELDS,
)
from .exceptions import NotificationError, NotificationDeliveryError
from .repository import BaseRepository

__all__ = [
    # geo
    "haversine",
    "distance_between",
    "GeoPoint",
    "EARTH_RADIUS_KM",
    # formatters
    "round_km",
    "format_distance_km",
    "format_tour_date",
    # constants
    "NotificationType",
    "DEFAULT_NOTIFICATION_RADIUS_KM",
    "MIN_NOTIFICATION_RADIUS_KM",
    "MAX_NOTIFICATION_RADIUS_KM",
    "NEARBY_TOUR_TITLE",
    "LOCATION_SETTING_FIELDS",
    # exceptions
    "NotificationError",
    "NotificationDeliveryError",
    # repository
    "BaseRepository",
]
