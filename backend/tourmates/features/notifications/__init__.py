"""
Nearby tour notifications.

Usage:
    from tourmates.features.notifications import NotificationService

    service = NotificationService(db)
    await service.notify_nearby_users(tour_id)

Pieces:
- selector: who is in range of a tour start
- materializer: candidates -> notification rows (one INSERT)
- repository: read state, unread count, listing
- service: boundary operations with safe defaults on failure
- dispatcher: fire-and-forget scan after tour creation
"""

from .models import Notification
from .schemas import (
    TourOrigin,
    NotifiableUser,
    Candidate,
    TourSummary,
    NotificationResponse,
    UnreadCountResponse,
    MarkReadResponse,
    MarkAllReadResponse,
)
from .selector import effective_radius, select_candidates, select_notifiable
from .materializer import render_nearby_tour_message, build_nearby_notifications, materialize
from .repository import NotificationRepository
from .service import NotificationService
from .dispatcher import NearbyTourDispatcher

__all__ = [
    # Models
    "Notification",
    # Schemas
    "TourOrigin",
    "NotifiableUser",
    "Candidate",
    "TourSummary",
    "NotificationResponse",
    "UnreadCountResponse",
    "MarkReadResponse",
    "MarkAllReadResponse",
    # Selection
    "effective_radius",
    "select_candidates",
    "select_notifiable",
    # Materializer
    "render_nearby_tour_message",
    "build_nearby_notifications",
    "materialize",
    # Repository / service
    "NotificationRepository",
    "NotificationService",
    "NearbyTourDispatcher",
]
