"""
Notification Service.

Entry point for nearby tour notifications and their read state.
Single point of notification creation for the entire app.

Failures never reach the caller: every method logs the error and returns
a safe default (0, [], False). A stale badge or an empty list is the
worst a user sees.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.config import settings
from tourmates.db.session import rollback_quietly
from tourmates.features.users.repository import UserRepository
from tourmates.features.users.schemas import LocationSettingsUpdate
from tourmates.shared.exceptions import NotificationDeliveryError
from .materializer import materialize
from .repository import NotificationRepository
from .schemas import NotificationResponse, TourSummary
from .selector import select_notifiable

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Stateless notification operations over one session.

    Usage:
        service = NotificationService(db)
        await service.notify_nearby_users(tour.id)
        count = await service.get_unread_count(user_id)
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.notifications = NotificationRepository(db)
        self.users = UserRepository(db)

    async def notify_nearby_users(self, tour_id: str) -> int:
        """
        Notify every opted-in user within range of a new tour's start.

        Args:
            tour_id: ID of a committed tour

        Returns:
            Number of notifications created (0 on no-op or failure)
        """
        try:
            tour, candidates = await select_notifiable(self.db, tour_id)
            if tour is None or not candidates:
                return 0
            return await materialize(self.db, tour, candidates)
        except NotificationDeliveryError as e:
            logger.error(f"Error sending nearby tour notifications: {e}", exc_info=e.__cause__)
            return 0
        except SQLAlchemyError:
            logger.exception(f"Error sending nearby tour notifications for tour {tour_id}")
            return 0

    async def get_user_notifications(
        self,
        user_id: str,
        limit: Optional[int] = None
    ) -> list[NotificationResponse]:
        """
        Get a user's notifications, newest first, with tour summaries.

        Args:
            user_id: User's ID
            limit: Maximum notifications, clamped to the configured maximum
                (default from settings when unset or below 1)

        Returns:
            List of notifications, [] on failure
        """
        if limit is None or limit < 1:
            limit = settings.notification_list_limit
        limit = min(limit, settings.notification_list_max_limit)

        try:
            rows = await self.notifications.list_for_user(user_id, limit=limit)
        except SQLAlchemyError:
            logger.exception(f"Error fetching notifications for user {user_id}")
            return []

        return [self._to_response(notification, tour) for notification, tour in rows]

    async def mark_as_read(self, notification_id: int, user_id: str) -> bool:
        """
        Mark a notification as read for its owner.

        Idempotent. A notification owned by someone else is left alone and
        the call still succeeds, so other users' ids are not revealed.

        Returns:
            True unless the database failed
        """
        try:
            matched = await self.notifications.mark_as_read(notification_id, user_id)
            await self.db.commit()
        except SQLAlchemyError:
            await rollback_quietly(self.db)
            logger.exception(f"Error marking notification {notification_id} as read")
            return False

        if not matched:
            logger.debug(f"Notification {notification_id} not found for user {user_id}")
        return True

    async def mark_all_as_read(self, user_id: str) -> int:
        """
        Mark all of a user's notifications as read.

        Returns:
            Number of notifications changed, 0 on failure
        """
        try:
            marked = await self.notifications.mark_all_read_for_user(user_id)
            await self.db.commit()
        except SQLAlchemyError:
            await rollback_quietly(self.db)
            logger.exception(f"Error marking all notifications as read for user {user_id}")
            return 0
        return marked

    async def get_unread_count(self, user_id: str) -> int:
        """
        Count unread notifications for the badge.

        Returns:
            Unread count, 0 on failure
        """
        try:
            return await self.notifications.count_unread(user_id)
        except SQLAlchemyError:
            logger.exception(f"Error getting unread notification count for user {user_id}")
            return 0

    async def update_user_location_settings(
        self,
        user_id: str,
        settings_update: LocationSettingsUpdate
    ) -> bool:
        """
        Store a user's location and notification preferences.

        Only fields set on the request are written. The next tour scan
        reads the new values directly.

        Returns:
            True unless the database failed
        """
        fields = settings_update.model_dump(exclude_unset=True)
        if not fields:
            return True

        try:
            await self.users.update_location_settings(user_id, **fields)
            await self.db.commit()
        except SQLAlchemyError:
            await rollback_quietly(self.db)
            logger.exception(f"Error updating location settings for user {user_id}")
            return False
        return True

    @staticmethod
    def _to_response(notification, tour) -> NotificationResponse:
        summary = None
        if tour is not None:
            summary = TourSummary(
                id=tour.id,
                title=tour.title,
                start_location=tour.start_location,
                start_date=tour.start_date,
                image_url=tour.image_url,
            )
        return NotificationResponse(
            id=notification.id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            distance=notification.distance,
            created_at=notification.created_at,
            tour=summary,
        )
