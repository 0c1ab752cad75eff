"""
Notification repository.

Read/unread state, unread counting and listing, always scoped to one user.
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.features.tours.models import Tour
from tourmates.shared.repository import BaseRepository
from .models import Notification


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Notification)

    async def list_for_user(
        self,
        user_id: str,
        limit: int = 20
    ) -> list[tuple[Notification, Optional[Tour]]]:
        """
        Get notifications for user with their tours.

        LEFT OUTER JOIN: a notification whose tour is gone is still
        returned, paired with None.

        Args:
            user_id: User's ID
            limit: Maximum notifications to return

        Returns:
            List of (notification, tour) ordered newest first
        """
        result = await self.db.execute(
            select(Notification, Tour)
            .outerjoin(Tour, Notification.tour_id == Tour.id)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        return [(notification, tour) for notification, tour in result.all()]

    async def mark_as_read(self, notification_id: int, user_id: str) -> int:
        """
        Mark one of the user's notifications as read.

        Another user's notification id matches nothing.

        Args:
            notification_id: Notification ID
            user_id: ID of the acting user

        Returns:
            Number of notifications matched (0 or 1)
        """
        result = await self.db.execute(
            update(Notification)
            .where(Notification.id == notification_id)
            .where(Notification.user_id == user_id)
            .values(is_read=True)
        )
        return result.rowcount

    async def mark_all_read_for_user(self, user_id: str) -> int:
        """
        Mark all notifications as read for a user.

        Args:
            user_id: User's ID

        Returns:
            Number of notifications updated
        """
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.is_read == False)  # noqa: E712
            .values(is_read=True)
        )
        return result.rowcount

    async def count_unread(self, user_id: str) -> int:
        """
        Count unread notifications with one aggregate query.

        Args:
            user_id: User's ID

        Returns:
            Number of unread notifications
        """
        result = await self.db.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.is_read == False)  # noqa: E712
        )
        return result.scalar() or 0
