"""
Notification Routes

Polled by the client for the notification bell.
"""

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.api.deps import get_current_user_id
from tourmates.config import settings
from tourmates.db.session import get_async_db
from tourmates.features.notifications import (
    NotificationService,
    NotificationResponse,
    UnreadCountResponse,
    MarkReadResponse,
    MarkAllReadResponse,
)

router = APIRouter()


@router.get("/notifications", response_model=List[NotificationResponse])
async def get_notifications(
    limit: int = Query(
        default=settings.notification_list_limit,
        ge=1,
        le=settings.notification_list_max_limit,
    ),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Get the acting user's notifications, newest first.

    Args:
        limit: Maximum number of notifications to return
    """
    return await NotificationService(db).get_user_notifications(user_id, limit=limit)


@router.get("/notifications/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """Unread notification count for the badge."""
    count = await NotificationService(db).get_unread_count(user_id)
    return UnreadCountResponse(count=count)


@router.patch("/notifications/read-all", response_model=MarkAllReadResponse)
async def mark_all_notifications_read(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """Mark every notification of the acting user as read."""
    marked = await NotificationService(db).mark_all_as_read(user_id)
    return MarkAllReadResponse(marked_count=marked)


@router.patch("/notifications/{notification_id}/read", response_model=MarkReadResponse)
async def mark_notification_read(
    notification_id: int,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Mark one notification as read.

    Ids belonging to other users are ignored.
    """
    success = await NotificationService(db).mark_as_read(notification_id, user_id)
    return MarkReadResponse(success=success)
