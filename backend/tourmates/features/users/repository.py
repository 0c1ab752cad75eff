"""
User repository.

Data access for users and their location preferences.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.shared.constants import LOCATION_SETTING_FIELDS
from tourmates.shared.repository import BaseRepository
from .models import User

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_notifiable(self) -> list[User]:
        """
        Get every user who can receive nearby tour notifications.

        Opted in and with both coordinates set. No geographic prefilter:
        the whole pool is returned for distance checks.

        Returns:
            List of users
        """
        result = await self.db.execute(
            select(User)
            .where(User.notifications_enabled == True)  # noqa: E712
            .where(User.latitude.is_not(None))
            .where(User.longitude.is_not(None))
        )
        return list(result.scalars().all())

    async def update_location_settings(self, user_id: str, **fields: Any) -> int:
        """
        Write the supplied location settings of a user.

        Omitted fields keep their stored values. Values are not range
        checked here; the API schema does that.

        Args:
            user_id: User's ID
            **fields: Subset of LOCATION_SETTING_FIELDS

        Returns:
            Number of rows updated (0 if the user does not exist)

        Raises:
            ValueError: If a field is not a location setting
        """
        unknown = set(fields) - set(LOCATION_SETTING_FIELDS)
        if unknown:
            raise ValueError(f"Unknown location settings: {sorted(unknown)}")

        updated = await self.update_by_id(user_id, **fields)
        if not updated and fields:
            logger.debug(f"No user {user_id} to update location settings for")
        return updated
