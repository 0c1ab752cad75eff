"""
Tour repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.shared.repository import BaseRepository
from .models import Tour


class TourRepository(BaseRepository[Tour]):
    """Repository for Tour operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Tour)

    async def close(self, tour: Tour) -> Tour:
        """
        Close a tour. There is no reopen.

        Args:
            tour: Tour to close

        Returns:
            Updated tour
        """
        if tour.is_closed:
            return tour
        return await self.update(tour, is_closed=True)
