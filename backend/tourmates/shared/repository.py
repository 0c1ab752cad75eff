"""
Base repository with common CRUD operations.

Provides generic database operations for all feature repositories.
Uses SQLAlchemy async session for non-blocking database access.

Usage:
    class TourRepository(BaseRepository[Tour]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Tour)

        async def close(self, tour: Tour) -> Tour:
            return await self.update(tour, is_closed=True)
"""

from typing import Any, TypeVar, Generic, Type
from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    Provides common CRUD methods that can be inherited by feature repositories.
    All methods are async for use with AsyncSession. Methods flush but never
    commit; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def get_by_id(self, id: str | int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value (string UUID or integer)

        Returns:
            Entity if found, None otherwise
        """
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs) -> T:
        """
        Create new entity.

        Args:
            **kwargs: Field values for new entity

        Returns:
            Created entity with generated ID
        """
        entity = self.model(**kwargs)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def create_many(self, rows: list[dict[str, Any]]) -> int:
        """
        Insert several rows with one multi-row INSERT statement.

        Args:
            rows: Column-value dicts, one per row

        Returns:
            Number of rows sent to the database (0 issues no statement)
        """
        if not rows:
            return 0
        await self.db.execute(insert(self.model).values(rows))
        return len(rows)

    async def update(self, entity: T, **kwargs) -> T:
        """
        Update entity fields.

        Args:
            entity: Entity to update
            **kwargs: Field values to update

        Returns:
            Updated entity
        """
        for key, value in kwargs.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update_by_id(self, id: str | int, **kwargs) -> int:
        """
        Update columns of one row without loading it.

        Args:
            id: Primary key value
            **kwargs: Column values to set

        Returns:
            Number of rows matched
        """
        if not kwargs:
            return 0
        result = await self.db.execute(
            update(self.model)
            .where(self.model.id == id)
            .values(**kwargs)
        )
        return result.rowcount
