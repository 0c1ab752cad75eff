"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite, one shared
connection via StaticPool) with all tables created.
"""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tourmates.models import Base, register_models
from tourmates.features.users import User
from tourmates.features.tours import Tour
from tourmates.features.notifications import Notification

register_models()


# =============================================================================
# Coordinates used across tests
# =============================================================================

MONTEREY = (36.6002, -121.8947)
SALINAS = (36.3283, -121.8863)
SAN_FRANCISCO = (37.7749, -122.4194)

TOUR_START_DATE = datetime(2026, 11, 1, 9, 0)


# =============================================================================
# Database
# =============================================================================

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_user(db):
    """Insert a user. Pass point=(lat, lon) for a located user."""
    counter = {"n": 0}

    async def _make_user(point=None, radius=50, enabled=True, **kwargs) -> User:
        counter["n"] += 1
        fields = {
            "email": f"rider{counter['n']}@example.com",
            "latitude": point[0] if point else None,
            "longitude": point[1] if point else None,
            "notification_radius": radius,
            "notifications_enabled": enabled,
        }
        fields.update(kwargs)
        user = User(**fields)
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_tour(db):
    """Insert a tour created by `creator`. Pass start=None for no coordinates."""

    async def _make_tour(creator: User, start=MONTEREY, title="Coast Ride", **kwargs) -> Tour:
        tour = Tour(
            title=title,
            start_location=kwargs.pop("start_location", "Monterey"),
            end_location=kwargs.pop("end_location", "Big Sur"),
            start_latitude=start[0] if start else None,
            start_longitude=start[1] if start else None,
            start_date=kwargs.pop("start_date", TOUR_START_DATE),
            end_date=kwargs.pop("end_date", datetime(2026, 11, 2, 18, 0)),
            max_participants=kwargs.pop("max_participants", 10),
            created_by_id=creator.id,
            **kwargs,
        )
        db.add(tour)
        await db.commit()
        return tour

    return _make_tour


@pytest.fixture
def make_notification(db):
    """Insert a notification row directly."""

    async def _make_notification(user: User, tour_id=None, is_read=False, **kwargs) -> Notification:
        notification = Notification(
            user_id=user.id,
            tour_id=tour_id,
            type=kwargs.pop("type", "nearby_tour"),
            title=kwargs.pop("title", "New Ride Near You!"),
            message=kwargs.pop("message", "test"),
            is_read=is_read,
            distance=kwargs.pop("distance", 10.0),
            **kwargs,
        )
        db.add(notification)
        await db.commit()
        return notification

    return _make_notification
