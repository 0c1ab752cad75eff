"""
Tests for NotificationService.

End-to-end over an in-memory database: scan, listing, read state,
unread counting, location settings and the safe defaults on failure.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from tourmates.config import settings
from tourmates.features.notifications import Notification, NotificationService
from tourmates.features.users import LocationSettingsUpdate, User

from tests.conftest import MONTEREY, SALINAS, SAN_FRANCISCO

pytestmark = pytest.mark.asyncio


def _db_error():
    return OperationalError("SELECT", {}, Exception("connection lost"))


async def _notifications_for(db, user_id) -> list[Notification]:
    result = await db.execute(select(Notification).where(Notification.user_id == user_id))
    return list(result.scalars().all())


# =============================================================================
# notify_nearby_users
# =============================================================================

class TestNotifyNearbyUsers:

    async def test_scenario_a_nearby_user_notified(self, db, make_user, make_tour):
        creator = await make_user()
        user_x = await make_user(point=SALINAS, radius=50)
        tour = await make_tour(creator)

        created = await NotificationService(db).notify_nearby_users(tour.id)

        assert created == 1
        [notification] = await _notifications_for(db, user_x.id)
        assert notification.tour_id == tour.id
        assert notification.type == "nearby_tour"
        assert notification.title == "New Ride Near You!"
        assert notification.distance == pytest.approx(30.2, abs=0.2)
        assert notification.message.startswith('"Coast Ride" starts 30km from your location on ')

    async def test_scenario_b_far_user_not_notified(self, db, make_user, make_tour):
        creator = await make_user()
        user_y = await make_user(point=SAN_FRANCISCO, radius=50)
        tour = await make_tour(creator)

        created = await NotificationService(db).notify_nearby_users(tour.id)

        assert created == 0
        assert await _notifications_for(db, user_y.id) == []

    async def test_scenario_c_raised_radius_notifies(self, db, make_user, make_tour):
        creator = await make_user()
        user_y = await make_user(point=SAN_FRANCISCO, radius=50)
        service = NotificationService(db)
        await service.update_user_location_settings(
            user_y.id, LocationSettingsUpdate(notification_radius=150)
        )
        tour = await make_tour(creator)

        created = await service.notify_nearby_users(tour.id)

        assert created == 1
        [notification] = await _notifications_for(db, user_y.id)
        assert 130 < notification.distance < 150

    async def test_scenario_d_creator_not_notified(self, db, make_user, make_tour):
        creator = await make_user(point=MONTEREY, radius=200)
        tour = await make_tour(creator)

        created = await NotificationService(db).notify_nearby_users(tour.id)

        assert created == 0
        assert await _notifications_for(db, creator.id) == []

    async def test_opted_out_user_not_notified(self, db, make_user, make_tour):
        creator = await make_user()
        opted_out = await make_user(point=SALINAS, enabled=False)
        tour = await make_tour(creator)

        assert await NotificationService(db).notify_nearby_users(tour.id) == 0
        assert await _notifications_for(db, opted_out.id) == []

    async def test_tour_without_coordinates_creates_nothing(self, db, make_user, make_tour):
        creator = await make_user()
        await make_user(point=SALINAS)
        tour = await make_tour(creator, start=None)

        assert await NotificationService(db).notify_nearby_users(tour.id) == 0
        result = await db.execute(select(Notification))
        assert result.scalars().all() == []

    async def test_missing_tour_is_a_no_op(self, db):
        assert await NotificationService(db).notify_nearby_users("missing") == 0

    async def test_null_radius_uses_default(self, db, make_user, make_tour):
        creator = await make_user()
        near = await make_user(point=SALINAS)
        far = await make_user(point=SAN_FRANCISCO)
        service = NotificationService(db)
        for user in (near, far):
            await service.users.update_location_settings(user.id, notification_radius=None)
        await db.commit()
        tour = await make_tour(creator)

        assert await service.notify_nearby_users(tour.id) == 1
        assert len(await _notifications_for(db, near.id)) == 1

    async def test_distance_snapshot_not_recomputed(self, db, make_user, make_tour):
        creator = await make_user()
        user = await make_user(point=SALINAS)
        tour = await make_tour(creator)
        service = NotificationService(db)
        await service.notify_nearby_users(tour.id)

        await service.update_user_location_settings(
            user.id, LocationSettingsUpdate(latitude=MONTEREY[0], longitude=MONTEREY[1])
        )

        [item] = await service.get_user_notifications(user.id)
        assert item.distance == pytest.approx(30.2, abs=0.2)

    async def test_persistence_failure_returns_zero(self, db, make_user, make_tour, monkeypatch):
        creator = await make_user()
        await make_user(point=SALINAS)
        tour = await make_tour(creator)

        async def failing_commit():
            raise _db_error()

        monkeypatch.setattr(db, "commit", failing_commit)

        assert await NotificationService(db).notify_nearby_users(tour.id) == 0

    async def test_load_failure_returns_zero(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))

        assert await NotificationService(db).notify_nearby_users("tour") == 0


# =============================================================================
# Listing
# =============================================================================

class TestGetUserNotifications:

    async def test_newest_first_with_tour_summary(self, db, make_user, make_tour, make_notification):
        creator = await make_user()
        user = await make_user(point=SALINAS)
        tour = await make_tour(creator, image_url="https://img.example.com/coast.jpg")
        now = datetime(2026, 10, 19, 12, 0)
        older = await make_notification(user, tour.id, created_at=now - timedelta(hours=1))
        newer = await make_notification(user, tour.id, created_at=now)

        items = await NotificationService(db).get_user_notifications(user.id)

        assert [i.id for i in items] == [newer.id, older.id]
        assert items[0].tour.id == tour.id
        assert items[0].tour.title == "Coast Ride"
        assert items[0].tour.start_location == "Monterey"
        assert items[0].tour.image_url == "https://img.example.com/coast.jpg"

    async def test_default_limit_is_twenty(self, db, make_user, make_notification):
        user = await make_user()
        for _ in range(25):
            await make_notification(user)

        items = await NotificationService(db).get_user_notifications(user.id)
        assert len(items) == 20

    async def test_explicit_limit(self, db, make_user, make_notification):
        user = await make_user()
        for _ in range(5):
            await make_notification(user)

        items = await NotificationService(db).get_user_notifications(user.id, limit=3)
        assert len(items) == 3

    @pytest.mark.parametrize("limit", [0, -1])
    async def test_non_positive_limit_uses_default(self, db, make_user, make_notification, limit):
        user = await make_user()
        for _ in range(25):
            await make_notification(user)

        items = await NotificationService(db).get_user_notifications(user.id, limit=limit)
        assert len(items) == 20

    async def test_limit_capped_at_maximum(self, db, make_user, make_notification, monkeypatch):
        monkeypatch.setattr(settings, "notification_list_max_limit", 5)
        user = await make_user()
        for _ in range(8):
            await make_notification(user)

        items = await NotificationService(db).get_user_notifications(user.id, limit=50)
        assert len(items) == 5

    async def test_missing_tour_keeps_notification(self, db, make_user, make_notification):
        user = await make_user()
        await make_notification(user, tour_id="deleted-tour")
        await make_notification(user, tour_id=None)

        items = await NotificationService(db).get_user_notifications(user.id)

        assert len(items) == 2
        assert all(item.tour is None for item in items)

    async def test_only_own_notifications(self, db, make_user, make_notification):
        alice = await make_user()
        bob = await make_user()
        await make_notification(alice)
        await make_notification(bob)

        items = await NotificationService(db).get_user_notifications(alice.id)
        assert len(items) == 1

    async def test_failure_returns_empty_list(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))

        assert await NotificationService(db).get_user_notifications("u") == []


# =============================================================================
# Read state and unread count
# =============================================================================

class TestReadState:

    async def test_scenario_e_unread_count(self, db, make_user, make_notification):
        user = await make_user()
        unread = [await make_notification(user) for _ in range(3)]
        for _ in range(2):
            await make_notification(user, is_read=True)
        service = NotificationService(db)

        assert await service.get_unread_count(user.id) == 3

        assert await service.mark_as_read(unread[0].id, user.id) is True
        assert await service.get_unread_count(user.id) == 2

    async def test_mark_as_read_is_idempotent(self, db, make_user, make_notification):
        user = await make_user()
        notification = await make_notification(user)
        service = NotificationService(db)

        assert await service.mark_as_read(notification.id, user.id) is True
        assert await service.mark_as_read(notification.id, user.id) is True

        [item] = await service.get_user_notifications(user.id)
        assert item.is_read is True

    async def test_other_users_notification_untouched(self, db, make_user, make_notification):
        owner = await make_user()
        intruder = await make_user()
        notification = await make_notification(owner)
        service = NotificationService(db)

        # Same result as "already read": no error, nothing changes
        assert await service.mark_as_read(notification.id, intruder.id) is True
        assert await service.get_unread_count(owner.id) == 1

    async def test_unknown_notification(self, db, make_user):
        user = await make_user()
        assert await NotificationService(db).mark_as_read(999, user.id) is True

    async def test_mark_all_as_read(self, db, make_user, make_notification):
        user = await make_user()
        other = await make_user()
        for _ in range(3):
            await make_notification(user)
        await make_notification(user, is_read=True)
        await make_notification(other)
        service = NotificationService(db)

        assert await service.mark_all_as_read(user.id) == 3
        assert await service.get_unread_count(user.id) == 0
        assert await service.get_unread_count(other.id) == 1

    async def test_unread_count_failure_returns_zero(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))

        assert await NotificationService(db).get_unread_count("u") == 0

    async def test_mark_as_read_failure_returns_false(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))

        assert await NotificationService(db).mark_as_read(1, "u") is False

    async def test_mark_all_failure_returns_zero(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))

        assert await NotificationService(db).mark_all_as_read("u") == 0

    async def test_failed_rollback_still_returns_defaults(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))
        monkeypatch.setattr(db, "rollback", AsyncMock(side_effect=_db_error()))
        service = NotificationService(db)

        assert await service.mark_as_read(1, "u") is False
        assert await service.mark_all_as_read("u") == 0
        assert await service.update_user_location_settings(
            "u", LocationSettingsUpdate(notification_radius=80)
        ) is False
        assert db.rollback.await_count == 3


# =============================================================================
# Location settings
# =============================================================================

class TestUpdateLocationSettings:

    async def test_partial_update(self, db, make_user):
        user = await make_user(point=SALINAS, radius=50, location="Salinas, CA")
        user_id = user.id
        service = NotificationService(db)

        ok = await service.update_user_location_settings(
            user_id, LocationSettingsUpdate(notification_radius=120)
        )

        assert ok is True
        db.expire_all()
        stored = (await db.execute(select(User).where(User.id == user_id))).scalar_one()
        assert stored.notification_radius == 120
        assert stored.latitude == SALINAS[0]
        assert stored.longitude == SALINAS[1]
        assert stored.location == "Salinas, CA"
        assert stored.notifications_enabled is True

    async def test_disable_notifications(self, db, make_user, make_tour):
        creator = await make_user()
        user = await make_user(point=SALINAS)
        service = NotificationService(db)

        await service.update_user_location_settings(
            user.id, LocationSettingsUpdate(notifications_enabled=False)
        )
        tour = await make_tour(creator)

        assert await service.notify_nearby_users(tour.id) == 0

    async def test_setting_location_makes_user_eligible(self, db, make_user, make_tour):
        creator = await make_user()
        user = await make_user(point=None)
        service = NotificationService(db)

        await service.update_user_location_settings(
            user.id,
            LocationSettingsUpdate(latitude=SALINAS[0], longitude=SALINAS[1], location="Salinas"),
        )
        tour = await make_tour(creator)

        assert await service.notify_nearby_users(tour.id) == 1

    async def test_failure_returns_false(self, db, monkeypatch):
        monkeypatch.setattr(db, "execute", AsyncMock(side_effect=_db_error()))

        ok = await NotificationService(db).update_user_location_settings(
            "u", LocationSettingsUpdate(notification_radius=80)
        )
        assert ok is False
