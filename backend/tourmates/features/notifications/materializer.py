"""
Turns selected candidates into persisted notification rows.
"""

import logging
from datetime import datetime
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.db.session import rollback_quietly
from tourmates.shared.constants import NEARBY_TOUR_TITLE, NotificationType
from tourmates.shared.exceptions import NotificationDeliveryError
from tourmates.shared.formatters import format_distance_km, format_tour_date
from .repository import NotificationRepository
from .schemas import Candidate, TourOrigin

logger = logging.getLogger(__name__)


def render_nearby_tour_message(title: str, distance_km: float, start_date: datetime) -> str:
    """
    Build the nearby tour message text.

    Example:
        '"Coast Run" starts 30km from your location on 11/01/26'
    """
    return (
        f'"{title}" starts {format_distance_km(distance_km)} '
        f"from your location on {format_tour_date(start_date)}"
    )


def build_nearby_notifications(
    tour: TourOrigin,
    candidates: Sequence[Candidate],
) -> list[dict[str, Any]]:
    """
    Build insert rows for a tour's candidates.

    The rounded distance only appears in the message; the distance
    column keeps the exact value.
    """
    return [
        {
            "user_id": candidate.user.id,
            "tour_id": tour.id,
            "type": NotificationType.NEARBY_TOUR.value,
            "title": NEARBY_TOUR_TITLE,
            "message": render_nearby_tour_message(
                tour.title, candidate.distance_km, tour.start_date
            ),
            "distance": candidate.distance_km,
        }
        for candidate in candidates
    ]


async def materialize(
    db: AsyncSession,
    tour: TourOrigin,
    candidates: Sequence[Candidate],
) -> int:
    """
    Persist all notifications of one tour in a single INSERT.

    Either every row is committed or none is.

    Args:
        db: Async database session
        tour: Tour being announced
        candidates: Selected users with distances

    Returns:
        Number of notifications created

    Raises:
        NotificationDeliveryError: If the insert or commit fails
    """
    rows = build_nearby_notifications(tour, candidates)
    if not rows:
        return 0

    try:
        created = await NotificationRepository(db).create_many(rows)
        await db.commit()
    except SQLAlchemyError as e:
        await rollback_quietly(db)
        raise NotificationDeliveryError(tour.id, len(rows)) from e

    logger.info(f"Created {created} nearby tour notifications for tour: {tour.title}")
    return created
