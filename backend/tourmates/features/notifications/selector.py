"""
Nearby tour candidate selection.

Decides which users hear about a new tour:
1. Tour must exist and have start coordinates
2. Pool = users with notifications enabled and both coordinates set
3. The tour creator is skipped
4. Haversine distance from tour start to the user's stored position
5. Kept when distance <= user's radius (or the default radius)

The scan is a plain loop over the whole pool, which is fine for a
bounded user base. There is no spatial index or bounding box prefilter.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.features.tours.repository import TourRepository
from tourmates.features.users.repository import UserRepository
from tourmates.shared.constants import DEFAULT_NOTIFICATION_RADIUS_KM
from tourmates.shared.geo import distance_between
from .schemas import Candidate, NotifiableUser, TourOrigin

logger = logging.getLogger(__name__)


def effective_radius(notification_radius: Optional[int]) -> float:
    """
    Radius actually used for a user.

    Args:
        notification_radius: Stored radius in km, None when unset

    Returns:
        Stored radius, or DEFAULT_NOTIFICATION_RADIUS_KM when unset
    """
    # Only NULL means unset; a stored 0 is a real radius
    if notification_radius is None:
        return DEFAULT_NOTIFICATION_RADIUS_KM
    return notification_radius


def select_candidates(
    tour: TourOrigin,
    users: Iterable[NotifiableUser],
) -> list[Candidate]:
    """
    Filter users down to those within their radius of the tour start.

    Args:
        tour: Tour being announced
        users: Eligible pool (opted in, located)

    Returns:
        One Candidate per selected user, in pool order
    """
    if tour.start is None:
        return []

    candidates: list[Candidate] = []
    seen: set[str] = set()

    for user in users:
        if user.id == tour.created_by_id or user.id in seen:
            continue
        seen.add(user.id)

        distance_km = distance_between(tour.start, user.point)

        # Inclusive: a user exactly on their boundary is notified
        if distance_km <= effective_radius(user.notification_radius):
            candidates.append(Candidate(user=user, distance_km=distance_km))

    return candidates


async def select_notifiable(
    db: AsyncSession,
    tour_id: str,
) -> tuple[Optional[TourOrigin], list[Candidate]]:
    """
    Load a tour and the user pool, then select candidates.

    A missing tour or a tour without start coordinates is not an error:
    it is logged and yields no candidates.

    Args:
        db: Async database session
        tour_id: ID of the newly created tour

    Returns:
        Tuple of (tour origin or None, candidates)
    """
    tour = await TourRepository(db).get_by_id(tour_id)
    if tour is None:
        logger.info(f"Tour {tour_id} not found, no nearby notifications")
        return None, []

    origin = TourOrigin.from_tour(tour)
    if origin.start is None:
        logger.info(f"Tour {tour_id} has no start coordinates, no nearby notifications")
        return origin, []

    users = await UserRepository(db).get_notifiable()
    pool = [NotifiableUser.from_user(user) for user in users]

    candidates = select_candidates(origin, pool)
    logger.debug(
        f"Tour {tour_id}: {len(candidates)} of {len(pool)} located users in range"
    )
    return origin, candidates
