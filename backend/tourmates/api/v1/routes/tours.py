"""
Tour Routes

Only the tour endpoints that feed the notification flow: creation
(which triggers the nearby scan), lookup and closing.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tourmates.api.deps import get_current_user_id, get_nearby_dispatcher
from tourmates.db.session import get_async_db
from tourmates.features.notifications import NearbyTourDispatcher
from tourmates.features.tours import TourCreate, TourResponse, TourRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TourResponse, status_code=201)
async def create_tour(
    request: TourCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db),
    dispatcher: NearbyTourDispatcher = Depends(get_nearby_dispatcher),
):
    """
    Create a tour.

    Nearby users are notified in the background once the tour is
    committed; the response does not wait for it.
    """
    tour = await TourRepository(db).create(**request.model_dump(), created_by_id=user_id)
    await db.commit()

    dispatcher.dispatch(tour.id)
    logger.info(f"Tour {tour.id} created by {user_id}")

    return TourResponse.model_validate(tour)


@router.get("/{tour_id}", response_model=TourResponse)
async def get_tour(tour_id: str, db: AsyncSession = Depends(get_async_db)):
    """Get a tour by ID."""
    tour = await TourRepository(db).get_by_id(tour_id)
    if not tour:
        raise HTTPException(status_code=404, detail="Tour not found")
    return TourResponse.model_validate(tour)


@router.post("/{tour_id}/close", response_model=TourResponse)
async def close_tour(
    tour_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Close a tour. Only its creator may do so, and it cannot be reopened.
    """
    repo = TourRepository(db)
    tour = await repo.get_by_id(tour_id)
    if not tour:
        raise HTTPException(status_code=404, detail="Tour not found")
    if tour.created_by_id != user_id:
        raise HTTPException(status_code=403, detail="Only the creator can close this tour")

    tour = await repo.close(tour)
    await db.commit()
    return TourResponse.model_validate(tour)
