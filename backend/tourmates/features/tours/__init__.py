"""
Tours module.

Usage:
    from tourmates.features.tours import Tour, TourRepository
"""

from .models import Tour
from .schemas import TourCreate, TourResponse
from .repository import TourRepository

__all__ = [
    "Tour",
    "TourCreate",
    "TourResponse",
    "TourRepository",
]
