"""
Formatting utilities for notification text.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

from tourmates.config import settings


def round_km(km: float) -> int:
    """
    Round a distance to the nearest whole kilometer, halves going up.

    Args:
        km: Distance in kilometers

    Returns:
        Whole kilometers (e.g., 30.5 -> 31)
    """
    return int(Decimal(str(km)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_distance_km(km: float) -> str:
    """
    Format distance for display.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '30km')
    """
    return f"{round_km(km)}km"


def format_tour_date(value: date | datetime, fmt: str | None = None) -> str:
    """Render a tour date with the server's configured date format."""
    return value.strftime(fmt or settings.notification_date_format)
