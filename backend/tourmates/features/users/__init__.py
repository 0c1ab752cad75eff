"""
User management module.

Usage:
    from tourmates.features.users import User, UserRepository

Models:
- User: Application user with location preferences

Repositories:
- UserRepository: Data access for users
"""

from .models import User
from .schemas import (
    LocationSettingsUpdate,
    LocationSettingsResponse,
    UserUpdateResponse,
)
from .repository import UserRepository

__all__ = [
    # Models
    "User",
    # Schemas
    "LocationSettingsUpdate",
    "LocationSettingsResponse",
    "UserUpdateResponse",
    # Repositories
    "UserRepository",
]
