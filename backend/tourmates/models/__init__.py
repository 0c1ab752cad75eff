"""
Database Models

Feature models live next to their feature (features/<name>/models.py).
Import them through register_models() so they are attached to Base.metadata
before create_all or Alembic autogenerate runs.
"""

from tourmates.models.base import Base


def register_models():
    """Import all feature models and return them."""
    from tourmates.features.users.models import User
    from tourmates.features.tours.models import Tour
    from tourmates.features.notifications.models import Notification
    return User, Tour, Notification


def __getattr__(name):
    if name in ("User", "Tour", "Notification"):
        user, tour, notification = register_models()
        return {"User": user, "Tour": tour, "Notification": notification}[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Base",
    "User",
    "Tour",
    "Notification",
    "register_models",
]
