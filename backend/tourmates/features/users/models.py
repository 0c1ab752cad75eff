"""
User model.

Only the profile and location-preference columns live here; sessions and
credentials belong to the auth layer.
"""

from sqlalchemy import Column, String, DateTime, Boolean, Integer, Float, true
from sqlalchemy.orm import relationship
import uuid

from tourmates.models.base import Base, utcnow
from tourmates.shared.constants import DEFAULT_NOTIFICATION_RADIUS_KM


class User(Base):
    """
    Application user.

    Location fields drive nearby tour notifications: a user is only
    considered when notifications_enabled is set and both coordinates
    are known.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=True)

    # Profile
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    # Location preferences
    location = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    notification_radius = Column(
        Integer,
        nullable=True,
        default=DEFAULT_NOTIFICATION_RADIUS_KM,
        server_default=str(DEFAULT_NOTIFICATION_RADIUS_KM),
    )
    notifications_enabled = Column(Boolean, nullable=False, default=True, server_default=true())

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    tours = relationship("Tour", back_populates="created_by")

    notifications = relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User {self.id} ({self.email})>"
