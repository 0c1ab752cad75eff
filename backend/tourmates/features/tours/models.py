"""
Tour model.

A group ride itinerary created by one user. Start coordinates are
optional; tours without them are never announced to nearby users.
"""

from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from tourmates.models.base import Base, utcnow


class Tour(Base):
    """Group touring itinerary."""

    __tablename__ = "tours"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Route
    start_location = Column(String(255), nullable=False)
    end_location = Column(String(255), nullable=False)
    start_latitude = Column(Float, nullable=True)
    start_longitude = Column(Float, nullable=True)
    end_latitude = Column(Float, nullable=True)
    end_longitude = Column(Float, nullable=True)

    # Schedule and capacity
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    max_participants = Column(Integer, nullable=False)
    image_url = Column(String(500), nullable=True)

    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Lifecycle
    is_active = Column(Boolean, nullable=False, default=True)
    is_closed = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    created_by = relationship("User", back_populates="tours")

    @property
    def has_start_coordinates(self) -> bool:
        return self.start_latitude is not None and self.start_longitude is not None

    def __repr__(self):
        return f"<Tour {self.id} ({self.title}) closed={self.is_closed}>"
