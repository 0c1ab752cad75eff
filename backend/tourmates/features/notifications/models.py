"""
Notification model.

Rows are append-only: created by the nearby tour scan, then only ever
flipped from unread to read.
"""

from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, Float, ForeignKey
from sqlalchemy.orm import relationship

from tourmates.models.base import Base, utcnow


class Notification(Base):
    """
    User notification.

    Types (see NotificationType):
    - nearby_tour: A tour was created within the user's radius
    - tour_update, join_request, reminder: reserved

    `message` is rendered once at creation. `distance` is the km value at
    creation time and is never recomputed.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    tour_id = Column(
        String(36),
        ForeignKey("tours.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

    # Status
    is_read = Column(Boolean, nullable=False, default=False)

    # Kilometers from the tour start, full precision
    distance = Column(Float, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, index=True)

    # Relationships
    user = relationship("User", back_populates="notifications")
    tour = relationship("Tour")

    def __repr__(self):
        return f"<Notification {self.id} type={self.type} read={self.is_read}>"
