"""
Notification subsystem errors.
"""


class NotificationError(Exception):
    """Base class for notification subsystem failures."""


class NotificationDeliveryError(NotificationError):
    """A batch of notifications could not be persisted."""

    def __init__(self, tour_id: str, count: int):
        self.tour_id = tour_id
        self.count = count
        super().__init__(
            f"Failed to persist {count} notifications for tour {tour_id}"
        )
