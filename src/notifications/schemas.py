"""Pydantic schemas for notifications."""

from datetime import datetime

from pydantic import BaseModel

from .models import Notification, NotificationKind


class NotificationResponse(BaseModel):
    """Response for a single notification."""

    id: str
    message: str
    kind: NotificationKind
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        """Create response from Notification entity."""
        return cls(
            id=notification.id,
            message=notification.message,
            kind=notification.kind,
            created_at=notification.created_at,
        )


class NotificationListResponse(BaseModel):
    """Notifications drained from the inbox."""

    items: list[NotificationResponse]
    total: int
