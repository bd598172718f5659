"""Notification module.

Provides the notification port the feed reports outcomes to, plus:
- A structured-log notifier
- A bounded in-memory inbox drained by clients

Note: Router is not exported here to avoid circular imports.
Import directly from src.notifications.router when needed.
"""

from .models import Notification, NotificationKind
from .service import CompositeNotifier, InboxNotifier, LoggingNotifier, Notifier


__all__ = [
    "CompositeNotifier",
    "InboxNotifier",
    "LoggingNotifier",
    "Notification",
    "NotificationKind",
    "Notifier",
]
