"""Notification models.

Notifications are short, fire-and-forget messages reporting the outcome of a
viewer action (the toast banner in the UI). Nothing acknowledges them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4


class NotificationKind(str, Enum):
    """Kinds of notifications."""

    INFO = "info"
    SUCCESS = "success"


@dataclass(frozen=True)
class Notification:
    """A single user-visible notice."""

    message: str
    kind: NotificationKind = NotificationKind.INFO
    id: str = field(default_factory=lambda: uuid4().hex[:9])
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
