"""Notification port and adapters.

- ``Notifier``: the port the feed controller reports outcomes to
- ``LoggingNotifier``: writes each notice to the structured log
- ``InboxNotifier``: keeps each viewer's most recent notices for them to drain
- ``CompositeNotifier``: fans a notice out to several notifiers
"""

import threading
from collections import deque
from collections.abc import Iterable
from typing import Protocol

import structlog

from src.core.context import get_viewer_id

from .models import Notification, NotificationKind


logger = structlog.get_logger(__name__)


class Notifier(Protocol):
    """Notification port."""

    def notify(
        self, message: str, kind: NotificationKind = NotificationKind.INFO
    ) -> None:
        """Report ``message`` to the viewer."""
        ...


class LoggingNotifier:
    """Notifier that only logs."""

    def notify(
        self, message: str, kind: NotificationKind = NotificationKind.INFO
    ) -> None:
        logger.info("notification_sent", message=message, kind=kind.value)


class InboxNotifier:
    """Notifier keeping a bounded inbox of recent notices per viewer.

    The recipient is the viewer of the current request context. Notices
    raised outside any viewer's scope are logged and dropped.
    """

    def __init__(self, max_size: int = 50) -> None:
        self.max_size = max_size
        self._inboxes: dict[str, deque[Notification]] = {}
        self._lock = threading.Lock()

    def notify(
        self, message: str, kind: NotificationKind = NotificationKind.INFO
    ) -> None:
        viewer_id = get_viewer_id()
        if not viewer_id:
            logger.warning("notification_without_recipient", kind=kind.value)
            return
        with self._lock:
            inbox = self._inboxes.setdefault(viewer_id, deque(maxlen=self.max_size))
            inbox.append(Notification(message=message, kind=kind))

    def pending(self, viewer_id: str) -> list[Notification]:
        """Undrained notices of ``viewer_id``, oldest first."""
        with self._lock:
            return list(self._inboxes.get(viewer_id, ()))

    def drain(self, viewer_id: str) -> list[Notification]:
        """Return and clear every pending notice of ``viewer_id``."""
        with self._lock:
            return list(self._inboxes.pop(viewer_id, ()))


class CompositeNotifier:
    """Notifier forwarding to several notifiers in order."""

    def __init__(self, notifiers: Iterable[Notifier]) -> None:
        self.notifiers = tuple(notifiers)

    def notify(
        self, message: str, kind: NotificationKind = NotificationKind.INFO
    ) -> None:
        for notifier in self.notifiers:
            notifier.notify(message, kind)
