"""Dependencies for notification routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.notifications.service import InboxNotifier


def get_notification_inbox(request: Request) -> InboxNotifier:
    """Get the notification inbox from app state."""
    inbox = getattr(request.app.state, "notification_inbox", None)
    if inbox is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Servico de notificacoes nao disponivel",
        )
    return inbox


NotificationInboxDep = Annotated[InboxNotifier, Depends(get_notification_inbox)]
