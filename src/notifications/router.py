"""Notification API routes.

Endpoints for:
- GET /v1/notifications - Drain the viewer's pending notifications
- GET /v1/notifications/pending - Peek without draining
"""

from fastapi import APIRouter

from src.auth.dependencies import CurrentViewer
from src.notifications.dependencies import NotificationInboxDep
from src.notifications.schemas import (
    NotificationListResponse,
    NotificationResponse,
)


router = APIRouter(
    prefix="/v1/notifications",
    tags=["notifications"],
)


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="Drain notifications",
    description="Return every pending notification of the viewer and clear them.",
)
def drain_notifications(
    inbox: NotificationInboxDep,
    viewer: CurrentViewer,
) -> NotificationListResponse:
    """Drain the viewer's notification inbox."""
    items = [NotificationResponse.from_notification(n) for n in inbox.drain(viewer.id)]
    return NotificationListResponse(items=items, total=len(items))


@router.get(
    "/pending",
    response_model=NotificationListResponse,
    summary="Peek notifications",
)
def pending_notifications(
    inbox: NotificationInboxDep,
    viewer: CurrentViewer,
) -> NotificationListResponse:
    """List pending notifications without clearing them."""
    items = [NotificationResponse.from_notification(n) for n in inbox.pending(viewer.id)]
    return NotificationListResponse(items=items, total=len(items))
