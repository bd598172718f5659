"""FastAPI dependencies for feed routes.

Provides dependency injection for:
- Feed controller
- Confirmation from the request
- Outcome to HTTP error mapping
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status

from .service import ActionOutcome, FeedController, StaticConfirmation


def get_feed_controller(request: Request) -> FeedController:
    """Get feed controller from app state."""
    controller = getattr(request.app.state, "feed_controller", None)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Servico de feed nao disponivel",
        )
    return controller


def get_confirmation(
    confirm: bool = Query(
        default=False, description="Confirm a destructive operation"
    ),
) -> StaticConfirmation:
    """Answer the confirmation prompt from the ``confirm`` query flag."""
    return StaticConfirmation(confirm)


FeedControllerDep = Annotated[FeedController, Depends(get_feed_controller)]
ConfirmationDep = Annotated[StaticConfirmation, Depends(get_confirmation)]


OUTCOME_STATUS = {
    "post_not_found": status.HTTP_404_NOT_FOUND,
    "comment_not_found": status.HTTP_404_NOT_FOUND,
    "permission_denied": status.HTTP_403_FORBIDDEN,
    "community_access_denied": status.HTTP_403_FORBIDDEN,
    "empty_content": status.HTTP_400_BAD_REQUEST,
    "cancelled": status.HTTP_409_CONFLICT,
    "persistence_failed": status.HTTP_503_SERVICE_UNAVAILABLE,
    "corrupt_data": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def raise_for_outcome(outcome: ActionOutcome) -> None:
    """Convert a failed outcome into an HTTP exception.

    Raises:
        HTTPException: If the outcome is not successful
    """
    if outcome.success:
        return
    raise HTTPException(
        status_code=OUTCOME_STATUS.get(
            outcome.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        detail=outcome.message or outcome.code,
    )
