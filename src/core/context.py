"""Request context management using contextvars.

Each request (or controller action) gets a unique ID and the acting viewer's
ID, which the logging processors attach to every log entry without passing
them through the call stack explicitly.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
viewer_id_var: ContextVar[str | None] = ContextVar("viewer_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID."""
    return str(uuid4())


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID for the current context.

    Args:
        request_id: Optional request ID. If not provided, generates a new one.

    Returns:
        The request ID that was set.
    """
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


def get_viewer_id() -> str | None:
    """Get the current viewer ID."""
    return viewer_id_var.get()


def set_viewer_id(viewer_id: str | None) -> None:
    """Set the viewer ID for the current context."""
    viewer_id_var.set(viewer_id or None)


def get_context() -> dict[str, Any]:
    """Get all context variables as a dictionary."""
    context: dict[str, Any] = {}

    request_id = get_request_id()
    if request_id:
        context["request_id"] = request_id

    viewer_id = get_viewer_id()
    if viewer_id:
        context["viewer_id"] = viewer_id

    return context


def clear_context() -> None:
    """Clear all context variables.

    Called at the end of each request so values do not leak into the next one.
    """
    request_id_var.set("")
    viewer_id_var.set(None)


class RequestContext:
    """Context manager for a request or action scope.

    Usage:
        with RequestContext(viewer_id="u1"):
            log.info("post_created")  # includes request_id and viewer_id
    """

    def __init__(
        self,
        request_id: str | None = None,
        viewer_id: str | None = None,
    ) -> None:
        self.request_id = request_id
        self.viewer_id = viewer_id
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "RequestContext":
        """Enter context and set variables."""
        self._tokens["request_id"] = request_id_var.set(
            self.request_id or generate_request_id()
        )
        if self.viewer_id is not None:
            self._tokens["viewer_id"] = viewer_id_var.set(self.viewer_id)
        return self

    def __exit__(self, *_: object) -> None:
        """Exit context and restore previous values."""
        for var_name, token in self._tokens.items():
            if var_name == "request_id":
                request_id_var.reset(token)
            elif var_name == "viewer_id":
                viewer_id_var.reset(token)
