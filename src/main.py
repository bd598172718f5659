"""VivaMente Feed API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.auth.models import Profile
from src.auth.router import router as auth_router
from src.auth.service import ProfileService
from src.communities.models import Community
from src.communities.router import router as communities_router
from src.communities.service import CommunityService
from src.config import Settings, get_settings
from src.core.context import get_request_id
from src.core.logging import configure_structlog, get_logger
from src.core.middleware import RequestContextMiddleware
from src.feed.router import router as feed_router
from src.feed.service import FeedController
from src.health import router as health_router
from src.notifications.router import router as notifications_router
from src.notifications.service import CompositeNotifier, InboxNotifier, LoggingNotifier
from src.posts.models import Post
from src.posts.store import PostStore
from src.storage.repository import (
    InMemoryRepository,
    Repository,
    StorageError,
    json_community_repository,
    json_post_repository,
    json_profile_repository,
)
from src.storage.seed import DEMO_COMMUNITIES, DEMO_POSTS


logger = get_logger(__name__)


@dataclass
class AppServices:
    """Services shared by every request of one application instance."""

    post_store: PostStore
    community_service: CommunityService
    feed_controller: FeedController
    notification_inbox: InboxNotifier
    profile_service: ProfileService


def build_services(
    settings: Settings,
    post_repository: Repository[Post] | None = None,
    community_repository: Repository[Community] | None = None,
    profile_repository: Repository[Profile] | None = None,
) -> AppServices:
    """Wire repositories, stores, services and the feed controller from settings."""
    if post_repository is None:
        post_repository = (
            json_post_repository(settings.posts_path)
            if settings.storage_backend == "json"
            else InMemoryRepository()
        )
    if community_repository is None:
        community_repository = (
            json_community_repository(settings.communities_path)
            if settings.storage_backend == "json"
            else InMemoryRepository()
        )
    if profile_repository is None:
        profile_repository = (
            json_profile_repository(settings.profiles_path)
            if settings.storage_backend == "json"
            else InMemoryRepository()
        )

    post_store = PostStore(
        post_repository, seed=DEMO_POSTS if settings.seed_demo_data else None
    )
    community_service = CommunityService(
        community_repository,
        seed=DEMO_COMMUNITIES if settings.seed_demo_data else None,
        general_id=settings.general_community_id,
        general_label=settings.general_community_label,
    )
    inbox = InboxNotifier(max_size=settings.notification_inbox_size)
    controller = FeedController(
        post_store,
        CompositeNotifier([LoggingNotifier(), inbox]),
        general_id=settings.general_community_id,
    )
    return AppServices(
        post_store=post_store,
        community_service=community_service,
        feed_controller=controller,
        notification_inbox=inbox,
        profile_service=ProfileService(profile_repository),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    configure_structlog(settings)
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        storage_backend=settings.storage_backend,
    )

    # Load once per session; a broken data file must not stop the app
    try:
        app.state.post_store.load()
        logger.info("post_store_initialized")
    except StorageError as e:
        logger.warning("post_store_init_skipped", code=e.code, error=e.message)

    yield

    logger.info("shutting_down_application")


def create_app(
    settings: Settings | None = None,
    post_repository: Repository[Post] | None = None,
    community_repository: Repository[Community] | None = None,
    profile_repository: Repository[Profile] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="VivaMente - Feed de comunidades de apoio",
        debug=False,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    services = build_services(
        settings, post_repository, community_repository, profile_repository
    )
    app.state.settings = settings
    app.state.post_store = services.post_store
    app.state.community_service = services.community_service
    app.state.feed_controller = services.feed_controller
    app.state.notification_inbox = services.notification_inbox
    app.state.profile_service = services.profile_service

    # Request context middleware (outermost)
    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    def _get_request_id_safe(request: Request) -> str | None:
        """Get request_id from request state or context."""
        if hasattr(request.state, "request_id"):
            return request.state.request_id
        return get_request_id()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions with safe error messages."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": str(exc.detail)
                if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
                else "Internal server error",
                "status_code": exc.status_code,
                "request_id": _get_request_id_safe(request),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle validation errors (blank text, missing fields)."""
        logger.warning(
            "validation_error",
            path=request.url.path,
            method=request.method,
            error_count=len(exc.errors()),
        )
        return JSONResponse(
            status_code=422,
            content={
                "error": True,
                "message": "Validation error",
                "status_code": 422,
                "request_id": _get_request_id_safe(request),
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in err.get("loc", [])),
                        "message": err.get("msg", "Invalid value"),
                    }
                    for err in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all handler for unhandled exceptions."""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "message": "An unexpected error occurred. Please try again later.",
                "status_code": 500,
                "request_id": _get_request_id_safe(request),
            },
        )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(feed_router)
    app.include_router(communities_router)
    app.include_router(notifications_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "VivaMente Feed API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


def run() -> None:
    """Run the development server."""
    import uvicorn  # noqa: PLC0415

    settings = get_settings()
    uvicorn.run(
        "src.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    run()
