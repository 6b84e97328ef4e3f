import logging
from typing import Optional

from litestar import Litestar, Request
from litestar.config.cors import CORSConfig
from litestar.contrib.pydantic import PydanticPlugin
from litestar.contrib.sqlalchemy.plugins import SQLAlchemyInitPlugin, SQLAlchemyAsyncConfig
from litestar.datastructures import State
from litestar.di import Provide
from litestar.exceptions import HTTPException
from litestar.response import Response
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from pulse.config import Settings
from pulse.exceptions import PulseError
from pulse.models import Base  # Import models Base for table creation
from pulse.routes import ROUTES
from pulse.services import FeedbackBroadcaster
from pulse.utils.logging import configure_logging, log_request_error

logger = logging.getLogger("Pulse")


# --- Dependencies
def provide_broadcaster(state: State) -> FeedbackBroadcaster:
    return state.broadcaster


# --- Exception handlers
def handle_pulse_error(request: Request, exc: PulseError) -> Response:
    """Turn domain errors into JSON error responses."""
    return Response(
        content=exc.to_dict(),
        status_code=exc.status_code,
        media_type="application/json",
    )


def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Keep Litestar's own HTTP errors (validation, 404 routes, ...) at their status."""
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        log_request_error(request, exc, message="Server error")
    content = {"status_code": exc.status_code, "detail": exc.detail}
    if exc.extra:
        content["extra"] = exc.extra
    return Response(
        content=content,
        status_code=exc.status_code,
        media_type="application/json",
        headers=exc.headers,
    )


def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc, message="Unhandled exception occurred")
    return Response(
        content={"detail": "Internal Server Error"},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/json"
    )


# --- App init
def create_app(settings: Optional[Settings] = None) -> Litestar:
    """Build the application with its own broadcaster and database config."""
    settings = settings or Settings.from_env()
    configure_logging(settings.debug)

    logger.info(f"Starting app in {'DEBUG' if settings.debug else 'PRODUCTION'} mode")
    logger.info(f"Database: {settings.database_url.split('@')[-1]}")

    config = SQLAlchemyAsyncConfig(
        connection_string=settings.database_url,
        session_dependency_key="session",
        metadata=Base.metadata,
        create_all=settings.debug,  # Auto-create tables on startup (dev only)
    )

    return Litestar(
        route_handlers=ROUTES,
        debug=settings.debug,
        plugins=[SQLAlchemyInitPlugin(config), PydanticPlugin(prefer_alias=True)],
        cors_config=CORSConfig(allow_origins=settings.cors_origins, allow_methods=["GET", "POST"]),
        state=State({"broadcaster": FeedbackBroadcaster(), "settings": settings}),
        dependencies={
            "broadcaster": Provide(provide_broadcaster, sync_to_thread=False),
        },
        exception_handlers={
            Exception: log_exceptions,
            HTTPException: handle_http_exception,
            PulseError: handle_pulse_error,
        },
    )


app = create_app()
