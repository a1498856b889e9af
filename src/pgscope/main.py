"""Application entry point and composition root."""

import falcon
import falcon.asgi

from pgscope import __version__
from pgscope.config import Settings, get_settings
from pgscope.interfaces.api.middleware.db_connection import create_db_middleware
from pgscope.interfaces.api.middleware.response_close import ResponseCloseMiddleware
from pgscope.interfaces.api.resources.health import HealthResource
from pgscope.log import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"pgscope v{__version__}")


def create_pgscope_app(settings: Settings | None = None) -> ResponseCloseMiddleware:
    """Composition root - build Falcon app with the per-request connection middleware.

    The app is wrapped in ResponseCloseMiddleware, which also binds the
    request store, so connections close on aborted requests too.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    health_resource = HealthResource()

    app = falcon.asgi.App(
        middleware=[
            create_db_middleware(settings.middleware_options()),
        ],
    )

    async def log_exception(req, resp, ex, params):
        logger.exception("Unhandled error", path=req.path, method=req.method)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")

    return ResponseCloseMiddleware(app)


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_pgscope_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
