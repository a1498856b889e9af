"""Health check endpoints."""

import falcon.asgi

from pgscope.domain.exceptions import PgScopeError
from pgscope.infrastructure.context.request_store import get_db_client
from pgscope.log import get_logger

logger = get_logger(__name__)


class HealthResource:
    """Health and readiness endpoints."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness, pings the request's connection."""
        client = get_db_client()
        if client is None:
            resp.media = {"status": "unavailable", "database": "not connected"}
            resp.status = falcon.HTTP_503
            return
        try:
            await client.ping()
        except PgScopeError as e:
            logger.warning("Readiness ping failed", error_message=str(e))
            resp.media = {"status": "unavailable", "database": "ping failed"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready", "database": "ok"}
        resp.status = falcon.HTTP_200
