"""DB connection middleware - one connection per request, closed after the response."""

import asyncio
import os
import signal
from collections.abc import Mapping
from typing import Any

import falcon
import falcon.asgi

from pgscope.application.dto.middleware_options import MiddlewareOptions, merge_options
from pgscope.application.ports.db_client import DbClient
from pgscope.domain.value_objects import FatalErrorClass, StoreKey
from pgscope.infrastructure.context.request_store import (
    get_store_value,
    set_store_value,
)
from pgscope.infrastructure.persistence.postgres.client import PostgresDbClient
from pgscope.interfaces.api.middleware.response_close import on_response_close
from pgscope.log import get_logger

logger = get_logger(__name__)

FAILURE_BODY = {"status": 500, "reason": "A problem occurred, please retry"}


class DbConnectionMiddleware:
    """Middleware that opens a connection for qualifying requests.

    The client is published under StoreKey.DB_CLIENT and closed once the
    response is over, unless StoreKey.DB_KEEP_CONNECTION was set. Wrap the
    app in ResponseCloseMiddleware so aborted and disconnected requests
    close it too.
    Install once per app; stacking two instances on one request is unsupported.
    """

    def __init__(self, options: MiddlewareOptions) -> None:
        self._options = options
        self._client_factory = options.client_factory or PostgresDbClient

    @property
    def options(self) -> MiddlewareOptions:
        return self._options

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Open and bind a connection, or respond 500 if that fails."""
        if req.method not in (self._options.http_methods or ()):
            await asyncio.sleep(0)
            return

        client = self._client_factory(self._options.connection_options)
        try:
            await client.open()
        except Exception as err:
            self._handle_open_failure(resp, err)
            return

        set_store_value(StoreKey.DB_CLIENT, client)
        set_store_value(StoreKey.DB_KEEP_CONNECTION, False)

        async def on_response_closed() -> None:
            if not get_store_value(StoreKey.DB_KEEP_CONNECTION):
                await _close_quietly(client)

        on_response_close(resp, on_response_closed)
        await asyncio.sleep(0)

    def _handle_open_failure(self, resp: falcon.asgi.Response, err: Exception) -> None:
        resp.status = falcon.HTTP_500
        resp.media = dict(FAILURE_BODY)
        resp.complete = True
        logger.error(
            "Failed to establish db connection",
            error_code=getattr(err, "code", None),
            error_message=str(err),
        )
        if not self._options.exit_on_connection_failure:
            return
        error_class = FatalErrorClass.classify(getattr(err, "code", None))
        if error_class is None:
            return
        logger.critical(error_class.exit_message, error_class=error_class.value)
        # runs after the 500 has been sent
        on_response_close(resp, _terminate_process)


async def _close_quietly(client: DbClient) -> None:
    try:
        await client.close()
    except Exception as err:
        logger.error(
            "Failed to close connection",
            error_code=getattr(err, "code", None),
            error_message=str(err),
        )


async def _terminate_process() -> None:
    os.kill(os.getpid(), signal.SIGTERM)


def create_db_middleware(
    options: MiddlewareOptions | Mapping[str, Any] | None = None,
) -> DbConnectionMiddleware:
    """Build a DbConnectionMiddleware from options merged over the defaults."""
    return DbConnectionMiddleware(merge_options(options))
