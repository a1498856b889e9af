"""Fixtures for API tests."""

import falcon.asgi
import pytest

from pgscope.domain.value_objects import StoreKey
from pgscope.infrastructure.context.request_store import (
    get_db_client,
    get_store_value,
    keep_connection,
)
from pgscope.interfaces.api.middleware.db_connection import create_db_middleware
from pgscope.interfaces.api.middleware.request_store import RequestStoreMiddleware
from pgscope.interfaces.api.middleware.response_close import ResponseCloseMiddleware
from pgscope.interfaces.api.resources.health import HealthResource


class ProbeResource:
    """Records what the responder finds in the request store."""

    def __init__(self) -> None:
        self.seen: list[tuple[object, object]] = []

    def _record(self) -> None:
        self.seen.append(
            (get_db_client(), get_store_value(StoreKey.DB_KEEP_CONNECTION))
        )

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        self._record()
        resp.media = {"connected": get_db_client() is not None}

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        self._record()
        keep_connection()
        resp.media = {"kept": True}


class AbortingStreamResource:
    """Streams one chunk, then fails as if the client had gone away."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async def body():
            yield b"a"
            raise ConnectionResetError("client went away")

        resp.stream = body()


@pytest.fixture
def probe() -> ProbeResource:
    return ProbeResource()


@pytest.fixture
def make_app(probe):
    """Build a Falcon ASGI app with the middleware under the given options."""

    def _make(**options) -> falcon.asgi.App:
        app = falcon.asgi.App(
            middleware=[RequestStoreMiddleware(), create_db_middleware(options)],
        )
        health = HealthResource()
        app.add_route("/probe", probe)
        app.add_route("/stream", AbortingStreamResource())
        app.add_route("/v1/health", health)
        app.add_route("/v1/health/ready", health, suffix="ready")
        return app

    return _make


@pytest.fixture
def make_client(make_app):
    """Falcon ASGI test client; wrap=True puts the app inside ResponseCloseMiddleware."""
    from falcon.testing import TestClient

    def _make(wrap: bool = False, **options) -> TestClient:
        app = make_app(**options)
        return TestClient(ResponseCloseMiddleware(app) if wrap else app)

    return _make
