"""Request store middleware - binds a fresh ambient store per request."""

import falcon.asgi

from pgscope.infrastructure.context.request_store import bind_request_store


class RequestStoreMiddleware:
    """Middleware that gives each request its own ambient store.

    Install it before DbConnectionMiddleware so a store never leaks from
    one request into the next when both run in the same context. Not needed
    when the app is wrapped in ResponseCloseMiddleware, which binds the store.
    """

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        bind_request_store()
