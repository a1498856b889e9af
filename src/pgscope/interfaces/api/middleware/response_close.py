"""
Response close middleware.

Pure ASGI wrapper around the Falcon app. It binds a fresh request store and
a list of close hooks for each HTTP request, and runs the hooks in a
``finally`` block once the app returns. That covers a completed response, a
streamed body that raised, a failed ``send`` on client disconnect, and a
cancelled request alike.

Without the wrapper, hooks fall back to Falcon's ``resp.schedule()``, which
only runs after a response was sent in full.
"""

from collections.abc import Awaitable, Callable
from contextvars import ContextVar
from typing import Any

import falcon.asgi

from pgscope.infrastructure.context.request_store import (
    bind_request_store,
    reset_request_store,
)
from pgscope.log import get_logger

logger = get_logger(__name__)

CloseHook = Callable[[], Awaitable[None]]

_close_hooks: ContextVar[list[CloseHook] | None] = ContextVar(
    "pgscope_close_hooks", default=None
)


class ResponseCloseMiddleware:
    """Run registered close hooks on every exit path of an HTTP request.

    Only applies to ``http`` scope; lifespan and websocket scopes are passed
    through unchanged.
    """

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        hooks: list[CloseHook] = []
        hooks_token = _close_hooks.set(hooks)
        store_token = bind_request_store()
        try:
            await self.app(scope, receive, send)
        finally:
            for hook in hooks:
                try:
                    await hook()
                except Exception:
                    logger.exception("Response close hook failed", path=scope.get("path"))
            reset_request_store(store_token)
            _close_hooks.reset(hooks_token)


def on_response_close(resp: falcon.asgi.Response, hook: CloseHook) -> None:
    """Register an async hook to run once the response is over.

    Runs from ResponseCloseMiddleware when the app is wrapped in it,
    otherwise through ``resp.schedule()``.
    """
    hooks = _close_hooks.get()
    if hooks is None:
        resp.schedule(hook)
    else:
        hooks.append(hook)
