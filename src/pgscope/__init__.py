"""Per-request PostgreSQL connection lifecycle for Falcon ASGI apps."""

from pgscope.application.dto.middleware_options import (
    DEFAULT_MIDDLEWARE_OPTIONS,
    MiddlewareOptions,
)
from pgscope.domain.value_objects import StoreKey
from pgscope.infrastructure.context.request_store import (
    get_db_client,
    keep_connection,
    require_db_client,
)
from pgscope.interfaces.api.middleware.db_connection import (
    DbConnectionMiddleware,
    create_db_middleware,
)
from pgscope.interfaces.api.middleware.request_store import RequestStoreMiddleware
from pgscope.interfaces.api.middleware.response_close import (
    ResponseCloseMiddleware,
    on_response_close,
)

__version__ = "0.2.0"

__all__ = [
    "DEFAULT_MIDDLEWARE_OPTIONS",
    "DbConnectionMiddleware",
    "MiddlewareOptions",
    "RequestStoreMiddleware",
    "ResponseCloseMiddleware",
    "StoreKey",
    "create_db_middleware",
    "get_db_client",
    "keep_connection",
    "on_response_close",
    "require_db_client",
]
