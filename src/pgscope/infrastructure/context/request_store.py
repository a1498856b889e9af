"""
Ambient per-request store backed by contextvars.

Each request binds its own dict (see RequestStoreMiddleware). Code running in
the request's task, and in tasks it spawns, reads and writes the same dict;
concurrent requests run in separate tasks and never see each other's entries.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

from pgscope.application.ports.db_client import DbClient
from pgscope.domain.exceptions import NoConnectionBound
from pgscope.domain.value_objects import StoreKey

_request_store: ContextVar[dict[Any, Any] | None] = ContextVar(
    "pgscope_request_store", default=None
)


def bind_request_store() -> Token:
    """Bind a fresh, empty store to the current context."""
    return _request_store.set({})


def reset_request_store(token: Token) -> None:
    _request_store.reset(token)


@contextmanager
def request_store_scope() -> Iterator[dict[Any, Any]]:
    """Bind a fresh store for the duration of the block (CLI, tests)."""
    token = bind_request_store()
    try:
        yield _request_store.get()
    finally:
        reset_request_store(token)


def get_store_value(key: Any, default: Any = None) -> Any:
    store = _request_store.get()
    if store is None:
        return default
    return store.get(key, default)


def set_store_value(key: Any, value: Any) -> None:
    """Write a value into the current store, binding one if none is bound."""
    store = _request_store.get()
    if store is None:
        store = {}
        _request_store.set(store)
    store[key] = value


def get_db_client() -> DbClient | None:
    """Connection bound to the current request, None if the request was bypassed."""
    return get_store_value(StoreKey.DB_CLIENT)


def require_db_client() -> DbClient:
    client = get_db_client()
    if client is None:
        raise NoConnectionBound(
            "No database connection bound to this request. "
            "Is DbConnectionMiddleware installed for this HTTP method?"
        )
    return client


def keep_connection(keep: bool = True) -> None:
    """Opt the current request's connection out of automatic closing.

    The caller then owns the connection and must close it.
    """
    set_store_value(StoreKey.DB_KEEP_CONNECTION, keep)
