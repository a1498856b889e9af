"""Connection middleware options DTO."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from pgscope.application.ports.db_client import ConnectionOptions, DbClientFactory


@dataclass(frozen=True)
class MiddlewareOptions:
    """Resolved options of one middleware installation.

    client_factory None means a PostgresDbClient built from connection_options.
    """

    http_methods: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE")
    connection_options: ConnectionOptions = ""
    exit_on_connection_failure: bool = False
    client_factory: DbClientFactory | None = None


DEFAULT_MIDDLEWARE_OPTIONS = MiddlewareOptions()


def merge_options(
    options: MiddlewareOptions | Mapping[str, Any] | None = None,
) -> MiddlewareOptions:
    """Shallow-merge caller options over DEFAULT_MIDDLEWARE_OPTIONS.

    Only keys present in a mapping override the defaults. A MiddlewareOptions
    instance is taken as fully specified. Values are not validated here.
    """
    if options is None:
        return DEFAULT_MIDDLEWARE_OPTIONS
    if isinstance(options, MiddlewareOptions):
        overrides = {f.name: getattr(options, f.name) for f in fields(options)}
    else:
        overrides = dict(options)
    if overrides.get("http_methods") is not None:
        overrides["http_methods"] = tuple(overrides["http_methods"])
    return replace(DEFAULT_MIDDLEWARE_OPTIONS, **overrides)
