"""Application ports - interfaces for external adapters."""

from pgscope.application.ports.db_client import (
    ConnectionOptions,
    DbClient,
    DbClientFactory,
)

__all__ = [
    "ConnectionOptions",
    "DbClient",
    "DbClientFactory",
]
