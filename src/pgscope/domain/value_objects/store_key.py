"""Keys of the per-request ambient store."""

from enum import Enum


class StoreKey(Enum):
    """Store slots published by the connection middleware.

    Members are plain Enum members, not strings, so they never compare
    equal to keys another library puts in the same store.
    """

    DB_CLIENT = "pgscope.db-client"
    DB_KEEP_CONNECTION = "pgscope.db-keep-connection"
