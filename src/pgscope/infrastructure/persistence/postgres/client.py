"""PostgreSQL connection client - one psycopg connection per instance."""

import psycopg

from pgscope.application.ports.db_client import ConnectionOptions
from pgscope.domain.exceptions import (
    ConnectionCloseError,
    ConnectionOpenError,
    DbClientError,
    NoConnectionBound,
)

# libpq reports most connection-time failures without a SQLSTATE
_MESSAGE_SQLSTATES = (
    ("connection refused", "08001"),
    ("could not connect", "08001"),
    ("could not translate host name", "08001"),
    ("timeout expired", "08001"),
    ("password authentication failed", "28P01"),
    ("no pg_hba.conf entry", "28000"),
    ('role "', "28000"),
    ("too many clients", "53300"),
    ("remaining connection slots", "53300"),
)


def error_code(error: BaseException) -> str | None:
    """SQLSTATE of a psycopg error, derived from the message when absent."""
    sqlstate = getattr(error, "sqlstate", None)
    if sqlstate:
        return sqlstate
    message = str(error).lower()
    for fragment, code in _MESSAGE_SQLSTATES:
        if fragment in message:
            return code
    return None


class PostgresDbClient:
    """Async PostgreSQL client holding a single connection."""

    def __init__(self, connection_options: ConnectionOptions = "") -> None:
        self._connection_options = connection_options
        self._conn: psycopg.AsyncConnection | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None and not self._conn.closed

    @property
    def connection(self) -> psycopg.AsyncConnection:
        """The live psycopg connection."""
        if self._conn is None:
            raise NoConnectionBound("Connection is not open")
        return self._conn

    async def open(self) -> None:
        """Connect using a conninfo string or keyword mapping.

        Raises ConnectionOpenError with the SQLSTATE (or derived code) on failure.
        """
        try:
            if isinstance(self._connection_options, str):
                self._conn = await psycopg.AsyncConnection.connect(
                    self._connection_options
                )
            else:
                self._conn = await psycopg.AsyncConnection.connect(
                    **self._connection_options
                )
        except psycopg.Error as e:
            raise ConnectionOpenError(str(e), code=error_code(e)) from e

    async def close(self) -> None:
        if self._conn is None:
            return
        try:
            await self._conn.close()
        except psycopg.Error as e:
            raise ConnectionCloseError(str(e), code=error_code(e)) from e

    async def ping(self) -> None:
        """Run SELECT 1 on the connection."""
        try:
            async with self.connection.cursor() as cur:
                await cur.execute("SELECT 1")
                await cur.fetchone()
        except psycopg.Error as e:
            raise DbClientError(str(e), code=error_code(e)) from e
