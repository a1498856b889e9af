"""Domain exceptions."""


class PgScopeError(Exception):
    """Base exception for pgscope."""

    pass


class DbClientError(PgScopeError):
    """Database driver failure, carrying the driver error code."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ConnectionOpenError(DbClientError):
    """Opening a database connection failed."""

    pass


class ConnectionCloseError(DbClientError):
    """Closing a database connection failed."""

    pass


class NoConnectionBound(PgScopeError):
    """No database connection is bound to the current request."""

    pass
