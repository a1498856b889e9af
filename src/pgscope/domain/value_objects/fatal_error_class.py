"""Connection failures that warrant terminating the process."""

from enum import Enum


class FatalErrorClass(Enum):
    """Driver error classes the process cannot recover from by itself."""

    NETWORK = "network"
    CREDENTIALS = "credentials"
    CAPACITY = "capacity"

    @property
    def codes(self) -> frozenset[str]:
        """SQLSTATE codes belonging to this class."""
        return _CODES[self]

    @property
    def exit_message(self) -> str:
        return _EXIT_MESSAGES[self]

    @classmethod
    def classify(cls, code: str | None) -> "FatalErrorClass | None":
        """Return the fatal class for a driver error code, None if not fatal."""
        if not code:
            return None
        for error_class in cls:
            if code in error_class.codes:
                return error_class
        return None


_CODES = {
    # sqlclient_unable_to_establish_sqlconnection, connection_failure
    FatalErrorClass.NETWORK: frozenset({"08001", "08006"}),
    # invalid_password, invalid_authorization_specification
    FatalErrorClass.CREDENTIALS: frozenset({"28P01", "28000"}),
    # too_many_connections
    FatalErrorClass.CAPACITY: frozenset({"53300"}),
}

_EXIT_MESSAGES = {
    FatalErrorClass.NETWORK: "Failed to establish db connection. Network error. Exiting",
    FatalErrorClass.CREDENTIALS: "Failed to open db connection. Credentials error. Exiting",
    FatalErrorClass.CAPACITY: "Failed to open db connection. Too many connections. Exiting",
}
