"""Exception hierarchy for the mock backend.

Connection failures reject the call. Read-only policy violations never raise:
they come back as a QueryResult with ``error`` set.
"""

SECURITY_VIOLATION_MESSAGE = (
    "Security Violation: Only read-only queries (SELECT, EXPLAIN, SHOW) are allowed."
)


class DBScopeError(Exception):
    """Base class for every error raised by DBScope services."""

    kind = "error"


class DatabaseConnectionError(DBScopeError):
    """The simulated handshake was rejected."""

    kind = "connection"


class MissingParametersError(DatabaseConnectionError):
    """Host, user or database was not supplied."""

    kind = "missing_parameters"

    def __init__(self, message: str = "Missing required connection parameters"):
        super().__init__(message)


class ConnectionTimeoutError(DatabaseConnectionError):
    """Injected transient network failure."""

    kind = "timeout"

    def __init__(self, port: str | int = 5432):
        self.port = port
        super().__init__(f"Connection timed out ({port})")


class SessionError(DBScopeError):
    kind = "session"


class NotConnectedError(SessionError):
    kind = "not_connected"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no active connection")


class TableNotFoundError(SessionError):
    kind = "table_not_found"

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table {table_name!r} does not exist")
