"""Database-related exceptions for neo-identity."""

from .base import IdentityStoreError


class DatabaseError(IdentityStoreError):
    """Base class for database-related errors."""
    pass


class DatabaseConfigurationError(DatabaseError):
    """Raised when the database configuration is missing or invalid."""
    pass


class ConnectionError(DatabaseError):
    """Base class for connection-related errors."""
    pass


class ConnectionUnavailableError(ConnectionError):
    """Raised when a database connection cannot be opened."""

    def __init__(self, connection_name: str, reason: str = ""):
        self.connection_name = connection_name
        self.reason = reason
        message = f"Database connection '{connection_name}' is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"connection_name": connection_name})


class ConnectionTimeoutError(ConnectionError):
    """Raised when opening a database connection times out."""

    def __init__(self, connection_name: str, timeout_seconds: float):
        self.connection_name = connection_name
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Connection to '{connection_name}' timed out after {timeout_seconds} seconds",
            details={"connection_name": connection_name, "timeout_seconds": timeout_seconds},
        )


class QueryError(DatabaseError):
    """Raised when a statement fails for a reason other than a handled constraint."""

    def __init__(self, operation: str, entity_type: str, reason: str = ""):
        self.operation = operation
        self.entity_type = entity_type
        self.reason = reason
        message = f"Database error during {operation} of {entity_type}"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"operation": operation, "entity_type": entity_type})
