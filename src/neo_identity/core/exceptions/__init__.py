"""Exception hierarchy for neo-identity."""

from .base import IdentityStoreError, create_error_response
from .database import (
    DatabaseError,
    DatabaseConfigurationError,
    ConnectionError,
    ConnectionUnavailableError,
    ConnectionTimeoutError,
    QueryError,
)
from .domain import (
    InvalidArgumentError,
    OperationCancelledError,
    OperationNotSupportedError,
    CollectionNotLoadedError,
)

__all__ = [
    "IdentityStoreError",
    "create_error_response",
    # Database
    "DatabaseError",
    "DatabaseConfigurationError",
    "ConnectionError",
    "ConnectionUnavailableError",
    "ConnectionTimeoutError",
    "QueryError",
    # Store boundary
    "InvalidArgumentError",
    "OperationCancelledError",
    "OperationNotSupportedError",
    "CollectionNotLoadedError",
]
