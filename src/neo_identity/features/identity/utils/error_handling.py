"""Error handling for identity repositories.

Failures are logged once with their context and re-raised inside the
neo-identity exception hierarchy.
"""

import logging
from typing import Any, NoReturn, Optional

import asyncpg

from ....core.exceptions import (
    ConnectionUnavailableError,
    IdentityStoreError,
    QueryError,
)


logger = logging.getLogger(__name__)


def handle_identity_error(
    operation: str,
    entity_type: str,
    entity_id: Optional[Any] = None,
    error: Optional[Exception] = None,
    context: Optional[dict] = None
) -> NoReturn:
    """Log a repository failure and raise the matching neo-identity exception.

    Args:
        operation: The operation being performed (e.g. 'create', 'find_by_id')
        entity_type: Type of entity (e.g. 'User', 'RoleClaim')
        entity_id: ID of the entity involved (optional)
        error: Original exception (optional)
        context: Additional context for logging (optional)

    Raises:
        IdentityStoreError subclass matching the error
    """
    context = context or {}
    entity_id_str = str(entity_id) if entity_id is not None else "unknown"

    logger.error(
        f"Identity {operation} failed for {entity_type} {entity_id_str}",
        extra={
            "operation": operation,
            "entity_type": entity_type,
            "entity_id": entity_id_str,
            "error_type": type(error).__name__ if error else "unknown",
            "context": context
        },
        exc_info=error
    )

    if isinstance(error, IdentityStoreError):
        raise error
    if isinstance(error, asyncpg.PostgresError):
        raise QueryError(operation, entity_type, str(error)) from error
    if isinstance(error, (OSError, asyncpg.InterfaceError)):
        raise ConnectionUnavailableError(entity_type, str(error)) from error
    if error is not None:
        raise QueryError(operation, entity_type, f"unexpected error: {error}") from error
    raise QueryError(operation, entity_type, "unknown error")


def affected_rows(status: Optional[str]) -> int:
    """Row count from an asyncpg command status such as 'UPDATE 1'."""
    if not status:
        return 0
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0
