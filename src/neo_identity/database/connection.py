"""
Per-operation PostgreSQL connections for neo-identity using asyncpg.

Each repository call opens exactly one connection through the factory and
closes it before returning. Pooling, if any, belongs to the deployment.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, Type, TypeVar

import asyncpg

from ..config.settings import SCHEMA_NAME_PATTERN, IdentityStoreSettings
from ..core.cancellation import CancellationToken, bounded_timeout, ensure_not_cancelled
from ..core.exceptions import (
    ConnectionTimeoutError,
    ConnectionUnavailableError,
    DatabaseConfigurationError,
)
from .utils import ColumnNameConvention, map_record, normalize_dsn, snake_case_columns

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PostgresConnectionFactory:
    """Opens configured asyncpg connections on demand."""

    def __init__(
        self,
        connection_string: Optional[str],
        *,
        schema_name: str = "public",
        connect_timeout: float = 10.0,
        command_timeout: Optional[float] = None,
        application_name: str = "neo-identity",
        column_convention: ColumnNameConvention = snake_case_columns,
    ):
        """Initialize PostgresConnectionFactory.

        Args:
            connection_string: PostgreSQL DSN
            schema_name: Schema holding the identity tables
            connect_timeout: Upper bound in seconds for opening a connection
            command_timeout: Default per-statement timeout in seconds
            application_name: Reported to the server as application_name
            column_convention: Maps column names onto entity field names

        Raises:
            DatabaseConfigurationError: If the connection string or schema name is invalid
        """
        if connection_string is None or not connection_string.strip():
            raise DatabaseConfigurationError("connection_string is required")
        if not SCHEMA_NAME_PATTERN.match(schema_name or ""):
            raise DatabaseConfigurationError(f"Invalid schema name: {schema_name}")

        self._dsn = normalize_dsn(connection_string.strip())
        self._schema_name = schema_name
        self._connect_timeout = connect_timeout
        self._command_timeout = command_timeout
        self._application_name = application_name
        self._column_convention = column_convention

    @classmethod
    def from_settings(cls, settings: IdentityStoreSettings) -> "PostgresConnectionFactory":
        """Create a factory from IdentityStoreSettings."""
        return cls(
            settings.require_connection_string(),
            schema_name=settings.schema_name,
            connect_timeout=settings.connect_timeout,
            command_timeout=settings.command_timeout,
            application_name=settings.application_name,
        )

    @property
    def schema_name(self) -> str:
        return self._schema_name

    @property
    def command_timeout(self) -> Optional[float]:
        return self._command_timeout

    async def create_connection(
        self,
        cancellation: Optional[CancellationToken] = None
    ) -> asyncpg.Connection:
        """Open one physical connection.

        Raises:
            OperationCancelledError: If the token is already cancelled
            ConnectionTimeoutError: If the connect attempt exceeds its bound
            ConnectionUnavailableError: If the server cannot be reached
        """
        ensure_not_cancelled(cancellation, "create_connection")
        timeout = bounded_timeout(cancellation, self._connect_timeout)

        try:
            connection = await asyncio.wait_for(
                asyncpg.connect(
                    self._dsn,
                    command_timeout=self._command_timeout,
                    server_settings={'application_name': self._application_name},
                ),
                timeout=timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out opening connection for {self._application_name} after {timeout}s")
            raise ConnectionTimeoutError(self._application_name, timeout) from e
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error(f"Failed to open connection for {self._application_name}: {e}")
            raise ConnectionUnavailableError(self._application_name, str(e)) from e

        logger.debug("Opened identity store connection")
        return connection

    @asynccontextmanager
    async def connection(self, cancellation: Optional[CancellationToken] = None):
        """Acquire a connection for one operation and always close it."""
        connection = await self.create_connection(cancellation)
        try:
            yield connection
        finally:
            await connection.close()
            logger.debug("Closed identity store connection")

    @asynccontextmanager
    async def transaction(self, cancellation: Optional[CancellationToken] = None):
        """Create a transaction context on a fresh connection."""
        async with self.connection(cancellation) as connection:
            async with connection.transaction():
                yield connection

    def map_record(self, record: Any, entity_type: Type[T]) -> T:
        """Map a row onto an entity using the configured column convention."""
        return map_record(record, entity_type, self._column_convention)

    def __repr__(self) -> str:
        return f"PostgresConnectionFactory(schema_name={self._schema_name!r})"
