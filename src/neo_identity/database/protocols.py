"""Database connection protocols for neo-identity."""

from typing import Any, AsyncContextManager, Optional, Protocol, runtime_checkable

import asyncpg

from ..core.cancellation import CancellationToken


@runtime_checkable
class DatabaseConnectionFactory(Protocol):
    """Protocol for opening one database connection per operation."""

    @property
    def schema_name(self) -> str:
        """Schema that holds the identity tables."""
        ...

    @property
    def command_timeout(self) -> Optional[float]:
        """Default per-statement timeout in seconds."""
        ...

    async def create_connection(
        self,
        cancellation: Optional[CancellationToken] = None
    ) -> asyncpg.Connection:
        """Open a new connection; the caller owns closing it."""
        ...

    def connection(
        self,
        cancellation: Optional[CancellationToken] = None
    ) -> AsyncContextManager[asyncpg.Connection]:
        """Open a connection for the duration of a context block."""
        ...

    def transaction(
        self,
        cancellation: Optional[CancellationToken] = None
    ) -> AsyncContextManager[asyncpg.Connection]:
        """Open a connection with a transaction for the duration of a context block."""
        ...

    def map_record(self, record: Any, entity_type: type) -> Any:
        """Map a result row onto an entity dataclass."""
        ...
