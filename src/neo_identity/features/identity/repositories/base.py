"""Shared plumbing for the asyncpg identity repositories.

Every public repository method acquires exactly one connection from the
factory, runs its statement(s) and releases the connection before returning.
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import asyncpg

from ....core.cancellation import CancellationToken, bounded_timeout
from ....core.exceptions import IdentityStoreError
from ....database.protocols import DatabaseConnectionFactory
from ....utils.guards import throw_if_none
from ..utils.error_handling import handle_identity_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncPGIdentityRepository:
    """Base class holding the connection factory and query helpers."""

    entity_type = "Entity"

    def __init__(self, connection_factory: DatabaseConnectionFactory):
        """Initialize with the connection factory."""
        self._factory = throw_if_none(connection_factory, "connection_factory")

    @property
    def connection_factory(self) -> DatabaseConnectionFactory:
        return self._factory

    def _query(self, template: str) -> str:
        return template.format(schema=self._factory.schema_name)

    def _timeout(self, cancellation: Optional[CancellationToken]) -> Optional[float]:
        """Statement timeout from the time the token has left right now."""
        return bounded_timeout(cancellation, self._factory.command_timeout)

    async def _fetch(
        self,
        operation: str,
        template: str,
        *args: Any,
        cancellation: Optional[CancellationToken] = None,
        entity_id: Optional[Any] = None
    ) -> List[asyncpg.Record]:
        """Run a query on a fresh connection and return all rows."""
        try:
            async with self._factory.connection(cancellation) as connection:
                rows = await connection.fetch(
                    self._query(template), *args, timeout=self._timeout(cancellation)
                )
        except IdentityStoreError:
            raise
        except Exception as e:
            handle_identity_error(operation, self.entity_type, entity_id, e)
        return list(rows or [])

    async def _fetchrow(
        self,
        operation: str,
        template: str,
        *args: Any,
        cancellation: Optional[CancellationToken] = None,
        entity_id: Optional[Any] = None
    ) -> Optional[asyncpg.Record]:
        """Run a query on a fresh connection and return the first row, if any."""
        try:
            async with self._factory.connection(cancellation) as connection:
                return await connection.fetchrow(
                    self._query(template), *args, timeout=self._timeout(cancellation)
                )
        except IdentityStoreError:
            raise
        except Exception as e:
            handle_identity_error(operation, self.entity_type, entity_id, e)

    def _map(self, record: Any, entity_type: Type[T]) -> T:
        return self._factory.map_record(record, entity_type)

    def _map_all(self, records: List[Any], entity_type: Type[T]) -> List[T]:
        return [self._map(record, entity_type) for record in records]
