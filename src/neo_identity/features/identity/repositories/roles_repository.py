"""Roles repository."""

import logging
from typing import List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ....core.exceptions import IdentityStoreError
from ....database.protocols import DatabaseConnectionFactory
from ..entities.result import IdentityResult, concurrency_failure, duplicate_error
from ..entities.role import IdentityRole
from ..utils.error_handling import affected_rows, handle_identity_error
from ..utils.queries import (
    ROLE_CLAIMS_DELETE_BY_ROLE,
    ROLE_DELETE,
    ROLE_GET_BY_ID,
    ROLE_GET_BY_NORMALIZED_NAME,
    ROLE_INSERT,
    ROLE_LIST_ALL,
    ROLE_UPDATE,
    USER_ROLES_DELETE_BY_ROLE,
)
from .base import AsyncPGIdentityRepository
from .role_claims_repository import RoleClaimsRepository

logger = logging.getLogger(__name__)


class RolesRepository(AsyncPGIdentityRepository):
    """Repository for identity_roles; writes loaded role claims alongside."""

    entity_type = "Role"

    def __init__(self, connection_factory: DatabaseConnectionFactory):
        super().__init__(connection_factory)
        self._claims = RoleClaimsRepository(connection_factory)

    async def create(
        self,
        role: IdentityRole,
        cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        try:
            async with self._factory.transaction(cancellation) as connection:
                await connection.execute(
                    self._query(ROLE_INSERT),
                    role.id, role.name, role.normalized_name, role.concurrency_stamp,
                    timeout=self._timeout(cancellation)
                )
                if role.claims.is_loaded:
                    await self._claims.replace_for_role(connection, role.id, role.claims.items, cancellation)
        except IdentityStoreError:
            raise
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Duplicate role on create {role.normalized_name}")
            return IdentityResult.failed(duplicate_error(self.entity_type, getattr(e, "constraint_name", "") or ""))
        except Exception as e:
            handle_identity_error("create", self.entity_type, role.id, e)

        logger.info(f"Created role {role.name} ({role.id})")
        return IdentityResult.success()

    async def update(
        self,
        role: IdentityRole,
        expected_concurrency_stamp: Optional[str],
        cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        try:
            async with self._factory.transaction(cancellation) as connection:
                status = await connection.execute(
                    self._query(ROLE_UPDATE),
                    role.id, role.name, role.normalized_name, role.concurrency_stamp,
                    expected_concurrency_stamp,
                    timeout=self._timeout(cancellation)
                )
                if affected_rows(status) == 0:
                    logger.warning(f"Concurrency failure updating role {role.id}")
                    return IdentityResult.failed(concurrency_failure())
                if role.claims.is_loaded:
                    await self._claims.replace_for_role(connection, role.id, role.claims.items, cancellation)
        except IdentityStoreError:
            raise
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Duplicate role on update {role.normalized_name}")
            return IdentityResult.failed(duplicate_error(self.entity_type, getattr(e, "constraint_name", "") or ""))
        except Exception as e:
            handle_identity_error("update", self.entity_type, role.id, e)

        logger.info(f"Updated role {role.id}")
        return IdentityResult.success()

    async def delete(
        self,
        role: IdentityRole,
        cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Delete the role with its claims and memberships."""
        try:
            async with self._factory.transaction(cancellation) as connection:
                for template in (ROLE_CLAIMS_DELETE_BY_ROLE, USER_ROLES_DELETE_BY_ROLE, ROLE_DELETE):
                    await connection.execute(self._query(template), role.id, timeout=self._timeout(cancellation))
        except IdentityStoreError:
            raise
        except Exception as e:
            handle_identity_error("delete", self.entity_type, role.id, e)

        logger.info(f"Deleted role {role.id}")
        return IdentityResult.success()

    async def find_by_id(
        self,
        role_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityRole]:
        row = await self._fetchrow(
            "find_by_id", ROLE_GET_BY_ID, role_id,
            cancellation=cancellation, entity_id=role_id
        )
        return self._map(row, IdentityRole) if row else None

    async def find_by_name(
        self,
        normalized_role_name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityRole]:
        row = await self._fetchrow(
            "find_by_name", ROLE_GET_BY_NORMALIZED_NAME, normalized_role_name,
            cancellation=cancellation, entity_id=normalized_role_name
        )
        return self._map(row, IdentityRole) if row else None

    async def get_all(self, cancellation: Optional[CancellationToken] = None) -> List[IdentityRole]:
        rows = await self._fetch("get_all", ROLE_LIST_ALL, cancellation=cancellation)
        return self._map_all(rows, IdentityRole)
