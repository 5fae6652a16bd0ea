"""User role membership repository."""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ..entities.user_role import UserRole
from ..utils.queries import (
    USER_ROLES_DELETE_BY_USER,
    USER_ROLES_GET_BY_USER,
    USER_ROLES_INSERT,
)
from .base import AsyncPGIdentityRepository

logger = logging.getLogger(__name__)


class UserRolesRepository(AsyncPGIdentityRepository):
    """Role memberships, joined with the role for its names."""

    entity_type = "UserRole"

    async def get_roles(
        self,
        user_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> List[UserRole]:
        rows = await self._fetch(
            "get_roles", USER_ROLES_GET_BY_USER, user_id,
            cancellation=cancellation, entity_id=user_id
        )
        return self._map_all(rows, UserRole)

    async def replace_for_user(
        self,
        connection: asyncpg.Connection,
        user_id: UUID,
        roles: Iterable[UserRole],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Rewrite a user's memberships on the caller's connection and transaction."""
        await connection.execute(self._query(USER_ROLES_DELETE_BY_USER), user_id, timeout=self._timeout(cancellation))
        role_ids = list(dict.fromkeys(role.role_id for role in roles))
        if role_ids:
            await connection.executemany(
                self._query(USER_ROLES_INSERT),
                [(user_id, role_id) for role_id in role_ids],
                timeout=self._timeout(cancellation)
            )
        logger.debug(f"Wrote {len(role_ids)} role memberships for user {user_id}")
