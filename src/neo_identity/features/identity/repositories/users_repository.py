"""Users repository.

Creates, updates and deletes identity_users rows. Create and update also
write every loaded sub-collection of the user (claims, logins, roles,
tokens) in the same transaction; unloaded collections are left untouched.
"""

import logging
from typing import List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ....core.exceptions import IdentityStoreError
from ....database.protocols import DatabaseConnectionFactory
from ..entities.claim import Claim
from ..entities.result import IdentityResult, concurrency_failure, duplicate_error
from ..entities.user import IdentityUser
from ..utils.error_handling import affected_rows, handle_identity_error
from ..utils.queries import (
    USER_CLAIMS_DELETE_BY_USER,
    USER_DELETE,
    USER_GET_BY_ID,
    USER_GET_BY_NORMALIZED_EMAIL,
    USER_GET_BY_NORMALIZED_NAME,
    USER_INSERT,
    USER_LIST_ALL,
    USER_LIST_FOR_CLAIM,
    USER_LIST_IN_ROLE,
    USER_LOGINS_DELETE_BY_USER,
    USER_ROLES_DELETE_BY_USER,
    USER_TOKENS_DELETE_BY_USER,
    USER_UPDATE,
)
from .base import AsyncPGIdentityRepository
from .user_claims_repository import UserClaimsRepository
from .user_logins_repository import UserLoginsRepository
from .user_roles_repository import UserRolesRepository
from .user_tokens_repository import UserTokensRepository

logger = logging.getLogger(__name__)


class UsersRepository(AsyncPGIdentityRepository):
    """Repository for identity_users and the user-owned collection tables."""

    entity_type = "User"

    def __init__(self, connection_factory: DatabaseConnectionFactory):
        super().__init__(connection_factory)
        self._claims = UserClaimsRepository(connection_factory)
        self._logins = UserLoginsRepository(connection_factory)
        self._roles = UserRolesRepository(connection_factory)
        self._tokens = UserTokensRepository(connection_factory)

    async def create(
        self,
        user: IdentityUser,
        cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Insert the user row and its loaded collections."""
        try:
            async with self._factory.transaction(cancellation) as connection:
                await connection.execute(
                    self._query(USER_INSERT), *user.column_values(), timeout=self._timeout(cancellation)
                )
                await self._write_collections(connection, user, cancellation)
        except IdentityStoreError:
            raise
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Duplicate user on create {user.id}: {getattr(e, 'constraint_name', '')}")
            return IdentityResult.failed(duplicate_error(self.entity_type, getattr(e, "constraint_name", "") or ""))
        except Exception as e:
            handle_identity_error("create", self.entity_type, user.id, e)

        logger.info(f"Created user {user.id}")
        return IdentityResult.success()

    async def update(
        self,
        user: IdentityUser,
        expected_concurrency_stamp: Optional[str],
        cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Update the user row guarded by the previously read concurrency stamp.

        Returns a ConcurrencyFailure result when no row matched the id and
        expected stamp; the loaded collections are only written when the row
        update succeeded.
        """
        try:
            async with self._factory.transaction(cancellation) as connection:
                status = await connection.execute(
                    self._query(USER_UPDATE),
                    *user.column_values(),
                    expected_concurrency_stamp,
                    timeout=self._timeout(cancellation)
                )
                if affected_rows(status) == 0:
                    logger.warning(f"Concurrency failure updating user {user.id}")
                    return IdentityResult.failed(concurrency_failure())
                await self._write_collections(connection, user, cancellation)
        except IdentityStoreError:
            raise
        except asyncpg.UniqueViolationError as e:
            logger.warning(f"Duplicate user on update {user.id}: {getattr(e, 'constraint_name', '')}")
            return IdentityResult.failed(duplicate_error(self.entity_type, getattr(e, "constraint_name", "") or ""))
        except Exception as e:
            handle_identity_error("update", self.entity_type, user.id, e)

        logger.info(f"Updated user {user.id}")
        return IdentityResult.success()

    async def delete(
        self,
        user: IdentityUser,
        cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Delete the user and every row it owns. Deleting a missing user succeeds."""
        try:
            async with self._factory.transaction(cancellation) as connection:
                for template in (
                    USER_CLAIMS_DELETE_BY_USER,
                    USER_LOGINS_DELETE_BY_USER,
                    USER_ROLES_DELETE_BY_USER,
                    USER_TOKENS_DELETE_BY_USER,
                    USER_DELETE,
                ):
                    await connection.execute(self._query(template), user.id, timeout=self._timeout(cancellation))
        except IdentityStoreError:
            raise
        except Exception as e:
            handle_identity_error("delete", self.entity_type, user.id, e)

        logger.info(f"Deleted user {user.id}")
        return IdentityResult.success()

    async def find_by_id(
        self,
        user_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        row = await self._fetchrow(
            "find_by_id", USER_GET_BY_ID, user_id,
            cancellation=cancellation, entity_id=user_id
        )
        return self._map(row, IdentityUser) if row else None

    async def find_by_name(
        self,
        normalized_user_name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        row = await self._fetchrow(
            "find_by_name", USER_GET_BY_NORMALIZED_NAME, normalized_user_name,
            cancellation=cancellation, entity_id=normalized_user_name
        )
        return self._map(row, IdentityUser) if row else None

    async def find_by_email(
        self,
        normalized_email: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        row = await self._fetchrow(
            "find_by_email", USER_GET_BY_NORMALIZED_EMAIL, normalized_email,
            cancellation=cancellation, entity_id=normalized_email
        )
        return self._map(row, IdentityUser) if row else None

    async def get_all(self, cancellation: Optional[CancellationToken] = None) -> List[IdentityUser]:
        rows = await self._fetch("get_all", USER_LIST_ALL, cancellation=cancellation)
        return self._map_all(rows, IdentityUser)

    async def get_users_for_claim(
        self,
        claim: Claim,
        cancellation: Optional[CancellationToken] = None
    ) -> List[IdentityUser]:
        rows = await self._fetch(
            "get_users_for_claim", USER_LIST_FOR_CLAIM, claim.type, claim.value,
            cancellation=cancellation, entity_id=str(claim)
        )
        return self._map_all(rows, IdentityUser)

    async def get_users_in_role(
        self,
        normalized_role_name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> List[IdentityUser]:
        rows = await self._fetch(
            "get_users_in_role", USER_LIST_IN_ROLE, normalized_role_name,
            cancellation=cancellation, entity_id=normalized_role_name
        )
        return self._map_all(rows, IdentityUser)

    async def _write_collections(
        self,
        connection: asyncpg.Connection,
        user: IdentityUser,
        cancellation: Optional[CancellationToken]
    ) -> None:
        if user.claims.is_loaded:
            await self._claims.replace_for_user(connection, user.id, user.claims.items, cancellation)
        if user.logins.is_loaded:
            await self._logins.replace_for_user(connection, user.id, user.logins.items, cancellation)
        if user.roles.is_loaded:
            await self._roles.replace_for_user(connection, user.id, user.roles.items, cancellation)
        if user.tokens.is_loaded:
            await self._tokens.replace_for_user(connection, user.id, user.tokens.items, cancellation)
