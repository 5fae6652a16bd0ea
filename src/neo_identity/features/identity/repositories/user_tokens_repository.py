"""User authentication tokens repository."""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ..entities.user_token import UserToken
from ..utils.queries import (
    USER_TOKENS_DELETE_BY_USER,
    USER_TOKENS_GET_BY_USER,
    USER_TOKENS_GET_ONE,
    USER_TOKENS_INSERT,
)
from .base import AsyncPGIdentityRepository

logger = logging.getLogger(__name__)


class UserTokensRepository(AsyncPGIdentityRepository):
    """Tokens keyed by (user, login provider, name)."""

    entity_type = "UserToken"

    async def get_tokens(
        self,
        user_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> List[UserToken]:
        rows = await self._fetch(
            "get_tokens", USER_TOKENS_GET_BY_USER, user_id,
            cancellation=cancellation, entity_id=user_id
        )
        return self._map_all(rows, UserToken)

    async def find_token(
        self,
        user_id: UUID,
        login_provider: str,
        name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[UserToken]:
        """Single token lookup without loading the user's whole collection."""
        row = await self._fetchrow(
            "find_token", USER_TOKENS_GET_ONE, user_id, login_provider, name,
            cancellation=cancellation, entity_id=user_id
        )
        return self._map(row, UserToken) if row else None

    async def replace_for_user(
        self,
        connection: asyncpg.Connection,
        user_id: UUID,
        tokens: Iterable[UserToken],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Rewrite a user's tokens on the caller's connection and transaction."""
        await connection.execute(self._query(USER_TOKENS_DELETE_BY_USER), user_id, timeout=self._timeout(cancellation))
        rows = [(user_id, token.login_provider, token.name, token.value) for token in tokens]
        if rows:
            await connection.executemany(self._query(USER_TOKENS_INSERT), rows, timeout=self._timeout(cancellation))
        logger.debug(f"Wrote {len(rows)} tokens for user {user_id}")
