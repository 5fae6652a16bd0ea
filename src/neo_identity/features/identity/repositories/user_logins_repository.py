"""User logins repository."""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ..entities.login import UserLogin, UserLoginInfo
from ..entities.user import IdentityUser
from ..utils.queries import (
    USER_GET_BY_LOGIN,
    USER_LOGINS_DELETE_BY_USER,
    USER_LOGINS_GET_BY_USER,
    USER_LOGINS_INSERT,
)
from .base import AsyncPGIdentityRepository

logger = logging.getLogger(__name__)


class UserLoginsRepository(AsyncPGIdentityRepository):
    """External logins and the login-based user lookup."""

    entity_type = "UserLogin"

    async def get_logins(
        self,
        user_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> List[UserLoginInfo]:
        rows = await self._fetch(
            "get_logins", USER_LOGINS_GET_BY_USER, user_id,
            cancellation=cancellation, entity_id=user_id
        )
        return [record.to_login_info() for record in self._map_all(rows, UserLogin)]

    async def find_user_by_login(
        self,
        login_provider: str,
        provider_key: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        """User owning the (provider, key) pair, or None."""
        row = await self._fetchrow(
            "find_user_by_login", USER_GET_BY_LOGIN, login_provider, provider_key,
            cancellation=cancellation, entity_id=f"{login_provider}:{provider_key}"
        )
        return self._map(row, IdentityUser) if row else None

    async def replace_for_user(
        self,
        connection: asyncpg.Connection,
        user_id: UUID,
        logins: Iterable[UserLoginInfo],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Rewrite a user's logins on the caller's connection and transaction."""
        await connection.execute(self._query(USER_LOGINS_DELETE_BY_USER), user_id, timeout=self._timeout(cancellation))
        rows = [
            (login.login_provider, login.provider_key, login.provider_display_name, user_id)
            for login in logins
        ]
        if rows:
            await connection.executemany(self._query(USER_LOGINS_INSERT), rows, timeout=self._timeout(cancellation))
        logger.debug(f"Wrote {len(rows)} logins for user {user_id}")
