"""User claims repository."""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ..entities.claim import Claim, UserClaim
from ..utils.queries import (
    USER_CLAIMS_DELETE_BY_USER,
    USER_CLAIMS_GET_BY_USER,
    USER_CLAIMS_INSERT,
)
from .base import AsyncPGIdentityRepository

logger = logging.getLogger(__name__)


class UserClaimsRepository(AsyncPGIdentityRepository):
    """Reads and rewrites the claims owned by a user."""

    entity_type = "UserClaim"

    async def get_claims(
        self,
        user_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> List[Claim]:
        """All claims of a user; empty list when there are none."""
        rows = await self._fetch(
            "get_claims", USER_CLAIMS_GET_BY_USER, user_id,
            cancellation=cancellation, entity_id=user_id
        )
        return [record.to_claim() for record in self._map_all(rows, UserClaim)]

    async def replace_for_user(
        self,
        connection: asyncpg.Connection,
        user_id: UUID,
        claims: Iterable[Claim],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Rewrite a user's claims on the caller's connection and transaction."""
        await connection.execute(self._query(USER_CLAIMS_DELETE_BY_USER), user_id, timeout=self._timeout(cancellation))
        records = [UserClaim.from_claim(user_id, claim) for claim in claims]
        if records:
            await connection.executemany(
                self._query(USER_CLAIMS_INSERT),
                [(record.id, record.user_id, record.claim_type, record.claim_value) for record in records],
                timeout=self._timeout(cancellation)
            )
        logger.debug(f"Wrote {len(records)} claims for user {user_id}")
