"""Role claims repository."""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

import asyncpg

from ....core.cancellation import CancellationToken
from ..entities.claim import Claim, RoleClaim
from ..utils.queries import (
    ROLE_CLAIMS_DELETE_BY_ROLE,
    ROLE_CLAIMS_GET_BY_ROLE,
    ROLE_CLAIMS_INSERT,
)
from .base import AsyncPGIdentityRepository

logger = logging.getLogger(__name__)


class RoleClaimsRepository(AsyncPGIdentityRepository):
    """Reads and rewrites the claims owned by a role."""

    entity_type = "RoleClaim"

    async def get_claims(
        self,
        role_id: UUID,
        cancellation: Optional[CancellationToken] = None
    ) -> List[Claim]:
        rows = await self._fetch(
            "get_claims", ROLE_CLAIMS_GET_BY_ROLE, role_id,
            cancellation=cancellation, entity_id=role_id
        )
        return [record.to_claim() for record in self._map_all(rows, RoleClaim)]

    async def replace_for_role(
        self,
        connection: asyncpg.Connection,
        role_id: UUID,
        claims: Iterable[Claim],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Rewrite a role's claims on the caller's connection and transaction."""
        await connection.execute(self._query(ROLE_CLAIMS_DELETE_BY_ROLE), role_id, timeout=self._timeout(cancellation))
        records = [RoleClaim.from_claim(role_id, claim) for claim in claims]
        if records:
            await connection.executemany(
                self._query(ROLE_CLAIMS_INSERT),
                [(record.id, record.role_id, record.claim_type, record.claim_value) for record in records],
                timeout=self._timeout(cancellation)
            )
        logger.debug(f"Wrote {len(records)} claims for role {role_id}")
