"""Role store facade and its claim capability."""

import logging
from typing import List, Optional

from ....core.cancellation import CancellationToken
from ....core.exceptions import InvalidArgumentError
from ....database.protocols import DatabaseConnectionFactory
from ....utils.guards import throw_if_none
from ....utils.uuid import new_stamp, parse_uuid
from ..entities.claim import Claim
from ..entities.result import IdentityResult
from ..entities.role import IdentityRole
from ..repositories.role_claims_repository import RoleClaimsRepository
from ..repositories.roles_repository import RolesRepository
from .base import StoreCapability

logger = logging.getLogger(__name__)


class RoleClaimCapability(StoreCapability):
    """Claims owned by a role, persisted on RoleStore.update."""

    def __init__(self, role_claims: RoleClaimsRepository):
        self._role_claims = role_claims

    async def load(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> List[Claim]:
        self._guard("load_role_claims", cancellation, role=role)
        return await self._ensure_loaded(
            role.claims, lambda: self._role_claims.get_claims(role.id, cancellation)
        )

    async def get_claims(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> List[Claim]:
        claims = await self.load(role, cancellation)
        return list(claims)

    async def add_claim(
        self, role: IdentityRole, claim: Claim, cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Add a claim; an existing claim of the same type is replaced."""
        self._guard("add_role_claim", cancellation, role=role, claim=claim)
        await self.load(role, cancellation)
        role.claims.remove_where(lambda existing: existing.type == claim.type)
        role.claims.append(claim)

    async def remove_claim(
        self, role: IdentityRole, claim: Claim, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("remove_role_claim", cancellation, role=role, claim=claim)
        await self.load(role, cancellation)
        role.claims.remove_where(lambda existing: existing == claim)


class RoleStore(StoreCapability):
    """Persistence for IdentityRole."""

    def __init__(self, connection_factory: DatabaseConnectionFactory):
        throw_if_none(connection_factory, "connection_factory")
        self._roles = RolesRepository(connection_factory)
        self.claims = RoleClaimCapability(RoleClaimsRepository(connection_factory))

    @property
    def roles_repository(self) -> RolesRepository:
        return self._roles

    async def create(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        self._guard("create_role", cancellation, role=role)
        return await self._roles.create(role, cancellation)

    async def update(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        """Persist the role with a fresh concurrency stamp; restores the old one on failure."""
        self._guard("update_role", cancellation, role=role)
        expected_stamp = role.concurrency_stamp
        role.concurrency_stamp = new_stamp()
        try:
            result = await self._roles.update(role, expected_stamp, cancellation)
        except Exception:
            role.concurrency_stamp = expected_stamp
            raise
        if not result.succeeded:
            role.concurrency_stamp = expected_stamp
        return result

    async def delete(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        self._guard("delete_role", cancellation, role=role)
        return await self._roles.delete(role, cancellation)

    async def find_by_id(
        self, role_id: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityRole]:
        """Find a role by id; a malformed id is an InvalidArgumentError."""
        self._guard("find_role_by_id", cancellation, role_id=role_id)
        parsed = parse_uuid(role_id)
        if parsed is None:
            raise InvalidArgumentError("role_id", f"not a valid UUID: {role_id!r}")
        return await self._roles.find_by_id(parsed, cancellation)

    async def find_by_name(
        self, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityRole]:
        self._guard("find_role_by_name", cancellation, normalized_role_name=normalized_role_name)
        return await self._roles.find_by_name(normalized_role_name, cancellation)

    async def list_roles(self, cancellation: Optional[CancellationToken] = None) -> List[IdentityRole]:
        self._guard("list_roles", cancellation)
        return await self._roles.get_all(cancellation)

    async def get_role_id(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> str:
        self._guard("get_role_id", cancellation, role=role)
        return str(role.id)

    async def get_role_name(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        self._guard("get_role_name", cancellation, role=role)
        return role.name

    async def set_role_name(
        self, role: IdentityRole, role_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_role_name", cancellation, role=role)
        role.name = role_name

    async def get_normalized_role_name(
        self, role: IdentityRole, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self._guard("get_normalized_role_name", cancellation, role=role)
        return role.normalized_name

    async def set_normalized_role_name(
        self, role: IdentityRole, normalized_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_normalized_role_name", cancellation, role=role)
        role.normalized_name = normalized_name
