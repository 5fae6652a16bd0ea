"""User store facade.

UserStore implements the core user operations itself and exposes every other
identity capability as an attribute:

    store = UserStore(connection_factory)
    user = await store.find_by_name("ALICE")
    await store.claims.add_claims(user, [Claim("role", "admin")])
    await store.lockout.increment_access_failed_count(user)
    result = await store.update(user)
"""

import logging
from typing import List, Optional

from ....core.cancellation import CancellationToken
from ....database.protocols import DatabaseConnectionFactory
from ....utils.guards import throw_if_none
from ....utils.uuid import new_stamp, parse_uuid
from ..entities.result import IdentityResult
from ..entities.user import IdentityUser
from ..repositories.roles_repository import RolesRepository
from ..repositories.user_claims_repository import UserClaimsRepository
from ..repositories.user_logins_repository import UserLoginsRepository
from ..repositories.user_roles_repository import UserRolesRepository
from ..repositories.user_tokens_repository import UserTokensRepository
from ..repositories.users_repository import UsersRepository
from .base import StoreCapability
from .user_collections import (
    UserClaimCapability,
    UserLoginCapability,
    UserRoleCapability,
    UserTokenCapability,
)
from .user_fields import (
    UserAuthenticatorKeyCapability,
    UserEmailCapability,
    UserLockoutCapability,
    UserPasswordCapability,
    UserPhoneNumberCapability,
    UserSecurityStampCapability,
    UserTwoFactorCapability,
)

logger = logging.getLogger(__name__)


class UserStore(StoreCapability):
    """Persistence for IdentityUser and its claims, logins, roles and tokens."""

    def __init__(self, connection_factory: DatabaseConnectionFactory):
        throw_if_none(connection_factory, "connection_factory")
        self._users = UsersRepository(connection_factory)
        roles = RolesRepository(connection_factory)

        self.emails = UserEmailCapability(self._users)
        self.passwords = UserPasswordCapability()
        self.phone_numbers = UserPhoneNumberCapability()
        self.two_factor = UserTwoFactorCapability()
        self.security_stamps = UserSecurityStampCapability()
        self.lockout = UserLockoutCapability()
        self.claims = UserClaimCapability(self._users, UserClaimsRepository(connection_factory))
        self.logins = UserLoginCapability(UserLoginsRepository(connection_factory))
        self.roles = UserRoleCapability(self._users, roles, UserRolesRepository(connection_factory))
        self.tokens = UserTokenCapability(UserTokensRepository(connection_factory))
        self.authenticator_keys = UserAuthenticatorKeyCapability()

    @property
    def users_repository(self) -> UsersRepository:
        return self._users

    async def create(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        """Insert the user and any collections already loaded on it."""
        self._guard("create_user", cancellation, user=user)
        return await self._users.create(user, cancellation)

    async def update(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        """Persist the user and its loaded collections with a fresh concurrency stamp.

        The stamp the user was read with guards the row update. If the update
        fails or raises, that stamp is put back on the entity so the caller
        can reload or retry with a consistent object.
        """
        self._guard("update_user", cancellation, user=user)
        expected_stamp = user.concurrency_stamp
        user.concurrency_stamp = new_stamp()
        try:
            result = await self._users.update(user, expected_stamp, cancellation)
        except Exception:
            user.concurrency_stamp = expected_stamp
            raise
        if not result.succeeded:
            user.concurrency_stamp = expected_stamp
        return result

    async def delete(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        self._guard("delete_user", cancellation, user=user)
        return await self._users.delete(user, cancellation)

    async def find_by_id(
        self, user_id: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        """Find a user by id; a malformed id finds nothing."""
        self._guard("find_user_by_id", cancellation, user_id=user_id)
        parsed = parse_uuid(user_id)
        if parsed is None:
            logger.debug(f"Malformed user id {user_id!r}")
            return None
        return await self._users.find_by_id(parsed, cancellation)

    async def find_by_name(
        self, normalized_user_name: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        self._guard("find_user_by_name", cancellation, normalized_user_name=normalized_user_name)
        return await self._users.find_by_name(normalized_user_name, cancellation)

    async def list_users(self, cancellation: Optional[CancellationToken] = None) -> List[IdentityUser]:
        self._guard("list_users", cancellation)
        return await self._users.get_all(cancellation)

    async def get_user_id(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> str:
        self._guard("get_user_id", cancellation, user=user)
        return str(user.id)

    async def get_user_name(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        self._guard("get_user_name", cancellation, user=user)
        return user.user_name

    async def set_user_name(
        self, user: IdentityUser, user_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_user_name", cancellation, user=user)
        user.user_name = user_name

    async def get_normalized_user_name(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        self._guard("get_normalized_user_name", cancellation, user=user)
        return user.normalized_user_name

    async def set_normalized_user_name(
        self, user: IdentityUser, normalized_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_normalized_user_name", cancellation, user=user)
        user.normalized_user_name = normalized_name
