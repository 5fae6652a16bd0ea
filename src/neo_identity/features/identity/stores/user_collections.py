"""Collection capabilities of the user store.

Each capability owns one of the user's LazyCollections. Its load step fetches
the rows once per entity lifetime; every other operation loads first and then
works on the in-memory list. Changes reach storage on UserStore.update.
"""

import logging
from typing import Iterable, List, Optional

from ....core.cancellation import CancellationToken
from ..entities.claim import Claim
from ..entities.login import UserLoginInfo
from ..entities.user import IdentityUser
from ..entities.user_role import UserRole
from ..entities.user_token import UserToken
from ..repositories.roles_repository import RolesRepository
from ..repositories.user_claims_repository import UserClaimsRepository
from ..repositories.user_logins_repository import UserLoginsRepository
from ..repositories.user_roles_repository import UserRolesRepository
from ..repositories.user_tokens_repository import UserTokensRepository
from ..repositories.users_repository import UsersRepository
from .base import StoreCapability

logger = logging.getLogger(__name__)


class UserClaimCapability(StoreCapability):
    """Claims owned by a user, unique by claim type once added."""

    def __init__(self, users: UsersRepository, user_claims: UserClaimsRepository):
        self._users = users
        self._user_claims = user_claims

    async def load(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[Claim]:
        self._guard("load_claims", cancellation, user=user)
        return await self._ensure_loaded(
            user.claims, lambda: self._user_claims.get_claims(user.id, cancellation)
        )

    async def get_claims(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[Claim]:
        claims = await self.load(user, cancellation)
        return list(claims)

    async def add_claims(
        self, user: IdentityUser, claims: Iterable[Claim], cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Add claims; an existing claim of the same type is replaced."""
        self._guard("add_claims", cancellation, user=user, claims=claims)
        await self.load(user, cancellation)
        for claim in claims:
            user.claims.remove_where(lambda existing: existing.type == claim.type)
            user.claims.append(claim)

    async def replace_claim(
        self,
        user: IdentityUser,
        claim: Claim,
        new_claim: Claim,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Swap claim for new_claim at the same position, or append new_claim."""
        self._guard("replace_claim", cancellation, user=user, claim=claim, new_claim=new_claim)
        await self.load(user, cancellation)
        index = user.claims.index_of(lambda existing: existing == claim)
        if index >= 0:
            user.claims.replace_at(index, new_claim)
        else:
            user.claims.append(new_claim)

    async def remove_claims(
        self, user: IdentityUser, claims: Iterable[Claim], cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("remove_claims", cancellation, user=user, claims=claims)
        await self.load(user, cancellation)
        for claim in claims:
            user.claims.remove_where(lambda existing: existing == claim)

    async def get_users_for_claim(
        self, claim: Claim, cancellation: Optional[CancellationToken] = None
    ) -> List[IdentityUser]:
        self._guard("get_users_for_claim", cancellation, claim=claim)
        return await self._users.get_users_for_claim(claim, cancellation)


class UserLoginCapability(StoreCapability):
    """External logins, unique by (provider, provider key)."""

    def __init__(self, user_logins: UserLoginsRepository):
        self._user_logins = user_logins

    async def load(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> List[UserLoginInfo]:
        self._guard("load_logins", cancellation, user=user)
        return await self._ensure_loaded(
            user.logins, lambda: self._user_logins.get_logins(user.id, cancellation)
        )

    async def get_logins(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> List[UserLoginInfo]:
        logins = await self.load(user, cancellation)
        return list(logins)

    async def add_login(
        self, user: IdentityUser, login: UserLoginInfo, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("add_login", cancellation, user=user, login=login)
        await self.load(user, cancellation)
        if not user.logins.any(lambda existing: existing.matches(login.login_provider, login.provider_key)):
            user.logins.append(login)

    async def remove_login(
        self,
        user: IdentityUser,
        login_provider: str,
        provider_key: str,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard(
            "remove_login", cancellation,
            user=user, login_provider=login_provider, provider_key=provider_key
        )
        await self.load(user, cancellation)
        user.logins.remove_where(lambda existing: existing.matches(login_provider, provider_key))

    async def find_by_login(
        self, login_provider: str, provider_key: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        self._guard("find_by_login", cancellation, login_provider=login_provider, provider_key=provider_key)
        return await self._user_logins.find_user_by_login(login_provider, provider_key, cancellation)


class UserRoleCapability(StoreCapability):
    """Role memberships, matched by normalized role name."""

    def __init__(
        self,
        users: UsersRepository,
        roles: RolesRepository,
        user_roles: UserRolesRepository
    ):
        self._users = users
        self._roles = roles
        self._user_roles = user_roles

    async def load(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[UserRole]:
        self._guard("load_roles", cancellation, user=user)
        return await self._ensure_loaded(
            user.roles, lambda: self._user_roles.get_roles(user.id, cancellation)
        )

    async def get_roles(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[str]:
        """Names of the roles the user belongs to."""
        memberships = await self.load(user, cancellation)
        return [membership.role_name for membership in memberships if membership.role_name is not None]

    async def is_in_role(
        self, user: IdentityUser, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        self._guard("is_in_role", cancellation, user=user, normalized_role_name=normalized_role_name)
        await self.load(user, cancellation)
        return user.roles.any(lambda membership: membership.normalized_role_name == normalized_role_name)

    async def add_to_role(
        self, user: IdentityUser, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Add a membership; unknown roles and existing memberships are ignored."""
        self._guard("add_to_role", cancellation, user=user, normalized_role_name=normalized_role_name)
        await self.load(user, cancellation)
        if user.roles.any(lambda membership: membership.normalized_role_name == normalized_role_name):
            return

        role = await self._roles.find_by_name(normalized_role_name, cancellation)
        if role is None:
            logger.debug(f"Role {normalized_role_name} not found, membership not added for user {user.id}")
            return
        user.roles.append(UserRole(role.id, role.name, role.normalized_name))

    async def remove_from_role(
        self, user: IdentityUser, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("remove_from_role", cancellation, user=user, normalized_role_name=normalized_role_name)
        await self.load(user, cancellation)
        user.roles.remove_where(lambda membership: membership.normalized_role_name == normalized_role_name)

    async def get_users_in_role(
        self, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> List[IdentityUser]:
        self._guard("get_users_in_role", cancellation, normalized_role_name=normalized_role_name)
        return await self._users.get_users_in_role(normalized_role_name, cancellation)


class UserTokenCapability(StoreCapability):
    """Authentication tokens keyed by (login provider, name)."""

    def __init__(self, user_tokens: UserTokensRepository):
        self._user_tokens = user_tokens

    async def load(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[UserToken]:
        self._guard("load_tokens", cancellation, user=user)
        return await self._ensure_loaded(
            user.tokens, lambda: self._user_tokens.get_tokens(user.id, cancellation)
        )

    async def get_token(
        self,
        user: IdentityUser,
        login_provider: str,
        name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Token value from the loaded collection, or a single-row lookup when unloaded."""
        self._guard("get_token", cancellation, user=user, login_provider=login_provider, name=name)
        if user.tokens.is_loaded:
            token = user.tokens.find(lambda existing: existing.matches(login_provider, name))
        else:
            token = await self._user_tokens.find_token(user.id, login_provider, name, cancellation)
        return token.value if token is not None else None

    async def set_token(
        self,
        user: IdentityUser,
        login_provider: str,
        name: str,
        value: Optional[str],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("set_token", cancellation, user=user, login_provider=login_provider, name=name)
        await self.load(user, cancellation)
        user.tokens.remove_where(lambda existing: existing.matches(login_provider, name))
        user.tokens.append(UserToken(user.id, login_provider, name, value))

    async def remove_token(
        self,
        user: IdentityUser,
        login_provider: str,
        name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._guard("remove_token", cancellation, user=user, login_provider=login_provider, name=name)
        await self.load(user, cancellation)
        user.tokens.remove_where(lambda existing: existing.matches(login_provider, name))
