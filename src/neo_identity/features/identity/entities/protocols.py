"""Identity store capability contracts.

Each protocol covers one narrow capability so callers can depend on exactly
the part of a store they use. UserStore and RoleStore compose concrete
implementations of all of them.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from ....core.cancellation import CancellationToken
from .claim import Claim
from .login import UserLoginInfo
from .result import IdentityResult
from .role import IdentityRole
from .user import IdentityUser


@runtime_checkable
class UserStoreProtocol(Protocol):
    """Core user persistence and lookup."""

    async def create(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def update(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def delete(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def find_by_id(self, user_id: str, cancellation: Optional[CancellationToken] = None) -> Optional[IdentityUser]:
        ...

    async def find_by_name(
        self, normalized_user_name: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        ...

    async def get_user_id(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> str:
        ...

    async def get_user_name(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_user_name(
        self, user: IdentityUser, user_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_normalized_user_name(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_normalized_user_name(
        self, user: IdentityUser, normalized_name: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class QueryableUserStore(Protocol):
    """Listing of all users."""

    async def list_users(self, cancellation: Optional[CancellationToken] = None) -> List[IdentityUser]:
        ...


@runtime_checkable
class UserEmailStore(Protocol):
    """Email, its normalized form and confirmation flag."""

    async def get_email(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_email(
        self, user: IdentityUser, email: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_email_confirmed(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> bool:
        ...

    async def set_email_confirmed(
        self, user: IdentityUser, confirmed: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_normalized_email(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_normalized_email(
        self, user: IdentityUser, normalized_email: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def find_by_email(
        self, normalized_email: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        ...


@runtime_checkable
class UserPasswordStore(Protocol):
    """Password hash storage; hashing itself is the caller's concern."""

    async def get_password_hash(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_password_hash(
        self, user: IdentityUser, password_hash: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def has_password(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> bool:
        ...


@runtime_checkable
class UserPhoneNumberStore(Protocol):
    """Phone number and its confirmation flag."""

    async def get_phone_number(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_phone_number(
        self, user: IdentityUser, phone_number: Optional[str], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_phone_number_confirmed(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        ...

    async def set_phone_number_confirmed(
        self, user: IdentityUser, confirmed: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class UserTwoFactorStore(Protocol):
    """Two-factor flag."""

    async def get_two_factor_enabled(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        ...

    async def set_two_factor_enabled(
        self, user: IdentityUser, enabled: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class UserSecurityStampStore(Protocol):
    """Security stamp accessors."""

    async def get_security_stamp(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_security_stamp(
        self, user: IdentityUser, stamp: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class UserLockoutStore(Protocol):
    """Lockout window, enablement and failed-access counter."""

    async def get_lockout_end_date(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[datetime]:
        ...

    async def set_lockout_end_date(
        self, user: IdentityUser, lockout_end: Optional[datetime], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def increment_access_failed_count(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> int:
        ...

    async def reset_access_failed_count(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_access_failed_count(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> int:
        ...

    async def get_lockout_enabled(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> bool:
        ...

    async def set_lockout_enabled(
        self, user: IdentityUser, enabled: bool, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class UserClaimStore(Protocol):
    """Claims owned by a user."""

    async def get_claims(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[Claim]:
        ...

    async def add_claims(
        self, user: IdentityUser, claims: Iterable[Claim], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def replace_claim(
        self,
        user: IdentityUser,
        claim: Claim,
        new_claim: Claim,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def remove_claims(
        self, user: IdentityUser, claims: Iterable[Claim], cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_users_for_claim(
        self, claim: Claim, cancellation: Optional[CancellationToken] = None
    ) -> List[IdentityUser]:
        ...


@runtime_checkable
class UserLoginStore(Protocol):
    """External logins owned by a user."""

    async def get_logins(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> List[UserLoginInfo]:
        ...

    async def add_login(
        self, user: IdentityUser, login: UserLoginInfo, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def remove_login(
        self,
        user: IdentityUser,
        login_provider: str,
        provider_key: str,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def find_by_login(
        self, login_provider: str, provider_key: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityUser]:
        ...


@runtime_checkable
class UserRoleStore(Protocol):
    """Role memberships of a user."""

    async def get_roles(self, user: IdentityUser, cancellation: Optional[CancellationToken] = None) -> List[str]:
        ...

    async def is_in_role(
        self, user: IdentityUser, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        ...

    async def add_to_role(
        self, user: IdentityUser, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def remove_from_role(
        self, user: IdentityUser, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_users_in_role(
        self, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> List[IdentityUser]:
        ...


@runtime_checkable
class UserAuthenticationTokenStore(Protocol):
    """Named tokens scoped by login provider."""

    async def get_token(
        self,
        user: IdentityUser,
        login_provider: str,
        name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_token(
        self,
        user: IdentityUser,
        login_provider: str,
        name: str,
        value: Optional[str],
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def remove_token(
        self,
        user: IdentityUser,
        login_provider: str,
        name: str,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class UserAuthenticatorKeyStore(Protocol):
    """Authenticator key accessors."""

    async def get_authenticator_key(
        self, user: IdentityUser, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_authenticator_key(
        self, user: IdentityUser, key: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class RoleStoreProtocol(Protocol):
    """Core role persistence and lookup."""

    async def create(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def update(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def delete(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> IdentityResult:
        ...

    async def find_by_id(self, role_id: str, cancellation: Optional[CancellationToken] = None) -> Optional[IdentityRole]:
        ...

    async def find_by_name(
        self, normalized_role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> Optional[IdentityRole]:
        ...

    async def get_role_id(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> str:
        ...

    async def get_role_name(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        ...

    async def set_role_name(
        self, role: IdentityRole, role_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def get_normalized_role_name(
        self, role: IdentityRole, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        ...

    async def set_normalized_role_name(
        self, role: IdentityRole, normalized_name: str, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...


@runtime_checkable
class QueryableRoleStore(Protocol):
    """Listing of all roles."""

    async def list_roles(self, cancellation: Optional[CancellationToken] = None) -> List[IdentityRole]:
        ...


@runtime_checkable
class RoleClaimStore(Protocol):
    """Claims owned by a role."""

    async def get_claims(self, role: IdentityRole, cancellation: Optional[CancellationToken] = None) -> List[Claim]:
        ...

    async def add_claim(
        self, role: IdentityRole, claim: Claim, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...

    async def remove_claim(
        self, role: IdentityRole, claim: Claim, cancellation: Optional[CancellationToken] = None
    ) -> None:
        ...
