"""Identity entities, records and capability protocols."""

from .claim import Claim, UserClaim, RoleClaim
from .lazy import LazyCollection, LoadState
from .login import UserLoginInfo, UserLogin
from .result import IdentityError, IdentityResult
from .role import IdentityRole
from .user import IdentityUser, USER_COLUMNS
from .user_role import UserRole
from .user_token import UserToken
from .protocols import (
    UserStoreProtocol,
    QueryableUserStore,
    UserEmailStore,
    UserPasswordStore,
    UserPhoneNumberStore,
    UserTwoFactorStore,
    UserSecurityStampStore,
    UserLockoutStore,
    UserClaimStore,
    UserLoginStore,
    UserRoleStore,
    UserAuthenticationTokenStore,
    UserAuthenticatorKeyStore,
    RoleStoreProtocol,
    QueryableRoleStore,
    RoleClaimStore,
)

__all__ = [
    "Claim",
    "UserClaim",
    "RoleClaim",
    "LazyCollection",
    "LoadState",
    "UserLoginInfo",
    "UserLogin",
    "IdentityError",
    "IdentityResult",
    "IdentityRole",
    "IdentityUser",
    "USER_COLUMNS",
    "UserRole",
    "UserToken",
    # Protocols
    "UserStoreProtocol",
    "QueryableUserStore",
    "UserEmailStore",
    "UserPasswordStore",
    "UserPhoneNumberStore",
    "UserTwoFactorStore",
    "UserSecurityStampStore",
    "UserLockoutStore",
    "UserClaimStore",
    "UserLoginStore",
    "UserRoleStore",
    "UserAuthenticationTokenStore",
    "UserAuthenticatorKeyStore",
    "RoleStoreProtocol",
    "QueryableRoleStore",
    "RoleClaimStore",
]
