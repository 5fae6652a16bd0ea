"""Identity store facades and their capabilities."""

from .base import StoreCapability
from .user_fields import (
    UserEmailCapability,
    UserPasswordCapability,
    UserPhoneNumberCapability,
    UserTwoFactorCapability,
    UserSecurityStampCapability,
    UserLockoutCapability,
    UserAuthenticatorKeyCapability,
)
from .user_collections import (
    UserClaimCapability,
    UserLoginCapability,
    UserRoleCapability,
    UserTokenCapability,
)
from .user_store import UserStore
from .role_store import RoleStore, RoleClaimCapability

__all__ = [
    "StoreCapability",
    "UserEmailCapability",
    "UserPasswordCapability",
    "UserPhoneNumberCapability",
    "UserTwoFactorCapability",
    "UserSecurityStampCapability",
    "UserLockoutCapability",
    "UserAuthenticatorKeyCapability",
    "UserClaimCapability",
    "UserLoginCapability",
    "UserRoleCapability",
    "UserTokenCapability",
    "UserStore",
    "RoleStore",
    "RoleClaimCapability",
]
