"""Identity feature: entities, repositories and stores."""

from .entities import (
    Claim,
    IdentityError,
    IdentityResult,
    IdentityRole,
    IdentityUser,
    LazyCollection,
    LoadState,
    UserLoginInfo,
    UserRole,
    UserToken,
)
from .repositories import (
    RolesRepository,
    RoleClaimsRepository,
    UserClaimsRepository,
    UserLoginsRepository,
    UserRolesRepository,
    UserTokensRepository,
    UsersRepository,
)
from .stores import RoleStore, UserStore

__all__ = [
    "Claim",
    "IdentityError",
    "IdentityResult",
    "IdentityRole",
    "IdentityUser",
    "LazyCollection",
    "LoadState",
    "UserLoginInfo",
    "UserRole",
    "UserToken",
    "RolesRepository",
    "RoleClaimsRepository",
    "UserClaimsRepository",
    "UserLoginsRepository",
    "UserRolesRepository",
    "UserTokensRepository",
    "UsersRepository",
    "RoleStore",
    "UserStore",
]
