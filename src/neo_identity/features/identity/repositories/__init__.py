"""Identity repositories.

Concrete asyncpg implementations, one per table or association.
"""

from .base import AsyncPGIdentityRepository
from .users_repository import UsersRepository
from .roles_repository import RolesRepository
from .user_claims_repository import UserClaimsRepository
from .role_claims_repository import RoleClaimsRepository
from .user_logins_repository import UserLoginsRepository
from .user_roles_repository import UserRolesRepository
from .user_tokens_repository import UserTokensRepository

__all__ = [
    "AsyncPGIdentityRepository",
    "UsersRepository",
    "RolesRepository",
    "UserClaimsRepository",
    "RoleClaimsRepository",
    "UserLoginsRepository",
    "UserRolesRepository",
    "UserTokensRepository",
]
