"""neo-identity: asyncpg-backed identity user and role stores.

Stores persist users, roles, claims, external logins, role memberships and
authentication tokens in PostgreSQL, opening one connection per operation.
The library does not configure logging; call setup_logging() if wanted.
"""

from .__version__ import __version__

from .config import IdentityStoreSettings, get_settings, setup_logging

from .core.cancellation import CancellationToken

from .core.exceptions import (
    IdentityStoreError,
    DatabaseError,
    DatabaseConfigurationError,
    ConnectionUnavailableError,
    ConnectionTimeoutError,
    QueryError,
    InvalidArgumentError,
    OperationCancelledError,
    OperationNotSupportedError,
    CollectionNotLoadedError,
)

from .database import PostgresConnectionFactory, DatabaseConnectionFactory

from .features.identity import (
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
    RoleStore,
    UserStore,
)

from .factory import IdentityStores, create_identity_stores

__all__ = [
    "__version__",
    "IdentityStoreSettings",
    "get_settings",
    "setup_logging",
    "CancellationToken",
    "IdentityStoreError",
    "DatabaseError",
    "DatabaseConfigurationError",
    "ConnectionUnavailableError",
    "ConnectionTimeoutError",
    "QueryError",
    "InvalidArgumentError",
    "OperationCancelledError",
    "OperationNotSupportedError",
    "CollectionNotLoadedError",
    "PostgresConnectionFactory",
    "DatabaseConnectionFactory",
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
    "RoleStore",
    "UserStore",
    "IdentityStores",
    "create_identity_stores",
]
