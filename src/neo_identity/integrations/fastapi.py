"""FastAPI dependency providers for the identity stores.

Usage:

```python
from fastapi import Depends
from neo_identity.integrations.fastapi import get_user_store
from neo_identity import UserStore

@router.get("/users/by-name/{name}")
async def get_user(name: str, users: UserStore = Depends(get_user_store)):
    user = await users.find_by_name(name.upper())
    ...
```

The connection factory is built once per process from IdentityStoreSettings;
tests override get_connection_factory through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ..database.connection import PostgresConnectionFactory
from ..database.protocols import DatabaseConnectionFactory
from ..factory import create_connection_factory
from ..features.identity.stores.role_store import RoleStore
from ..features.identity.stores.user_store import UserStore


@lru_cache()
def get_connection_factory() -> PostgresConnectionFactory:
    """Get the process-wide connection factory."""
    return create_connection_factory()


async def get_user_store(
    connection_factory: Annotated[DatabaseConnectionFactory, Depends(get_connection_factory)]
) -> UserStore:
    """Get a user store for the current request."""
    return UserStore(connection_factory)


async def get_role_store(
    connection_factory: Annotated[DatabaseConnectionFactory, Depends(get_connection_factory)]
) -> RoleStore:
    """Get a role store for the current request."""
    return RoleStore(connection_factory)
