"""Wiring helpers that assemble the identity stores."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .config.settings import IdentityStoreSettings, get_settings
from .database.connection import PostgresConnectionFactory
from .features.identity.stores.role_store import RoleStore
from .features.identity.stores.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass
class IdentityStores:
    """The connection factory with the user and role stores built on it."""

    connection_factory: PostgresConnectionFactory
    users: UserStore
    roles: RoleStore


def create_connection_factory(
    source: Optional[Union[str, IdentityStoreSettings]] = None
) -> PostgresConnectionFactory:
    """Build a connection factory from a DSN, explicit settings or the environment."""
    if isinstance(source, str):
        return PostgresConnectionFactory(source)
    return PostgresConnectionFactory.from_settings(source or get_settings())


def create_identity_stores(
    source: Optional[Union[str, IdentityStoreSettings]] = None
) -> IdentityStores:
    """Create user and role stores sharing one connection factory.

    Args:
        source: Connection string, settings object, or None to read settings
            from the environment

    Raises:
        DatabaseConfigurationError: If no usable connection string is configured
    """
    factory = create_connection_factory(source)
    logger.info(f"Identity stores configured for schema {factory.schema_name}")
    return IdentityStores(
        connection_factory=factory,
        users=UserStore(factory),
        roles=RoleStore(factory),
    )
