"""Pytest configuration and fixtures for neo-identity tests."""

import pytest
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

from neo_identity.core.cancellation import CancellationToken, ensure_not_cancelled
from neo_identity.database.utils import map_record
from neo_identity.features.identity.entities.role import IdentityRole
from neo_identity.features.identity.entities.user import IdentityUser


class FakeConnectionFactory:
    """Connection factory handing out one shared AsyncMock connection.

    Counts acquisitions so tests can assert how many connections an
    operation used, and honors cancellation like the real factory.
    """

    def __init__(self, schema_name="public", command_timeout=None):
        self.schema_name = schema_name
        self.command_timeout = command_timeout
        self.acquisitions = 0
        self.transactions = 0
        self.conn = AsyncMock()
        self.conn.fetch = AsyncMock(return_value=[])
        self.conn.fetchrow = AsyncMock(return_value=None)
        self.conn.execute = AsyncMock(return_value="INSERT 0 1")
        self.conn.executemany = AsyncMock(return_value=None)

    async def create_connection(self, cancellation=None):
        ensure_not_cancelled(cancellation, "create_connection")
        self.acquisitions += 1
        return self.conn

    @asynccontextmanager
    async def connection(self, cancellation=None):
        yield await self.create_connection(cancellation)

    @asynccontextmanager
    async def transaction(self, cancellation=None):
        async with self.connection(cancellation) as connection:
            self.transactions += 1
            yield connection

    def map_record(self, record, entity_type):
        return map_record(record, entity_type)


def make_user_row(**overrides):
    """A row shaped like the identity_users SELECT list."""
    row = {
        "id": uuid4(),
        "user_name": "alice",
        "normalized_user_name": "ALICE",
        "email": "alice@example.com",
        "normalized_email": "ALICE@EXAMPLE.COM",
        "email_confirmed": True,
        "password_hash": "hash",
        "security_stamp": "security",
        "concurrency_stamp": "stamp-1",
        "phone_number": None,
        "phone_number_confirmed": False,
        "two_factor_enabled": False,
        "lockout_end": None,
        "lockout_enabled": True,
        "access_failed_count": 0,
    }
    row.update(overrides)
    return row


def make_role_row(**overrides):
    row = {
        "id": uuid4(),
        "name": "Admin",
        "normalized_name": "ADMIN",
        "concurrency_stamp": "role-stamp-1",
    }
    row.update(overrides)
    return row


@pytest.fixture
def connection_factory():
    """Fake connection factory with a mocked asyncpg connection."""
    return FakeConnectionFactory()


@pytest.fixture
def mock_connection(connection_factory):
    """The mocked connection the fake factory hands out."""
    return connection_factory.conn


@pytest.fixture
def sample_user():
    """Fresh user with nothing loaded."""
    return IdentityUser(
        user_name="alice",
        normalized_user_name="ALICE",
        email="alice@example.com",
        normalized_email="ALICE@EXAMPLE.COM",
        security_stamp="security",
        lockout_enabled=True,
    )


@pytest.fixture
def sample_role():
    return IdentityRole(name="Admin", normalized_name="ADMIN")


@pytest.fixture
def cancelled_token():
    """A token that is already cancelled."""
    return CancellationToken.cancelled()


@pytest.fixture
def lockout_end():
    return datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def user_row():
    """Builder for identity_users rows."""
    return make_user_row


@pytest.fixture
def role_row():
    """Builder for identity_roles rows."""
    return make_role_row
