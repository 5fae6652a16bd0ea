"""Tests for the role store."""

import pytest
from unittest.mock import AsyncMock

from neo_identity.core.exceptions import InvalidArgumentError, OperationCancelledError
from neo_identity.features.identity.entities.claim import Claim
from neo_identity.features.identity.entities.protocols import (
    QueryableRoleStore,
    RoleClaimStore,
    RoleStoreProtocol,
)
from neo_identity.features.identity.stores.role_store import RoleClaimCapability, RoleStore


@pytest.fixture
def store(connection_factory):
    return RoleStore(connection_factory)


class TestRoleStore:
    """Test core role operations."""

    def test_implements_protocols(self, store):
        assert isinstance(store, RoleStoreProtocol)
        assert isinstance(store, QueryableRoleStore)
        assert isinstance(store.claims, RoleClaimStore)

    @pytest.mark.asyncio
    async def test_create(self, store, sample_role, mock_connection):
        result = await store.create(sample_role)

        assert result.succeeded
        assert "identity_roles" in mock_connection.execute.call_args.args[0]

    @pytest.mark.asyncio
    async def test_update_rotates_and_guards_stamp(self, store, sample_role, mock_connection):
        mock_connection.execute.return_value = "UPDATE 1"
        previous = sample_role.concurrency_stamp

        result = await store.update(sample_role)

        assert result.succeeded
        args = mock_connection.execute.call_args.args
        assert args[4] == sample_role.concurrency_stamp != previous
        assert args[5] == previous

    @pytest.mark.asyncio
    async def test_failed_update_restores_stamp(self, store, sample_role, mock_connection):
        mock_connection.execute.return_value = "UPDATE 0"
        previous = sample_role.concurrency_stamp

        result = await store.update(sample_role)

        assert not result.succeeded
        assert sample_role.concurrency_stamp == previous

    @pytest.mark.asyncio
    async def test_find_by_id_malformed_raises(self, store, connection_factory):
        with pytest.raises(InvalidArgumentError):
            await store.find_by_id("nope")

        assert connection_factory.acquisitions == 0

    @pytest.mark.asyncio
    async def test_find_by_id(self, store, mock_connection, role_row):
        row = role_row()
        mock_connection.fetchrow.return_value = row

        role = await store.find_by_id(str(row["id"]))

        assert role.id == row["id"]

    @pytest.mark.asyncio
    async def test_find_by_name_missing(self, store, mock_connection):
        mock_connection.fetchrow.return_value = None

        assert await store.find_by_name("GHOST") is None

    @pytest.mark.asyncio
    async def test_list_roles(self, store, mock_connection, role_row):
        mock_connection.fetch.return_value = [role_row(), role_row(name="Reader", normalized_name="READER")]

        roles = await store.list_roles()

        assert [role.normalized_name for role in roles] == ["ADMIN", "READER"]

    @pytest.mark.asyncio
    async def test_name_accessors(self, store, sample_role):
        await store.set_role_name(sample_role, "Owner")
        await store.set_normalized_role_name(sample_role, "OWNER")

        assert await store.get_role_name(sample_role) == "Owner"
        assert await store.get_normalized_role_name(sample_role) == "OWNER"
        assert await store.get_role_id(sample_role) == str(sample_role.id)

    @pytest.mark.asyncio
    async def test_delete(self, store, sample_role, connection_factory):
        result = await store.delete(sample_role)

        assert result.succeeded
        assert connection_factory.transactions == 1

    @pytest.mark.asyncio
    async def test_cancelled(self, store, sample_role, cancelled_token, connection_factory):
        with pytest.raises(OperationCancelledError):
            await store.delete(sample_role, cancelled_token)
        with pytest.raises(OperationCancelledError):
            await store.claims.get_claims(sample_role, cancelled_token)

        assert connection_factory.acquisitions == 0


class TestRoleClaimCapability:
    """Test role claims."""

    @pytest.fixture
    def role_claims_repo(self):
        repo = AsyncMock()
        repo.get_claims = AsyncMock(return_value=[Claim("perm", "read")])
        return repo

    @pytest.fixture
    def capability(self, role_claims_repo):
        return RoleClaimCapability(role_claims_repo)

    @pytest.mark.asyncio
    async def test_load_once(self, capability, role_claims_repo, sample_role):
        await capability.get_claims(sample_role)
        await capability.add_claim(sample_role, Claim("scope", "orders"))

        assert await capability.get_claims(sample_role) == [Claim("perm", "read"), Claim("scope", "orders")]
        role_claims_repo.get_claims.assert_awaited_once_with(sample_role.id, None)

    @pytest.mark.asyncio
    async def test_add_claim_replaces_same_type(self, capability, sample_role):
        await capability.add_claim(sample_role, Claim("perm", "write"))

        assert await capability.get_claims(sample_role) == [Claim("perm", "write")]

    @pytest.mark.asyncio
    async def test_remove_claim(self, capability, sample_role):
        await capability.remove_claim(sample_role, Claim("perm", "read"))

        assert sample_role.claims.items == []

    @pytest.mark.asyncio
    async def test_update_persists_loaded_claims(self, store, sample_role, mock_connection):
        mock_connection.execute.return_value = "UPDATE 1"
        sample_role.claims.load([])

        await store.claims.add_claim(sample_role, Claim("perm", "admin"))
        await store.update(sample_role)

        rows = mock_connection.executemany.call_args.args[1]
        assert [(row[2], row[3]) for row in rows] == [("perm", "admin")]
