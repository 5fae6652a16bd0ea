"""Tests for identity repositories."""

import asyncpg
import pytest
from unittest.mock import MagicMock, patch
from uuid import uuid4

from neo_identity.core.cancellation import CancellationToken
from neo_identity.core.exceptions import ConnectionUnavailableError, OperationCancelledError, QueryError
from neo_identity.features.identity.entities.claim import Claim
from neo_identity.features.identity.entities.login import UserLoginInfo
from neo_identity.features.identity.entities.user import IdentityUser
from neo_identity.features.identity.entities.user_role import UserRole
from neo_identity.features.identity.entities.user_token import UserToken
from neo_identity.features.identity.repositories.role_claims_repository import RoleClaimsRepository
from neo_identity.features.identity.repositories.roles_repository import RolesRepository
from neo_identity.features.identity.repositories.user_claims_repository import UserClaimsRepository
from neo_identity.features.identity.repositories.user_logins_repository import UserLoginsRepository
from neo_identity.features.identity.repositories.user_roles_repository import UserRolesRepository
from neo_identity.features.identity.repositories.user_tokens_repository import UserTokensRepository
from neo_identity.features.identity.repositories.users_repository import UsersRepository


def executed_sql(mock_connection):
    return [call.args[0] for call in mock_connection.execute.call_args_list]


class TestUsersRepository:
    """Test user row persistence."""

    @pytest.fixture
    def repository(self, connection_factory):
        return UsersRepository(connection_factory)

    @pytest.mark.asyncio
    async def test_create_inserts_row(self, repository, sample_user, mock_connection, connection_factory):
        result = await repository.create(sample_user)

        assert result.succeeded
        mock_connection.execute.assert_called_once()
        sql = mock_connection.execute.call_args.args[0]
        assert "INSERT INTO public.identity_users" in sql
        assert mock_connection.execute.call_args.args[1:] == sample_user.column_values()
        assert connection_factory.acquisitions == 1
        assert connection_factory.transactions == 1

    @pytest.mark.asyncio
    async def test_create_writes_loaded_collections_only(self, repository, sample_user, mock_connection):
        sample_user.claims.load([Claim("role", "admin")])
        sample_user.tokens.load([UserToken(sample_user.id, "app", "refresh", "t")])

        await repository.create(sample_user)

        statements = executed_sql(mock_connection)
        assert any("DELETE FROM public.identity_user_claims" in sql for sql in statements)
        assert any("DELETE FROM public.identity_user_tokens" in sql for sql in statements)
        assert not any("identity_user_logins" in sql for sql in statements)
        assert not any("identity_user_roles" in sql for sql in statements)
        assert mock_connection.executemany.call_count == 2

    @pytest.mark.asyncio
    async def test_create_duplicate_returns_failed_result(self, repository, sample_user, mock_connection):
        mock_connection.execute.side_effect = asyncpg.UniqueViolationError("duplicate key")

        result = await repository.create(sample_user)

        assert not result.succeeded
        assert result.error_codes == ["DuplicateUser"]

    @pytest.mark.asyncio
    async def test_create_other_driver_error_raises(self, repository, sample_user, mock_connection):
        mock_connection.execute.side_effect = asyncpg.PostgresError("broken")

        with pytest.raises(QueryError):
            await repository.create(sample_user)

    @pytest.mark.asyncio
    async def test_update_passes_expected_stamp(self, repository, sample_user, mock_connection):
        mock_connection.execute.return_value = "UPDATE 1"

        result = await repository.update(sample_user, "old-stamp")

        assert result.succeeded
        args = mock_connection.execute.call_args.args
        assert "UPDATE public.identity_users" in args[0]
        assert args[-1] == "old-stamp"
        assert len(args) == 17

    @pytest.mark.asyncio
    async def test_update_no_rows_is_concurrency_failure(self, repository, sample_user, mock_connection):
        sample_user.claims.load([Claim("a", "1")])
        mock_connection.execute.return_value = "UPDATE 0"

        result = await repository.update(sample_user, "stale")

        assert result.error_codes == ["ConcurrencyFailure"]
        mock_connection.execute.assert_called_once()
        mock_connection.executemany.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_writes_roles(self, repository, sample_user, mock_connection):
        role_id = uuid4()
        sample_user.roles.load([UserRole(role_id, "Admin", "ADMIN"), UserRole(role_id, "Admin", "ADMIN")])
        mock_connection.execute.return_value = "UPDATE 1"

        await repository.update(sample_user, sample_user.concurrency_stamp)

        rows = mock_connection.executemany.call_args.args[1]
        assert rows == [(sample_user.id, role_id)]

    @pytest.mark.asyncio
    async def test_delete_removes_children_then_user(self, repository, sample_user, mock_connection):
        result = await repository.delete(sample_user)

        assert result.succeeded
        statements = executed_sql(mock_connection)
        assert len(statements) == 5
        assert "identity_users" in statements[-1]
        assert all(call.args[1] == sample_user.id for call in mock_connection.execute.call_args_list)

    @pytest.mark.asyncio
    async def test_find_by_id(self, repository, mock_connection, user_row):
        row = user_row()
        mock_connection.fetchrow.return_value = row

        user = await repository.find_by_id(row["id"])

        assert user.id == row["id"]
        assert user.normalized_user_name == "ALICE"
        assert user.concurrency_stamp == "stamp-1"
        assert not user.claims.is_loaded

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, repository, mock_connection):
        mock_connection.fetchrow.return_value = None

        assert await repository.find_by_name("NOBODY") is None
        assert await repository.find_by_email("NOBODY@EXAMPLE.COM") is None

    @pytest.mark.asyncio
    async def test_get_all_empty_list(self, repository, mock_connection):
        mock_connection.fetch.return_value = []

        assert await repository.get_all() == []

    @pytest.mark.asyncio
    async def test_get_users_for_claim_binds_type_and_value(self, repository, mock_connection, user_row):
        mock_connection.fetch.return_value = [user_row(), user_row(user_name="bob")]

        users = await repository.get_users_for_claim(Claim("dept", "it"))

        assert len(users) == 2
        assert mock_connection.fetch.call_args.args[1:] == ("dept", "it")

    @pytest.mark.asyncio
    async def test_get_users_in_role_by_normalized_name(self, repository, mock_connection, user_row):
        mock_connection.fetch.return_value = [user_row()]

        users = await repository.get_users_in_role("ADMIN")

        assert len(users) == 1
        assert "r.normalized_name = $1" in mock_connection.fetch.call_args.args[0]

    @pytest.mark.asyncio
    async def test_schema_name_is_formatted_in(self, connection_factory, mock_connection):
        connection_factory.schema_name = "identity"
        repository = UsersRepository(connection_factory)

        await repository.get_all()

        assert "FROM identity.identity_users" in mock_connection.fetch.call_args.args[0]

    @pytest.mark.asyncio
    async def test_connection_failure_maps_to_unavailable(self, repository, mock_connection):
        mock_connection.fetch.side_effect = OSError("network down")

        with pytest.raises(ConnectionUnavailableError):
            await repository.get_all()

    @pytest.mark.asyncio
    async def test_cancelled_before_connecting(self, repository, connection_factory, cancelled_token):
        with pytest.raises(OperationCancelledError):
            await repository.get_all(cancelled_token)

        assert connection_factory.acquisitions == 0


class TestRolesRepository:
    """Test role row persistence."""

    @pytest.fixture
    def repository(self, connection_factory):
        return RolesRepository(connection_factory)

    @pytest.mark.asyncio
    async def test_create(self, repository, sample_role, mock_connection):
        result = await repository.create(sample_role)

        assert result.succeeded
        args = mock_connection.execute.call_args.args
        assert "INSERT INTO public.identity_roles" in args[0]
        assert args[1:] == (sample_role.id, "Admin", "ADMIN", sample_role.concurrency_stamp)

    @pytest.mark.asyncio
    async def test_create_writes_loaded_claims(self, repository, sample_role, mock_connection):
        sample_role.claims.load([Claim("perm", "read"), Claim("perm", "write")])

        await repository.create(sample_role)

        rows = mock_connection.executemany.call_args.args[1]
        assert [(row[1], row[2], row[3]) for row in rows] == [
            (sample_role.id, "perm", "read"),
            (sample_role.id, "perm", "write"),
        ]

    @pytest.mark.asyncio
    async def test_duplicate_name(self, repository, sample_role, mock_connection):
        mock_connection.execute.side_effect = asyncpg.UniqueViolationError("duplicate key")

        result = await repository.create(sample_role)

        assert result.error_codes == ["DuplicateRole"]

    @pytest.mark.asyncio
    async def test_update_stale_stamp(self, repository, sample_role, mock_connection):
        mock_connection.execute.return_value = "UPDATE 0"

        result = await repository.update(sample_role, "stale")

        assert result.error_codes == ["ConcurrencyFailure"]
        assert mock_connection.execute.call_args.args[-1] == "stale"

    @pytest.mark.asyncio
    async def test_delete_removes_claims_and_memberships(self, repository, sample_role, mock_connection):
        await repository.delete(sample_role)

        statements = executed_sql(mock_connection)
        assert "identity_role_claims" in statements[0]
        assert "identity_user_roles" in statements[1]
        assert "identity_roles" in statements[2]

    @pytest.mark.asyncio
    async def test_find_by_name(self, repository, mock_connection, role_row):
        mock_connection.fetchrow.return_value = role_row()

        role = await repository.find_by_name("ADMIN")

        assert role.name == "Admin"
        assert mock_connection.fetchrow.call_args.args[1] == "ADMIN"


class TestChildRepositories:
    """Test collection reads."""

    @pytest.mark.asyncio
    async def test_user_claims(self, connection_factory, mock_connection):
        user_id = uuid4()
        mock_connection.fetch.return_value = [
            {"id": uuid4(), "user_id": user_id, "claim_type": "dept", "claim_value": "it"},
        ]

        claims = await UserClaimsRepository(connection_factory).get_claims(user_id)

        assert claims == [Claim("dept", "it")]

    @pytest.mark.asyncio
    async def test_role_claims(self, connection_factory, mock_connection):
        role_id = uuid4()
        mock_connection.fetch.return_value = [
            {"id": uuid4(), "role_id": role_id, "claim_type": "perm", "claim_value": "read"},
        ]

        claims = await RoleClaimsRepository(connection_factory).get_claims(role_id)

        assert claims == [Claim("perm", "read")]

    @pytest.mark.asyncio
    async def test_user_logins(self, connection_factory, mock_connection):
        user_id = uuid4()
        mock_connection.fetch.return_value = [
            {"user_id": user_id, "login_provider": "google", "provider_key": "g-1",
             "provider_display_name": "Google"},
        ]

        logins = await UserLoginsRepository(connection_factory).get_logins(user_id)

        assert logins == [UserLoginInfo("google", "g-1")]
        assert logins[0].provider_display_name == "Google"

    @pytest.mark.asyncio
    async def test_find_user_by_login(self, connection_factory, mock_connection, user_row):
        row = user_row()
        mock_connection.fetchrow.return_value = row

        user = await UserLoginsRepository(connection_factory).find_user_by_login("google", "g-1")

        assert isinstance(user, IdentityUser)
        assert user.id == row["id"]
        assert mock_connection.fetchrow.call_args.args[1:] == ("google", "g-1")

    @pytest.mark.asyncio
    async def test_user_roles(self, connection_factory, mock_connection):
        role_id = uuid4()
        mock_connection.fetch.return_value = [
            {"role_id": role_id, "role_name": "Admin", "normalized_role_name": "ADMIN"},
        ]

        roles = await UserRolesRepository(connection_factory).get_roles(uuid4())

        assert roles == [UserRole(role_id, "Admin", "ADMIN")]

    @pytest.mark.asyncio
    async def test_tokens(self, connection_factory, mock_connection):
        user_id = uuid4()
        row = {"user_id": user_id, "login_provider": "app", "name": "refresh", "value": "abc"}
        mock_connection.fetch.return_value = [row]
        mock_connection.fetchrow.return_value = row
        repository = UserTokensRepository(connection_factory)

        tokens = await repository.get_tokens(user_id)
        token = await repository.find_token(user_id, "app", "refresh")

        assert tokens == [UserToken(user_id, "app", "refresh", "abc")]
        assert token.value == "abc"
        assert connection_factory.acquisitions == 2


class ManualClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestStatementDeadlines:
    """Statement timeouts shrink with the time the token has left."""

    @pytest.fixture
    def clock(self):
        clock = ManualClock()
        fake_time = MagicMock()
        fake_time.monotonic = clock
        with patch("neo_identity.core.cancellation.time", fake_time):
            yield clock

    @pytest.fixture
    def slow_factory(self, connection_factory, mock_connection, clock):
        connect = connection_factory.create_connection

        async def slow_connect(cancellation=None):
            connection = await connect(cancellation)
            clock.advance(0.4)
            return connection

        def run_statement(*args, **kwargs):
            clock.advance(0.02)
            return "UPDATE 1"

        connection_factory.create_connection = slow_connect
        mock_connection.execute.side_effect = run_statement
        return connection_factory

    @pytest.mark.asyncio
    async def test_user_delete_after_slow_connect(self, slow_factory, sample_user, mock_connection):
        token = CancellationToken(timeout=0.5)

        await UsersRepository(slow_factory).delete(sample_user, token)

        timeouts = [call.kwargs["timeout"] for call in mock_connection.execute.call_args_list]
        assert timeouts == pytest.approx([0.1, 0.08, 0.06, 0.04, 0.02])

    @pytest.mark.asyncio
    async def test_role_update_bounds_collection_writes(self, slow_factory, sample_role, mock_connection):
        sample_role.claims.load([Claim("perm", "read")])
        token = CancellationToken(timeout=0.5)

        result = await RolesRepository(slow_factory).update(sample_role, sample_role.concurrency_stamp, token)

        assert result.succeeded
        timeouts = [call.kwargs["timeout"] for call in mock_connection.execute.call_args_list]
        assert timeouts == pytest.approx([0.1, 0.08])
        assert mock_connection.executemany.call_args.kwargs["timeout"] == pytest.approx(0.06)
