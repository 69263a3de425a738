# =============================================================================
# tests/test_supabase_repository.py - Supabase Backend Tests
# =============================================================================
# The Supabase SDK is replaced with mocks: these tests check that the
# repository forwards calls to the right table, turns client errors into
# PersistenceError and unique-constraint hits into DuplicateValueError.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from app.exceptions import DuplicateValueError, PersistenceError
from core.repositories.supabase import SupabaseRepositories, SupabaseRepository
from lib.supabase_client import DUPLICATE_KEY, SupabaseClient, SupabaseClientError


@pytest.fixture
def mock_client():
    with patch("core.repositories.supabase.SupabaseClient") as mock:
        yield mock


class TestSupabaseRepository:
    """Tests for SupabaseRepository."""

    def test_find_by_id_forwards_table(self, mock_client):
        mock_client.fetch_row.return_value = {"id": "o1"}

        row = SupabaseRepository("orders").find_by_id("o1")

        assert row == {"id": "o1"}
        mock_client.fetch_row.assert_called_once_with("orders", "o1")

    def test_find_by_filters_column(self, mock_client):
        mock_client.fetch_rows.return_value = []

        SupabaseRepository("orders").find_by("car_id", "v1")

        mock_client.fetch_rows.assert_called_once_with("orders", column="car_id", value="v1")

    def test_exists(self, mock_client):
        mock_client.fetch_row.return_value = None
        assert not SupabaseRepository("cars").exists("v1")

    @pytest.mark.parametrize("method,args,client_method", [
        ("find_by_id", ("o1",), "fetch_row"),
        ("find_all", (), "fetch_rows"),
        ("insert", ({"id": "o1"},), "insert_row"),
        ("update", ("o1", {"cep": "70040-010"}), "update_row"),
        ("delete", ("o1",), "delete_row"),
    ])
    def test_client_errors_become_persistence_errors(self, mock_client, method, args, client_method):
        getattr(mock_client, client_method).side_effect = SupabaseClientError("connection refused")

        with pytest.raises(PersistenceError) as exc_info:
            getattr(SupabaseRepository("orders"), method)(*args)

        assert exc_info.value.status_code == 500
        assert exc_info.value.details["table"] == "orders"

    @pytest.mark.parametrize("method,args,client_method", [
        ("insert", ({"id": "c2", "cpf": "52998224725"},), "insert_row"),
        ("update", ("c2", {"cpf": "52998224725"}), "update_row"),
    ])
    def test_unique_violation_becomes_conflict(self, mock_client, method, args, client_method):
        getattr(mock_client, client_method).side_effect = SupabaseClientError(
            "duplicate key", code=DUPLICATE_KEY, details={"field": "cpf", "value": "52998224725"}
        )

        with pytest.raises(DuplicateValueError) as exc_info:
            getattr(SupabaseRepository("customers"), method)(*args)

        assert exc_info.value.status_code == 409
        assert exc_info.value.code == "CUSTOMER_CPF_TAKEN"

    def test_sync_schema_probes_every_table(self, mock_client):
        SupabaseRepositories().sync_schema()

        probed = [call.args[0] for call in mock_client.probe_table.call_args_list]
        assert probed == ["users", "customers", "cars", "orders"]

    def test_sync_schema_fails_on_missing_table(self, mock_client):
        mock_client.probe_table.side_effect = SupabaseClientError("relation does not exist", code="TABLE_MISSING")

        with pytest.raises(PersistenceError):
            SupabaseRepositories().sync_schema()


class TestSupabaseClient:
    """Tests for the SupabaseClient wrapper with a mocked SDK client."""

    @pytest.fixture
    def sdk(self):
        sdk = MagicMock()
        with patch.object(SupabaseClient, "get_client", return_value=sdk):
            yield sdk

    def test_fetch_row_returns_first_row(self, sdk):
        query = sdk.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[{"id": "o1"}])

        assert SupabaseClient.fetch_row("orders", "o1") == {"id": "o1"}
        sdk.table.assert_called_with("orders")

    def test_fetch_row_missing(self, sdk):
        query = sdk.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])

        assert SupabaseClient.fetch_row("orders", "o1") is None

    def test_malformed_uuid_counts_as_missing(self, sdk):
        query = sdk.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = Exception("{'code': '22P02', 'message': 'invalid input syntax for type uuid'}")

        assert SupabaseClient.fetch_row("orders", "not-a-uuid") is None

    def test_other_errors_raise(self, sdk):
        query = sdk.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = Exception("timeout")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_row("orders", "o1")
        assert exc_info.value.code == "FETCH_ROW_FAILED"

    def test_delete_reports_whether_a_row_went_away(self, sdk):
        query = sdk.table.return_value.delete.return_value.eq.return_value
        query.execute.return_value = MagicMock(data=[])

        assert SupabaseClient.delete_row("orders", "o1") is False

    def test_insert_without_data_raises(self, sdk):
        sdk.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_row("orders", {"id": "o1"})
        assert exc_info.value.code == "INSERT_NO_DATA"

    def test_insert_unique_violation(self, sdk):
        sdk.table.return_value.insert.return_value.execute.side_effect = Exception(
            "{'code': '23505', 'details': 'Key (plate)=(ABC1D23) already exists.', "
            "'message': 'duplicate key value violates unique constraint \"cars_plate_key\"'}"
        )

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_row("cars", {"id": "v2", "plate": "ABC1D23"})

        assert exc_info.value.code == DUPLICATE_KEY
        assert exc_info.value.details["field"] == "plate"
        assert exc_info.value.details["value"] == "ABC1D23"

    def test_update_unique_violation(self, sdk):
        query = sdk.table.return_value.update.return_value.eq.return_value
        query.execute.side_effect = Exception("{'code': '23505', 'details': 'Key (email)=(ana@example.com) already exists.'}")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.update_row("users", "u1", {"email": "ana@example.com"})

        assert exc_info.value.code == DUPLICATE_KEY
        assert exc_info.value.details["field"] == "email"
