"""
OrderTableRepository against the in-memory table fake.
"""

from datetime import datetime, timedelta, timezone

import pytest
from azure.core.exceptions import HttpResponseError

from core.models import OrderRow, OrderStatus
from exceptions import ContractViolationError, OrderConcurrencyError, OrderStoreError
from infrastructure.order_repository import OrderTableRepository
from tests.factories.storage_fakes import FakeTableClient

T0 = datetime(2025, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def table():
    return FakeTableClient("Orders")


@pytest.fixture
def repo(table):
    return OrderTableRepository(table)


def _seed(repo, order_id, created_at=T0, **fields):
    return repo.upsert_pending(OrderRow(order_id=order_id, created_at=created_at, **fields))


class TestUpsertPending:
    def test_writes_row_in_order_partition(self, repo, table):
        _seed(repo, "a1", customer="Alice", total=42.5)
        stored = table.rows[("ORDER", "a1")]
        assert stored["Status"] == "Pending"
        assert stored["Customer"] == "Alice"
        assert stored["Total"] == 42.5
        assert stored["CreatedUtc"] == T0

    def test_forces_pending_status(self, repo, table):
        written = repo.upsert_pending(OrderRow(order_id="a2", status=OrderStatus.PROCESSED))
        assert written.status == OrderStatus.PENDING
        assert table.rows[("ORDER", "a2")]["Status"] == "Pending"

    def test_repeated_upsert_keeps_single_row(self, repo, table):
        _seed(repo, "dup")
        _seed(repo, "dup")
        assert list(table.rows) == [("ORDER", "dup")]

    def test_returns_etag(self, repo, table):
        written = _seed(repo, "e1")
        assert written.etag == table.etags[("ORDER", "e1")]

    def test_sdk_error_wrapped(self, repo, table):
        table.fail_with = HttpResponseError(message="boom")
        with pytest.raises(OrderStoreError):
            _seed(repo, "x")


class TestMarkProcessed:
    def test_merges_status_and_processed_time(self, repo, table):
        _seed(repo, "p1", customer="Alice", total=10.0)
        row = repo.get_order("p1")
        done_at = T0 + timedelta(seconds=5)

        processed = repo.mark_processed(row, done_at)

        stored = table.rows[("ORDER", "p1")]
        assert stored["Status"] == "Processed"
        assert stored["ProcessedUtc"] == done_at
        # Merge keeps the other columns
        assert stored["Customer"] == "Alice"
        assert stored["CreatedUtc"] == T0
        assert processed.etag == table.etags[("ORDER", "p1")]

    def test_requires_etag(self, repo):
        with pytest.raises(ContractViolationError):
            repo.mark_processed(OrderRow(order_id="no-etag"), T0)

    def test_stale_etag_raises_concurrency_error(self, repo, table):
        _seed(repo, "c1")
        row = repo.get_order("c1")
        table.touch("ORDER", "c1", Customer="Someone else")

        with pytest.raises(OrderConcurrencyError) as exc_info:
            repo.mark_processed(row, T0)

        assert exc_info.value.order_id == "c1"
        assert table.rows[("ORDER", "c1")]["Status"] == "Pending"

    def test_row_deleted_after_read_raises_concurrency_error(self, repo, table):
        _seed(repo, "gone")
        row = repo.get_order("gone")
        del table.rows[("ORDER", "gone")]

        with pytest.raises(OrderConcurrencyError):
            repo.mark_processed(row, T0)

    def test_other_http_errors_are_store_errors(self, repo, table):
        _seed(repo, "h1")
        row = repo.get_order("h1")
        table.fail_with = HttpResponseError(message="server busy")

        with pytest.raises(OrderStoreError) as exc_info:
            repo.mark_processed(row, T0)
        assert not isinstance(exc_info.value, OrderConcurrencyError)


class TestReads:
    def test_get_missing_returns_none(self, repo):
        assert repo.get_order("nope") is None

    def test_list_orders_uses_parameterized_filter(self, repo, table):
        _seed(repo, "l1")
        repo.list_orders(status=OrderStatus.PENDING)
        query = table.queries[-1]
        assert query["filter"] == "PartitionKey eq @pk and Status eq @status"
        assert query["parameters"] == {"pk": "ORDER", "status": "Pending"}

    def test_list_orders_filters_by_status(self, repo):
        _seed(repo, "s1")
        _seed(repo, "s2")
        repo.mark_processed(repo.get_order("s2"), T0)

        pending = repo.list_orders(status=OrderStatus.PENDING)
        processed = repo.list_orders(status=OrderStatus.PROCESSED)
        everything = repo.list_orders()

        assert [r.order_id for r in pending] == ["s1"]
        assert [r.order_id for r in processed] == ["s2"]
        assert {r.order_id for r in everything} == {"s1", "s2"}

    def test_list_orders_rejects_raw_string_status(self, repo):
        with pytest.raises(ContractViolationError):
            repo.list_orders(status="Pending' or 1 eq 1")

    def test_list_pending_before_cutoff_and_limit(self, repo):
        for i in range(5):
            _seed(repo, f"old{i}", created_at=T0 - timedelta(hours=1, minutes=i))
        _seed(repo, "fresh", created_at=T0)

        stale = repo.list_pending_before(T0 - timedelta(minutes=15), limit=3)

        assert len(stale) == 3
        assert all(r.order_id.startswith("old") for r in stale)

    def test_health_check(self, repo):
        assert repo.health_check() == {"table": "Orders", "reachable": True, "empty": True}
        _seed(repo, "h")
        assert repo.health_check()["empty"] is False
