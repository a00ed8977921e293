"""
OrderListingQuery ordering, filtering and truncation.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.models import OrderRow, OrderStatus
from services.order_listing import OrderListingQuery

T0 = datetime(2025, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def order_repo(repos):
    repo = repos["order_repo"]
    for i in range(30):
        repo.upsert_pending(OrderRow(order_id=f"o{i:02d}", created_at=T0 + timedelta(minutes=i)))
    return repo


@pytest.fixture
def listing(order_repo):
    return OrderListingQuery(order_repo)


def test_newest_first(listing):
    rows = listing.list(top=3)
    assert [r.order_id for r in rows] == ["o29", "o28", "o27"]


def test_default_top_is_25(listing):
    assert len(listing.list()) == 25


def test_top_larger_than_table(listing):
    assert len(listing.list(top=100)) == 30


@pytest.mark.parametrize("top", [0, -1])
def test_non_positive_top_is_empty(listing, top):
    assert listing.list(top=top) == []


def test_status_filter(listing, order_repo):
    order_repo.mark_processed(order_repo.get_order("o05"), T0)
    order_repo.mark_processed(order_repo.get_order("o07"), T0)

    processed = listing.list(status=OrderStatus.PROCESSED)

    assert [r.order_id for r in processed] == ["o07", "o05"]
    assert all(r.status == OrderStatus.PROCESSED for r in processed)


def test_rows_without_created_time_sort_last(repos, orders_table):
    repo = repos["order_repo"]
    repo.upsert_pending(OrderRow(order_id="dated", created_at=T0))
    orders_table.rows[("ORDER", "undated")] = {
        "PartitionKey": "ORDER", "RowKey": "undated", "Status": "Pending",
    }
    orders_table.etags[("ORDER", "undated")] = "W/undated"

    rows = OrderListingQuery(repo).list()

    assert [r.order_id for r in rows] == ["dated", "undated"]


def test_empty_table(repos):
    assert OrderListingQuery(repos["order_repo"]).list() == []
