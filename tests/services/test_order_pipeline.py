"""
Order relay: gateway -> seed consumer -> finalize consumer.

Runs against RepositoryFactory-built repositories over the storage fakes,
so the messages between stages are exactly what the queues would carry.
"""

import json
from datetime import datetime

import pytest
from azure.core.exceptions import ServiceRequestError

from config import OrderConfig
from core.models import OrderStatus
from core.schema import OrderMessage, encode_order_message
from exceptions import InvalidOrderMessageError, OrderConcurrencyError, QueuePublishError
from services.order_listing import OrderListingQuery
from services.order_pipeline import EnqueueGateway, SeedConsumer, FinalizeConsumer, new_order_id


@pytest.fixture
def gateway(repos, clock):
    return EnqueueGateway(repos["queue_repo"], "orders", OrderConfig(), clock=clock)


@pytest.fixture
def seed(repos, clock):
    return SeedConsumer(repos["order_repo"], repos["queue_repo"], "orders-finalize", OrderConfig(), clock=clock)


@pytest.fixture
def finalize(repos, clock):
    return FinalizeConsumer(repos["order_repo"], clock=clock)


class TestEnqueueGateway:
    def test_fills_defaults(self, gateway, orders_queue, clock):
        result = gateway.enqueue({})

        payload = orders_queue.payloads()[0]
        assert payload["order_id"] == result.order_id
        assert payload["customer"] == "Anonymous"
        assert payload["total"] == 0.0
        assert datetime.fromisoformat(payload["timestamp"].replace("Z", "+00:00")) == clock()

    def test_none_request_is_all_defaults(self, gateway, orders_queue):
        gateway.enqueue(None)
        assert orders_queue.payloads()[0]["customer"] == "Anonymous"

    def test_blank_customer_becomes_anonymous(self, gateway, orders_queue):
        gateway.enqueue({"customer": "   "})
        assert orders_queue.payloads()[0]["customer"] == "Anonymous"

    def test_keeps_supplied_fields(self, gateway, orders_queue):
        result = gateway.enqueue({"order_id": "given", "customer": "Alice", "total": 42.5})
        assert result.order_id == "given"
        assert orders_queue.payloads()[0]["customer"] == "Alice"

    def test_ids_are_unique_and_non_empty(self, gateway):
        ids = {gateway.enqueue({}).order_id for _ in range(50)}
        assert len(ids) == 50
        assert all(ids)

    def test_exactly_one_publish_per_call(self, gateway, orders_queue, finalize_queue):
        gateway.enqueue({"customer": "Bo"})
        assert len(orders_queue.messages) == 1
        assert finalize_queue.messages == []

    def test_never_touches_table(self, gateway, orders_table):
        gateway.enqueue({"customer": "Bo"})
        assert orders_table.rows == {}

    def test_negative_total_rejected(self, gateway, orders_queue):
        with pytest.raises(ValueError):
            gateway.enqueue({"total": -5})
        assert orders_queue.messages == []

    def test_non_object_rejected(self, gateway):
        with pytest.raises(ValueError):
            gateway.enqueue(["not", "an", "object"])

    def test_publish_failure_propagates(self, gateway, orders_queue):
        orders_queue.fail_with = ServiceRequestError("down")
        with pytest.raises(QueuePublishError):
            gateway.enqueue({})

    def test_result_dict_shape(self, gateway):
        result = gateway.enqueue({"order_id": "r1"})
        assert result.to_dict() == {"queued": True, "queue": "orders", "orderId": "r1"}


class TestSeedConsumer:
    def test_writes_pending_row_and_forwards(self, seed, orders_table, finalize_queue, clock):
        raw = encode_order_message(OrderMessage(order_id="X", customer="Alice", total=42.5))

        row = seed.handle(raw)

        stored = orders_table.rows[("ORDER", "X")]
        assert stored["Status"] == "Pending"
        assert stored["CreatedUtc"] == clock()
        assert row.status == OrderStatus.PENDING
        assert finalize_queue.payloads()[0]["order_id"] == "X"
        assert finalize_queue.payloads()[0]["customer"] == "Alice"

    def test_redelivery_is_idempotent(self, seed, orders_table):
        raw = encode_order_message(OrderMessage(order_id="X", customer="Alice", total=1.0))
        seed.handle(raw)
        seed.handle(raw)

        assert list(orders_table.rows) == [("ORDER", "X")]
        assert orders_table.rows[("ORDER", "X")]["Status"] == "Pending"

    def test_assigns_missing_id_and_forwards_it(self, seed, orders_table, finalize_queue):
        row = seed.handle('{"customer": "NoId", "total": 3}')

        assert len(row.order_id) == 32
        assert ("ORDER", row.order_id) in orders_table.rows
        assert finalize_queue.payloads()[0]["order_id"] == row.order_id

    def test_missing_customer_is_unknown(self, seed, orders_table):
        seed.handle('{"order_id": "nc"}')
        assert orders_table.rows[("ORDER", "nc")]["Customer"] == "Unknown"
        assert orders_table.rows[("ORDER", "nc")]["Total"] == 0.0

    def test_legacy_message_accepted(self, seed, orders_table):
        seed.handle(json.dumps({"OrderId": "legacy", "Customer": "Old", "Total": 7}))
        assert orders_table.rows[("ORDER", "legacy")]["Customer"] == "Old"

    def test_malformed_message_raises_without_side_effects(self, seed, orders_table, finalize_queue):
        with pytest.raises(InvalidOrderMessageError):
            seed.handle("{not json")
        assert orders_table.rows == {}
        assert finalize_queue.messages == []

    def test_publish_failure_after_write_leaves_pending_row(self, seed, orders_table, finalize_queue):
        finalize_queue.fail_with = ServiceRequestError("down")
        with pytest.raises(QueuePublishError):
            seed.handle('{"order_id": "stuck"}')
        assert orders_table.rows[("ORDER", "stuck")]["Status"] == "Pending"


class TestFinalizeConsumer:
    def test_marks_existing_row_processed(self, seed, finalize, orders_table, clock):
        seed.handle('{"order_id": "X", "customer": "Alice", "total": 2}')
        done_at = clock.advance(seconds=3)

        row = finalize.handle('{"order_id": "X"}')

        stored = orders_table.rows[("ORDER", "X")]
        assert stored["Status"] == "Processed"
        assert stored["ProcessedUtc"] == done_at
        assert row.status == OrderStatus.PROCESSED

    def test_missing_row_is_noop(self, finalize, orders_table):
        assert finalize.handle('{"order_id": "ghost"}') is None
        assert orders_table.rows == {}

    def test_missing_order_id_is_dropped(self, finalize):
        assert finalize.handle('{"customer": "Nobody"}') is None

    def test_duplicate_finalize_reapplies_merge(self, seed, finalize, orders_table, clock):
        seed.handle('{"order_id": "dup"}')
        finalize.handle('{"order_id": "dup"}')
        second_at = clock.advance(minutes=1)
        finalize.handle('{"order_id": "dup"}')

        stored = orders_table.rows[("ORDER", "dup")]
        assert stored["Status"] == "Processed"
        assert stored["ProcessedUtc"] == second_at

    def test_concurrent_write_raises_and_leaves_row(self, repos, seed, orders_table, clock):
        seed.handle('{"order_id": "race"}')

        class RacingRepo:
            """Order repo whose row changes between get_order and mark_processed."""

            def __init__(self, inner):
                self.inner = inner

            def get_order(self, order_id):
                row = self.inner.get_order(order_id)
                orders_table.touch("ORDER", order_id, Customer="Concurrent")
                return row

            def mark_processed(self, row, processed_at):
                return self.inner.mark_processed(row, processed_at)

        racing = FinalizeConsumer(RacingRepo(repos["order_repo"]), clock=clock)
        with pytest.raises(OrderConcurrencyError):
            racing.handle('{"order_id": "race"}')

        stored = orders_table.rows[("ORDER", "race")]
        assert stored["Status"] == "Pending"
        assert "ProcessedUtc" not in stored

    def test_malformed_message_raises(self, finalize):
        with pytest.raises(InvalidOrderMessageError):
            finalize.handle("[]")


class TestEndToEnd:
    def test_alice_order_flows_to_processed(self, repos, gateway, seed, finalize,
                                            orders_queue, finalize_queue, monkeypatch):
        monkeypatch.setattr(gateway, "id_factory", lambda: "abc123")

        result = gateway.enqueue({"customer": "Alice", "total": 42.5})
        assert result.order_id == "abc123"

        stage1 = orders_queue.decoded()[0]
        assert json.loads(stage1)["order_id"] == "abc123"
        seed.handle(stage1)

        listing = OrderListingQuery(repos["order_repo"])
        assert listing.list(status=OrderStatus.PENDING)[0].order_id == "abc123"

        finalize.handle(finalize_queue.decoded()[0])

        items = [r.to_list_item() for r in listing.list()]
        assert len(items) == 1
        item = items[0]
        assert item["OrderId"] == "abc123"
        assert item["Customer"] == "Alice"
        assert item["Total"] == 42.5
        assert item["Status"] == "Processed"
        assert item["ProcessedUtc"] is not None


def test_new_order_id_is_32_hex_chars():
    order_id = new_order_id()
    assert len(order_id) == 32
    int(order_id, 16)
