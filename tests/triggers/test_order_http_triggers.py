"""
POST /api/orders/enqueue and GET /api/orders.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from core.models import OrderStatus
from tests.factories.model_factories import make_http_request, make_order_request, make_order_row
from triggers.orders import OrderListTrigger


def _json(response):
    return json.loads(response.get_body())


class TestOrderEnqueueTrigger:
    def test_returns_202_with_order_id(self, container, orders_queue):
        body = make_order_request()
        response = container.orders_enqueue.handle_request(
            make_http_request("POST", "/api/orders/enqueue", body=body)
        )

        assert response.status_code == 202
        data = _json(response)
        assert data["queued"] is True
        assert data["queue"] == "orders"
        assert data["orderId"] == body["order_id"]
        assert response.headers["X-Request-ID"] == data["request_id"]
        assert orders_queue.payloads()[0]["customer"] == body["customer"]

    def test_empty_body_enqueues_defaults(self, container, orders_queue):
        response = container.orders_enqueue.handle_request(make_http_request("POST", "/api/orders/enqueue"))

        assert response.status_code == 202
        payload = orders_queue.payloads()[0]
        assert payload["order_id"] == _json(response)["orderId"]
        assert payload["customer"] == "Anonymous"
        assert payload["total"] == 0.0

    def test_negative_total_is_400(self, container, orders_queue):
        response = container.orders_enqueue.handle_request(
            make_http_request("POST", "/api/orders/enqueue", body=make_order_request(total=-1))
        )
        assert response.status_code == 400
        assert orders_queue.messages == []

    def test_invalid_json_is_400(self, container):
        response = container.orders_enqueue.handle_request(
            make_http_request("POST", "/api/orders/enqueue", raw_body=b"{oops")
        )
        assert response.status_code == 400
        assert _json(response)["error"] == "Bad request"

    def test_array_body_is_400(self, container):
        response = container.orders_enqueue.handle_request(
            make_http_request("POST", "/api/orders/enqueue", body=[1, 2])
        )
        assert response.status_code == 400

    def test_get_is_405(self, container):
        response = container.orders_enqueue.handle_request(make_http_request("GET", "/api/orders/enqueue"))
        assert response.status_code == 405

    def test_queue_outage_is_500(self, container, orders_queue):
        from azure.core.exceptions import ServiceRequestError
        orders_queue.fail_with = ServiceRequestError("queue unreachable")

        response = container.orders_enqueue.handle_request(make_http_request("POST", "/api/orders/enqueue"))

        assert response.status_code == 500
        assert "debug" in _json(response)


class TestOrderListTrigger:
    @pytest.fixture
    def seeded(self, repos):
        repo = repos["order_repo"]
        base = datetime(2025, 10, 19, 12, 0, tzinfo=timezone.utc)
        for i in range(30):
            repo.upsert_pending(make_order_row(order_id=f"o{i:02d}", created_at=base + timedelta(minutes=i)))
        repo.mark_processed(repo.get_order("o03"), base)
        return repo

    def _list(self, container, **params):
        return container.orders_list.handle_request(make_http_request("GET", "/api/orders", params=params))

    def test_default_top_25_newest_first(self, container, seeded):
        data = _json(self._list(container))
        assert data["count"] == 25
        assert data["items"][0]["OrderId"] == "o29"
        assert set(data["items"][0]) == {"OrderId", "Customer", "Total", "Status", "CreatedUtc", "ProcessedUtc"}

    def test_top_param(self, container, seeded):
        assert _json(self._list(container, top="2"))["count"] == 2

    def test_status_filter_case_insensitive(self, container, seeded):
        data = _json(self._list(container, status="processed"))
        assert data["count"] == 1
        assert data["items"][0]["OrderId"] == "o03"
        assert data["items"][0]["ProcessedUtc"] is not None

    def test_unknown_status_is_400(self, container, seeded):
        response = self._list(container, status="Shipped")
        assert response.status_code == 400
        assert "Pending" in _json(response)["message"]

    def test_empty_table(self, container):
        data = _json(self._list(container))
        assert data["count"] == 0
        assert data["items"] == []


class TestListParameterParsing:
    @pytest.fixture
    def trigger(self):
        return OrderListTrigger(listing=None, default_top=25)

    @pytest.mark.parametrize("raw,expected", [
        (None, 25),
        ("", 25),
        ("abc", 25),
        ("2.5", 25),
        ("10", 10),
        ("0", 0),
        ("-3", 0),
    ])
    def test_parse_top(self, trigger, raw, expected):
        assert trigger.parse_top(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        ("", None),
        ("Pending", OrderStatus.PENDING),
        ("PROCESSED", OrderStatus.PROCESSED),
        (" pending ", OrderStatus.PENDING),
    ])
    def test_parse_status(self, trigger, raw, expected):
        assert trigger.parse_status(raw) == expected

    def test_parse_status_rejects_unknown(self, trigger):
        with pytest.raises(ValueError):
            trigger.parse_status("Cancelled")


class TestListingToleratesForeignRows:
    def test_negative_total_row_is_listed(self, container, repos, orders_table):
        repos["order_repo"].upsert_pending(make_order_row(order_id="ok"))
        orders_table.rows[("ORDER", "neg")] = {
            "PartitionKey": "ORDER", "RowKey": "neg", "Customer": "Legacy",
            "Total": -5.0, "Status": "Pending",
        }
        orders_table.etags[("ORDER", "neg")] = "W/neg"

        response = container.orders_list.handle_request(make_http_request("GET", "/api/orders"))

        assert response.status_code == 200
        items = {item["OrderId"]: item for item in _json(response)["items"]}
        assert set(items) == {"ok", "neg"}
        assert items["neg"]["Total"] == -5.0

    def test_negative_total_row_still_finalizes(self, container, orders_table):
        from tests.factories.model_factories import make_queue_message

        orders_table.rows[("ORDER", "neg")] = {
            "PartitionKey": "ORDER", "RowKey": "neg", "Total": -5.0, "Status": "Pending",
        }
        orders_table.etags[("ORDER", "neg")] = "W/neg"

        container.orders_finalize.handle(make_queue_message({"order_id": "neg"}))

        assert orders_table.rows[("ORDER", "neg")]["Status"] == "Processed"
