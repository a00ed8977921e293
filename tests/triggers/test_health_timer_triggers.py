"""
Health endpoint, ping, and the pending order reconciler timer.
"""

import json
from types import SimpleNamespace

import pytest
from azure.core.exceptions import HttpResponseError

from core.schema import OrderMessage
from services.order_reconciler import PendingOrderReconciler
from tests.factories.model_factories import make_http_request, make_order_row
from triggers.janitor import PendingOrderTimerHandler
from triggers.ping import ping_handler


def _json(response):
    return json.loads(response.get_body())


def _timer(past_due=False):
    return SimpleNamespace(past_due=past_due)


class TestHealthCheck:
    def test_healthy(self, container):
        response = container.health.handle_request(make_http_request("GET", "/api/health"))

        assert response.status_code == 200
        data = _json(response)
        assert data["status"] == "healthy"
        assert set(data["components"]) == {"orders_table", "orders_queue", "orders_finalize_queue"}
        assert data["errors"] == []
        assert "no-cache" in response.headers["Cache-Control"]

    def test_reports_queue_depth(self, container, repos):
        repos["queue_repo"].send_message("orders", OrderMessage(order_id="depth"))
        data = _json(container.health.handle_request(make_http_request("GET", "/api/health")))
        assert data["components"]["orders_queue"]["details"]["approximate_message_count"] == 1

    def test_table_outage_is_503(self, container, orders_table):
        orders_table.fail_with = HttpResponseError(message="table offline")

        response = container.health.handle_request(make_http_request("GET", "/api/health"))

        assert response.status_code == 503
        data = _json(response)
        assert data["status"] == "unhealthy"
        assert data["components"]["orders_table"]["status"] == "unhealthy"
        assert data["errors"][0].startswith("orders_table")

    def test_post_is_405(self, container):
        assert container.health.handle_request(make_http_request("POST", "/api/health")).status_code == 405


def test_ping_is_plain_ok():
    response = ping_handler(make_http_request("GET", "/api/ping"))
    assert response.status_code == 200
    assert response.get_body() == b"OK"
    assert response.mimetype == "text/plain"


class TestPendingOrderTimerHandler:
    @pytest.fixture
    def handler(self, repos, app_config, clock):
        reconciler = PendingOrderReconciler(
            repos["order_repo"], repos["queue_repo"], "orders-finalize", app_config.orders, clock=clock
        )
        return PendingOrderTimerHandler(reconciler)

    def test_healthy_when_nothing_stale(self, handler):
        result = handler.handle(_timer())
        assert result["success"] is True
        assert result["health_status"] == "HEALTHY"
        assert "duration_seconds" in result

    def test_redrives_stale_orders(self, handler, repos, clock, finalize_queue):
        from datetime import timedelta
        repos["order_repo"].upsert_pending(make_order_row(order_id="old", created_at=clock() - timedelta(hours=1)))

        result = handler.handle(_timer(past_due=True))

        assert result["health_status"] == "ORDERS_REDRIVEN"
        assert result["summary"] == {"scanned": 1, "republished": 1, "failed": 0}
        assert finalize_queue.payloads()[0]["order_id"] == "old"

    def test_table_error_returns_failure_dict(self, handler, orders_table):
        orders_table.fail_with = HttpResponseError(message="table offline")

        result = handler.handle(_timer())

        assert result["success"] is False
        assert result["error_type"] == "OrderStoreError"

    def test_disabled(self, repos, clock):
        from config import OrderConfig
        reconciler = PendingOrderReconciler(
            repos["order_repo"], repos["queue_repo"], "orders-finalize",
            OrderConfig(reconcile_enabled=False), clock=clock,
        )
        result = PendingOrderTimerHandler(reconciler).handle(_timer())
        assert result["health_status"] == "DISABLED"
