# ============================================================================
# CLAUDE CONTEXT - ORDER HTTP TRIGGERS
# ============================================================================
# STATUS: HTTP Trigger - Order relay entry point and listing
# PURPOSE: POST /api/orders/enqueue, GET /api/orders
# EXPORTS: OrderEnqueueTrigger, OrderListTrigger
# INTERFACES: BaseHttpTrigger (http_base.py)
# DEPENDENCIES: services.order_pipeline, services.order_listing
# PATTERNS: Constructor injection, built once by function_app.py
# ============================================================================
"""
Order HTTP Triggers.

Enqueue:
    POST /api/orders/enqueue
    Body (all optional): {"order_id": "...", "customer": "...", "total": 42.5,
                          "timestamp": "..."}
    202 {"queued": true, "queue": "orders", "orderId": "..."}

Listing:
    GET /api/orders?top=25&status=Pending
    200 {"count": n, "items": [{OrderId, Customer, Total, Status,
                                CreatedUtc, ProcessedUtc}, ...]}
"""

from typing import Dict, Any, List, Optional

import azure.functions as func

from core.models import OrderStatus
from services.order_pipeline import EnqueueGateway
from services.order_listing import OrderListingQuery
from .http_base import BaseHttpTrigger


class OrderEnqueueTrigger(BaseHttpTrigger):
    """Accept an order and hand it to the stage-1 queue."""

    success_status_code = 202

    def __init__(self, gateway: EnqueueGateway):
        super().__init__("orders_enqueue")
        self.gateway = gateway

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_json_body(req, required=False)
        result = self.gateway.enqueue(body)
        return result.to_dict()


class OrderListTrigger(BaseHttpTrigger):
    """Newest-first order listing with optional status filter."""

    def __init__(self, listing: OrderListingQuery, default_top: int = 25):
        super().__init__("orders_list")
        self.listing = listing
        self.default_top = default_top

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def parse_top(self, raw: Optional[str]) -> int:
        """Non-integer falls back to the default; negative means zero."""
        if raw is None or raw.strip() == "":
            return self.default_top
        try:
            top = int(raw)
        except ValueError:
            return self.default_top
        return max(top, 0)

    def parse_status(self, raw: Optional[str]) -> Optional[OrderStatus]:
        """
        Match a status name case-insensitively.

        Raises:
            ValueError: Unknown status
        """
        if raw is None or raw.strip() == "":
            return None
        for status in OrderStatus:
            if status.value.lower() == raw.strip().lower():
                return status
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValueError(f"Unknown status '{raw}'. Allowed: {allowed}")

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        top = self.parse_top(req.params.get("top"))
        status = self.parse_status(req.params.get("status"))

        rows = self.listing.list(status=status, top=top)
        items = [row.to_list_item() for row in rows]
        return {
            "count": len(items),
            "items": items,
        }
