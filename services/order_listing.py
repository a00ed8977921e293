"""
Order Listing Query.

Point-in-time scan of the order partition: optional status filter,
newest CreatedUtc first, truncated to top. Truncation happens after the
full (filtered) scan, which is fine at this table size.

Exports:
    OrderListingQuery
"""

from datetime import datetime, timezone
from typing import List, Optional

from core.models import OrderRow, OrderStatus
from infrastructure.interface_repository import IOrderRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "OrderListingQuery")

# Rows without CreatedUtc sort last
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class OrderListingQuery:

    def __init__(self, order_repo: IOrderRepository):
        self.order_repo = order_repo

    def list(self, status: Optional[OrderStatus] = None, top: int = 25) -> List[OrderRow]:
        if top <= 0:
            return []

        rows = self.order_repo.list_orders(status=status)
        rows.sort(key=lambda r: r.created_at or _OLDEST, reverse=True)

        logger.debug(f"📋 Listing {min(top, len(rows))} of {len(rows)} orders (status={status})")
        return rows[:top]
