"""
Pending Order Reconciler - Stuck Order Re-drive.

The seed consumer writes the Pending row and then publishes to the
finalize queue with no transaction between the two. A worker that dies
in between leaves a row that nothing will ever finalize. This sweep finds
Pending rows older than the configured age and republishes a finalize
message for each. Finalize is idempotent, so re-driving an order that was
merely slow costs one extra merge.

Runs from a timer trigger (triggers/janitor/pending_orders.py).

Exports:
    PendingOrderReconciler: Sweep coordinator
    ReconcileRunResult: Result of one sweep
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from config import OrderConfig
from core.schema import OrderMessage
from exceptions import QueuePublishError
from infrastructure.interface_repository import IOrderRepository, IQueueRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "PendingOrderReconciler")


@dataclass
class ReconcileRunResult:
    """Result of a reconciliation sweep."""

    success: bool = True
    enabled: bool = True
    cutoff: Optional[datetime] = None
    items_scanned: int = 0
    items_republished: int = 0
    items_failed: int = 0
    republished_ids: List[str] = field(default_factory=list)
    failed_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "enabled": self.enabled,
            "cutoff": self.cutoff.isoformat() if self.cutoff else None,
            "items_scanned": self.items_scanned,
            "items_republished": self.items_republished,
            "items_failed": self.items_failed,
            "republished_ids": self.republished_ids,
            "failed_ids": self.failed_ids,
        }


class PendingOrderReconciler:
    """
    Republish finalize messages for stale Pending orders.

    Usage:
        reconciler = PendingOrderReconciler(order_repo, queue_repo, "orders-finalize", config)
        result = reconciler.run()
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        queue_repo: IQueueRepository,
        finalize_queue: str,
        config: Optional[OrderConfig] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.order_repo = order_repo
        self.queue_repo = queue_repo
        self.finalize_queue = finalize_queue
        self.config = config or OrderConfig()
        self.clock = clock

    def run(self) -> ReconcileRunResult:
        """
        Run one sweep.

        A publish failure for one order is counted and the sweep moves on;
        the row stays Pending and the next sweep picks it up again. Table
        errors propagate.
        """
        if not self.config.reconcile_enabled:
            logger.info("Reconciler disabled via configuration - skipping")
            return ReconcileRunResult(enabled=False)

        cutoff = self.clock() - timedelta(minutes=self.config.reconcile_after_minutes)
        result = ReconcileRunResult(cutoff=cutoff)

        stale = self.order_repo.list_pending_before(cutoff, self.config.reconcile_batch_size)
        result.items_scanned = len(stale)
        if not stale:
            logger.info(f"No Pending orders older than {cutoff.isoformat()}")
            return result

        logger.warning(f"🔁 Found {len(stale)} Pending orders older than {cutoff.isoformat()}")

        for row in stale:
            message = OrderMessage(
                order_id=row.order_id,
                customer=row.customer,
                total=row.total,
                timestamp=row.created_at,
            )
            try:
                self.queue_repo.send_message(self.finalize_queue, message)
            except QueuePublishError as e:
                logger.error(f"❌ Failed to re-drive order {row.order_id}: {e}")
                result.items_failed += 1
                result.failed_ids.append(row.order_id)
                continue
            result.items_republished += 1
            result.republished_ids.append(row.order_id)

        result.success = result.items_failed == 0
        logger.info(
            f"Reconciler re-drove {result.items_republished}/{result.items_scanned} orders "
            f"({result.items_failed} failed)"
        )
        return result
