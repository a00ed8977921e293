# ============================================================================
# CLAUDE CONTEXT - PENDING ORDER RECONCILER TIMER TRIGGER
# ============================================================================
# STATUS: Timer Trigger - Stuck order re-drive
# PURPOSE: Republish finalize messages for stale Pending orders
# EXPORTS: PendingOrderTimerHandler
# DEPENDENCIES: services.order_reconciler, triggers.timer_base
# SCHEDULE: Every 10 minutes (0 */10 * * * *)
# ============================================================================

"""
Pending Order Reconciler Timer Trigger

Runs every 10 minutes. An order still Pending well after creation lost
its finalize message (worker died between the seed upsert and the
stage-2 publish, or the message went to the poison queue).

WHY 15 MINUTES?
- A healthy relay finalizes an order within seconds
- Queue visibility timeouts and host redelivery add a few minutes
- 15 minutes clears both without leaving orders stuck for long
"""

from typing import Dict, Any

from services.order_reconciler import PendingOrderReconciler
from triggers.timer_base import TimerHandlerBase


class PendingOrderTimerHandler(TimerHandlerBase):

    name = "PendingOrderReconciler"

    def __init__(self, reconciler: PendingOrderReconciler):
        super().__init__()
        self.reconciler = reconciler

    def execute(self) -> Dict[str, Any]:
        result = self.reconciler.run()

        if not result.enabled:
            health_status = "DISABLED"
        elif result.items_scanned == 0:
            health_status = "HEALTHY"
        else:
            health_status = "ORDERS_REDRIVEN"

        output = {
            **result.to_dict(),
            "health_status": health_status,
            "summary": {
                "scanned": result.items_scanned,
                "republished": result.items_republished,
                "failed": result.items_failed,
            },
        }
        if not result.success:
            output["error"] = f"{result.items_failed} orders could not be re-driven: {result.failed_ids}"
        return output
