"""
Services Package - Order Relay Business Logic.

Every service receives its repositories through the constructor; the
composition root in function_app.py builds them once per worker.

Exports:
    EnqueueGateway: Normalize and publish to stage 1
    SeedConsumer: Stage 1 consumer (Pending upsert + forward)
    FinalizeConsumer: Stage 2 consumer (conditional merge to Processed)
    OrderListingQuery: Newest-first filtered listing
    PendingOrderReconciler: Re-drive stale Pending orders
"""

from .order_pipeline import EnqueueGateway, EnqueueResult, SeedConsumer, FinalizeConsumer
from .order_listing import OrderListingQuery
from .order_reconciler import PendingOrderReconciler, ReconcileRunResult

__all__ = [
    'EnqueueGateway',
    'EnqueueResult',
    'SeedConsumer',
    'FinalizeConsumer',
    'OrderListingQuery',
    'PendingOrderReconciler',
    'ReconcileRunResult',
]
