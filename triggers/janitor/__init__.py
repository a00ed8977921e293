"""
Janitor Triggers Package.

Timer triggers for order relay maintenance.

Exports:
    PendingOrderTimerHandler: Re-drives orders stuck in Pending
"""

from .pending_orders import PendingOrderTimerHandler

__all__ = [
    'PendingOrderTimerHandler',
]
