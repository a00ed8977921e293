"""
Triggers Package.

Azure Functions HTTP, queue and timer trigger implementations.

HTTP Endpoints:
    /api/ping: Liveness probe (plain "OK")
    /api/health: Orders table and queue health
    /api/orders/enqueue: Order relay entry point
    /api/orders: Order listing
    /api/customers[/{partition}/{id}]: Customer directory
    /api/products/images: Product image upload
    /api/contracts/files: Contract file save

Exports:
    Base classes only; trigger instances are built by function_app.py
"""

# Only import base classes to avoid initialization at import time
from .http_base import BaseHttpTrigger, SystemMonitoringTrigger

__all__ = [
    'BaseHttpTrigger',
    'SystemMonitoringTrigger',
]
