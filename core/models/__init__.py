"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    OrderStatus: Order status enum
    OrderRow: Orders table row
    Customer, CustomerCreateRequest: Customer directory models
"""

from .enums import OrderStatus
from .order import OrderRow
from .customer import Customer, CustomerCreateRequest

__all__ = [
    'OrderStatus',
    'OrderRow',
    'Customer',
    'CustomerCreateRequest',
]
