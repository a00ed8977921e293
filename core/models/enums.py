"""
Pure Enumeration Types for Core Framework.

Defines valid states for orders.
No business logic - pure type definitions only.

Exports:
    OrderStatus: Order state enumeration
"""

from enum import Enum


class OrderStatus(str, Enum):
    """
    Valid status values for order rows.

    State transitions:
    - (absent) -> PENDING: seed consumer upserts the row
    - PENDING -> PROCESSED: finalize consumer merges the row

    Values are stored verbatim in the Status column. The listing
    parameter is matched case-insensitively (OrderListTrigger.parse_status)
    and the table filter then uses the stored value.
    """

    PENDING = "Pending"
    PROCESSED = "Processed"
