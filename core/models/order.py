# ============================================================================
# ORDER ROW MODEL
# ============================================================================
# STATUS: Core - Orders table row representation
# PURPOSE: Typed view of one row in the Orders table plus entity mapping
# ============================================================================
"""
Order Row Model.

Pydantic model for a persisted order row. The Orders table keeps every
order in a single partition with the order id as row key:

    PartitionKey  ORDER
    RowKey        order_id
    Customer      str
    Total         float (Edm.Double)
    Status        "Pending" | "Processed"
    CreatedUtc    datetime
    ProcessedUtc  datetime (absent until finalized)

Exports:
    OrderRow: Persisted order row
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional, Mapping
from pydantic import BaseModel, Field, field_validator

from .enums import OrderStatus


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _as_datetime(value: Any) -> Optional[datetime]:
    """Stored timestamps are datetimes; anything else reads as absent."""
    return value if isinstance(value, datetime) else None


def _as_float(value: Any) -> float:
    """Lenient Total read: numbers and numeric strings convert, anything else is 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class OrderRow(BaseModel):
    """
    Persisted order row.

    Fields:
    - order_id: Row key, immutable join key across the relay
    - customer: Customer display name
    - total: Non-negative order total
    - status: Pending or Processed
    - created_at: First write by the seed consumer
    - processed_at: Set by the finalize consumer
    - etag: Version token from the last read (not persisted as a column)
    """

    order_id: str = Field(..., min_length=1)
    customer: str = Field(default="Unknown")
    total: float = Field(default=0.0, ge=0)
    status: Optional[OrderStatus] = None
    created_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None
    etag: Optional[str] = Field(default=None, exclude=True)

    @field_validator('created_at', 'processed_at')
    @classmethod
    def _normalize_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def to_entity(self, partition_key: str) -> Dict[str, Any]:
        """
        Convert to a table entity dict.

        Total is always written as float so the column stays Edm.Double
        even for whole-number totals.
        """
        entity: Dict[str, Any] = {
            'PartitionKey': partition_key,
            'RowKey': self.order_id,
            'Customer': self.customer,
            'Total': float(self.total),
        }
        if self.status is not None:
            entity['Status'] = self.status.value
        if self.created_at is not None:
            entity['CreatedUtc'] = self.created_at
        if self.processed_at is not None:
            entity['ProcessedUtc'] = self.processed_at
        return entity

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "OrderRow":
        """
        Build from a table entity.

        Rows written by other tools may lack columns or carry a status
        outside the enum; missing values fall back to defaults and an
        unrecognized status is kept as None.

        The write-side field rules are not re-applied: a stored negative
        Total is returned as stored, so one odd row cannot fail a listing
        or a finalize.
        """
        raw_status = entity.get('Status')
        try:
            status = OrderStatus(raw_status) if raw_status else None
        except ValueError:
            status = None

        metadata = getattr(entity, 'metadata', None) or {}

        return cls.model_construct(
            order_id=str(entity['RowKey']),
            customer=entity.get('Customer') or "Unknown",
            total=_as_float(entity.get('Total')),
            status=status,
            created_at=_as_utc(_as_datetime(entity.get('CreatedUtc'))),
            processed_at=_as_utc(_as_datetime(entity.get('ProcessedUtc'))),
            etag=metadata.get('etag'),
        )

    def to_list_item(self) -> Dict[str, Any]:
        """Shape used by the listing endpoint."""
        return {
            'OrderId': self.order_id,
            'Customer': self.customer,
            'Total': self.total,
            'Status': self.status.value if self.status else "",
            'CreatedUtc': self.created_at.isoformat() if self.created_at else None,
            'ProcessedUtc': self.processed_at.isoformat() if self.processed_at else None,
        }
