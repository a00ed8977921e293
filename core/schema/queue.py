"""
Queue Message Schemas - Transport Boundary.

Message envelope for the order relay. The same envelope travels on both
storage queues:

    orders           gateway -> seed consumer (fully populated)
    orders-finalize  seed consumer -> finalize consumer (order_id resolved)

Wire format (JSON object, keys snake_case):
    {"order_id": "...", "customer": "...", "total": 42.5,
     "timestamp": "2025-10-19T12:00:00Z"}

Legacy Publisher Compatibility:
    The previous publisher wrote PascalCase keys (OrderId, Customer,
    Total, TimestampUtc) and its readers matched keys case-insensitively.
    Decoding therefore folds case and underscores before validation.
    This is a compatibility shim for messages already in flight; encode
    always writes the canonical snake_case keys.

Exports:
    OrderMessage: Order envelope
    encode_order_message: OrderMessage -> JSON text
    decode_order_message: JSON text/bytes -> OrderMessage
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from exceptions import InvalidOrderMessageError


# Folded key -> canonical field name
_KEY_ALIASES: Dict[str, str] = {
    'orderid': 'order_id',
    'customer': 'customer',
    'total': 'total',
    'timestamp': 'timestamp',
    'timestamputc': 'timestamp',
}


def _fold(key: str) -> str:
    return key.replace('_', '').lower()


class OrderMessage(BaseModel):
    """
    Order envelope carried on the relay queues.

    Every field is optional on the wire: the gateway fills defaults
    before publishing, and the seed consumer resolves a missing id.
    """

    model_config = ConfigDict(extra='ignore')

    order_id: Optional[str] = Field(default=None, description="Business key / table row key")
    customer: Optional[str] = Field(default=None, description="Customer display name")
    total: Optional[float] = Field(default=None, ge=0, description="Order total, non-negative")
    timestamp: Optional[datetime] = Field(default=None, description="Order creation time (UTC)")

    @model_validator(mode='before')
    @classmethod
    def _fold_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        folded: Dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            canonical = _KEY_ALIASES.get(_fold(key))
            # First occurrence wins when a payload carries both spellings
            if canonical and canonical not in folded:
                folded[canonical] = value
        return folded

    @field_validator('order_id')
    @classmethod
    def _blank_id_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    def with_order_id(self, order_id: str) -> "OrderMessage":
        """Copy of this message carrying the resolved order id."""
        return self.model_copy(update={'order_id': order_id})


def encode_order_message(message: OrderMessage) -> str:
    """Serialize an envelope to canonical JSON text."""
    return message.model_dump_json()


def decode_order_message(raw: Union[str, bytes, bytearray]) -> OrderMessage:
    """
    Deserialize an envelope.

    A JSON null decodes to an empty envelope.

    Raises:
        InvalidOrderMessageError: Body is not UTF-8, not JSON, not an
            object, or a field has the wrong type / a negative total
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidOrderMessageError(f"Order message is not valid UTF-8: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidOrderMessageError(f"Order message is not valid JSON: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidOrderMessageError(
            f"Order message must be a JSON object, got {type(data).__name__}"
        )

    try:
        return OrderMessage.model_validate(data)
    except ValidationError as e:
        raise InvalidOrderMessageError(f"Order message failed validation: {e}") from e
