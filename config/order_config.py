"""
Order Relay Configuration.

Provides configuration for:
    - Table partition and sentinel customer names
    - Listing defaults
    - Pending order reconciliation sweep

Exports:
    OrderConfig: Pydantic order configuration model
"""

import os
from pydantic import BaseModel, Field

from .defaults import OrderDefaults


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class OrderConfig(BaseModel):
    """
    Order relay configuration.

    Reconciler:
        Pending rows older than reconcile_after_minutes get a fresh
        stage-2 message. Finalize is idempotent, so a duplicate message
        for an order that was merely slow is harmless.
    """

    partition_key: str = Field(
        default=OrderDefaults.PARTITION_KEY,
        description="Single table partition shared by all orders"
    )

    anonymous_customer: str = Field(
        default=OrderDefaults.ANONYMOUS_CUSTOMER,
        description="Customer name assigned by the gateway when none is supplied"
    )

    unknown_customer: str = Field(
        default=OrderDefaults.UNKNOWN_CUSTOMER,
        description="Customer name written by the seed consumer when a message has none"
    )

    list_default_top: int = Field(
        default=OrderDefaults.LIST_DEFAULT_TOP,
        ge=0,
        description="Rows returned by the listing when ?top is absent or invalid"
    )

    reconcile_enabled: bool = Field(
        default=OrderDefaults.RECONCILE_ENABLED,
        description="Enable the pending order reconciliation sweep"
    )

    reconcile_after_minutes: int = Field(
        default=OrderDefaults.RECONCILE_AFTER_MINUTES,
        ge=1,
        description="Age after which a Pending row is considered stuck"
    )

    reconcile_batch_size: int = Field(
        default=OrderDefaults.RECONCILE_BATCH_SIZE,
        ge=1,
        le=1000,
        description="Maximum orders re-driven per sweep"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            list_default_top=int(os.environ.get(
                "ORDERS_LIST_DEFAULT_TOP", str(OrderDefaults.LIST_DEFAULT_TOP)
            )),
            reconcile_enabled=_env_bool("ORDERS_RECONCILE_ENABLED", OrderDefaults.RECONCILE_ENABLED),
            reconcile_after_minutes=int(os.environ.get(
                "ORDERS_RECONCILE_AFTER_MINUTES", str(OrderDefaults.RECONCILE_AFTER_MINUTES)
            )),
            reconcile_batch_size=int(os.environ.get(
                "ORDERS_RECONCILE_BATCH_SIZE", str(OrderDefaults.RECONCILE_BATCH_SIZE)
            )),
        )
