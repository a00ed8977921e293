"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - StorageConfig (connection resolution, tables, container, share)
    - QueueConfig (order relay queues)
    - OrderConfig (partition, defaults, reconciler)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os
from pydantic import BaseModel, Field

from .storage_config import StorageConfig
from .queue_config import QueueConfig
from .order_config import OrderConfig
from .defaults import AppDefaults


class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable verbose diagnostics. Set DEBUG_MODE=true to enable."
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)"
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    queues: QueueConfig = Field(default_factory=QueueConfig)
    orders: OrderConfig = Field(default_factory=OrderConfig)

    @property
    def storage_account_name(self):
        """Shortcut used in health output and logs."""
        return self.storage.account_name

    @classmethod
    def from_environment(cls) -> "AppConfig":
        """Load all domain configs from environment variables."""
        return cls(
            debug_mode=os.environ.get("DEBUG_MODE", "false").lower() == "true",
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            storage=StorageConfig.from_environment(),
            queues=QueueConfig.from_environment(),
            orders=OrderConfig.from_environment(),
        )
