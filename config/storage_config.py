# ============================================================================
# CLAUDE CONTEXT - STORAGE CONFIGURATION
# ============================================================================
# PURPOSE: Azure Storage configuration - connection resolution, resource names
# EXPORTS: StorageConfig, resolve_connection_string
# DEPENDENCIES: pydantic, os, typing
# SOURCE: Environment variables (StorageConnection, AzureWebJobsStorage,
#         STORAGE_ACCOUNT_NAME, OrdersTableName, BlobContainerName, ...)
# ============================================================================

"""
Azure Storage Configuration.

Provides configuration for:
- Connection string resolution (connection string or managed identity)
- Table names (Orders, Customers)
- Blob container for product images
- File share for contracts

Connection Resolution:
    StorageConnection may hold either a full connection string or the
    NAME of the setting that holds one. When unset, AzureWebJobsStorage
    is used, which is the same account the Functions host binds its
    queue triggers to.

    When no connection string resolves, STORAGE_ACCOUNT_NAME selects
    DefaultAzureCredential against https://{account}.{service}.core.windows.net
"""

import os
from typing import Optional, Mapping
from pydantic import BaseModel, Field

from .defaults import StorageDefaults


def _looks_like_connection_string(value: str) -> bool:
    lowered = value.lower()
    return "accountname=" in lowered or lowered.startswith("defaultendpointsprotocol=") \
        or lowered.startswith("usedevelopmentstorage=")


def resolve_connection_string(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Resolve the storage connection string from the environment.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Connection string, or None when nothing resolves
    """
    env = os.environ if env is None else env
    setting = env.get("StorageConnection") or StorageDefaults.STORAGE_CONNECTION_SETTING

    # A full connection string pasted into StorageConnection is used directly
    if _looks_like_connection_string(setting):
        return setting

    return (
        env.get(setting)
        or env.get(f"Values:{setting}")
        or env.get(f"ConnectionStrings:{setting}")
        or None
    )


class StorageConfig(BaseModel):
    """
    Azure Storage configuration.

    Exactly one of connection_string / account_name is needed to build
    clients; connection_string wins when both are present.
    """

    connection_string: Optional[str] = Field(
        default=None,
        repr=False,
        description="Storage connection string (resolved from StorageConnection / AzureWebJobsStorage)"
    )

    account_name: Optional[str] = Field(
        default=None,
        description="Storage account name for DefaultAzureCredential auth"
    )

    orders_table: str = Field(
        default=StorageDefaults.ORDERS_TABLE,
        description="Table holding order rows (single ORDER partition)"
    )

    customers_table: str = Field(
        default=StorageDefaults.CUSTOMERS_TABLE,
        description="Table holding customer rows"
    )

    product_images_container: str = Field(
        default=StorageDefaults.PRODUCT_IMAGES_CONTAINER,
        description="Blob container for product images"
    )

    contracts_share: str = Field(
        default=StorageDefaults.CONTRACTS_SHARE,
        description="File share for contract documents"
    )

    def service_url(self, service: str) -> str:
        """Account URL for a storage service ('table', 'queue', 'blob', 'file')."""
        return f"https://{self.account_name}.{service}.core.windows.net"

    def debug_dict(self) -> dict:
        """Sanitized view for diagnostics."""
        return {
            'connection_string': '***MASKED***' if self.connection_string else None,
            'account_name': self.account_name,
            'orders_table': self.orders_table,
            'customers_table': self.customers_table,
            'product_images_container': self.product_images_container,
            'contracts_share': self.contracts_share,
        }

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            connection_string=resolve_connection_string(),
            account_name=os.environ.get("STORAGE_ACCOUNT_NAME"),
            orders_table=os.environ.get("OrdersTableName", StorageDefaults.ORDERS_TABLE),
            customers_table=os.environ.get("CustomersTableName", StorageDefaults.CUSTOMERS_TABLE),
            product_images_container=os.environ.get(
                "BlobContainerName", StorageDefaults.PRODUCT_IMAGES_CONTAINER
            ),
            contracts_share=os.environ.get("ContractsShareName", StorageDefaults.CONTRACTS_SHARE),
        )
