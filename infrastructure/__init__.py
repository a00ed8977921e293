"""
Infrastructure Package - Lazy Loading Implementation.

Repository classes are imported on first attribute access. The Functions
host imports function_app.py before app settings and managed identity
are guaranteed to be ready, so nothing here may read configuration or
build SDK clients at import time.
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .storage_clients import StorageClients as _StorageClients
    from .order_repository import OrderTableRepository as _OrderTableRepository
    from .customer_repository import CustomerTableRepository as _CustomerTableRepository
    from .queue import QueueRepository as _QueueRepository
    from .blob import BlobRepository as _BlobRepository
    from .file_share import FileShareRepository as _FileShareRepository


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    # Factory - most common import
    if name == "RepositoryFactory":
        from .factory import RepositoryFactory
        return RepositoryFactory
    elif name == "StorageClients":
        from .storage_clients import StorageClients
        return StorageClients

    # Table repositories
    elif name == "OrderTableRepository":
        from .order_repository import OrderTableRepository
        return OrderTableRepository
    elif name == "CustomerTableRepository":
        from .customer_repository import CustomerTableRepository
        return CustomerTableRepository

    # Queue / blob / file share
    elif name == "QueueRepository":
        from .queue import QueueRepository
        return QueueRepository
    elif name == "BlobRepository":
        from .blob import BlobRepository
        return BlobRepository
    elif name == "FileShareRepository":
        from .file_share import FileShareRepository
        return FileShareRepository

    # Interfaces
    elif name in ("IOrderRepository", "IQueueRepository", "ICustomerRepository",
                  "IBlobRepository", "IFileShareRepository"):
        from . import interface_repository
        return getattr(interface_repository, name)

    else:
        raise AttributeError(f"module 'infrastructure' has no attribute '{name}'")


__all__ = [
    "RepositoryFactory",
    "StorageClients",
    "OrderTableRepository",
    "CustomerTableRepository",
    "QueueRepository",
    "BlobRepository",
    "FileShareRepository",
    "IOrderRepository",
    "IQueueRepository",
    "ICustomerRepository",
    "IBlobRepository",
    "IFileShareRepository",
]
