"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and accessor
    ├── app_config.py            # Main config (composes domain configs)
    ├── storage_config.py        # Connection resolution, tables, blobs, shares
    ├── queue_config.py          # Order relay queues
    ├── order_config.py          # Partition, sentinels, reconciler
    └── defaults.py              # Default values

Usage:
    from config import get_config
    config = get_config()
    queue = config.queues.orders_queue

    # Debug output
    from config import debug_config
    info = debug_config()  # Connection string masked
"""

from typing import Optional

from .storage_config import StorageConfig, resolve_connection_string
from .queue_config import QueueConfig
from .order_config import OrderConfig
from .app_config import AppConfig


# ============================================================================
# CACHED ACCESSOR
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the configuration loaded from the environment.

    Loaded on first call, after the Functions host has populated app
    settings, then reused for the life of the worker.
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads env."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).
    """
    config = get_config()
    return {
        'environment': config.environment,
        'debug_mode': config.debug_mode,
        'storage': config.storage.debug_dict(),
        'queues': {
            'orders_queue': config.queues.orders_queue,
            'orders_finalize_queue': config.queues.orders_finalize_queue,
            'base64_messages': config.queues.base64_messages,
        },
        'orders': config.orders.model_dump(),
    }


__all__ = [
    'AppConfig',
    'StorageConfig',
    'QueueConfig',
    'OrderConfig',
    'get_config',
    'reset_config',
    'debug_config',
    'resolve_connection_string',
]
