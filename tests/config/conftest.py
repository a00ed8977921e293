"""
Config test fixtures: clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "AzureWebJobsStorage", "StorageConnection", "STORAGE_ACCOUNT_NAME",
        "OrdersQueueName", "OrdersFinalizeQueueName", "ORDERS_QUEUE_MESSAGE_ENCODING",
        "OrdersTableName", "CustomersTableName", "BlobContainerName", "ContractsShareName",
        "ORDERS_LIST_DEFAULT_TOP", "ORDERS_RECONCILE_ENABLED",
        "ORDERS_RECONCILE_AFTER_MINUTES", "ORDERS_RECONCILE_BATCH_SIZE",
        "ENVIRONMENT", "DEBUG_MODE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)

    from config import reset_config
    reset_config()
    yield monkeypatch
    reset_config()
