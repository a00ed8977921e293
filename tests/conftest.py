"""
Root conftest.py: sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials. Storage is replaced by the in-memory fakes
in tests/factories/storage_fakes.py.
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Add project root to sys.path so 'core', 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import crashes.
    """
    defaults = {
        "AzureWebJobsStorage": "UseDevelopmentStorage=true",
        "OrdersQueueName": "orders",
        "OrdersFinalizeQueueName": "orders-finalize",
        "ENVIRONMENT": "dev",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 10, 19, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def app_config():
    """AppConfig built from defaults only (no environment)."""
    from config import AppConfig
    return AppConfig()


@pytest.fixture
def fake_clients():
    from tests.factories.storage_fakes import make_fake_clients
    return make_fake_clients()


@pytest.fixture
def repos(fake_clients, app_config):
    from infrastructure.factory import RepositoryFactory
    return RepositoryFactory.create_repositories(fake_clients, app_config)


@pytest.fixture
def orders_table(fake_clients, repos):
    return fake_clients.tables.get_table_client("Orders")


@pytest.fixture
def orders_queue(fake_clients):
    return fake_clients.queues.get_queue_client("orders")


@pytest.fixture
def finalize_queue(fake_clients):
    return fake_clients.queues.get_queue_client("orders-finalize")
