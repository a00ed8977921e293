"""
Trigger fixtures: one TriggerContainer wired onto the storage fakes.
"""

import pytest


@pytest.fixture
def container(app_config, fake_clients, repos):
    from triggers.container import TriggerContainer
    return TriggerContainer.build(app_config, fake_clients, repositories=repos)
