import pytest

from actiongate.core.action import ActionModel
from actiongate.core.registry import TrustRegistry
from actiongate.core.settings import get_settings

from fakes import (
    ACTION_URL,
    FakeScheduler,
    FakeTransport,
    ScriptedAdapter,
    StaticRegistrySource,
    action_payload,
)


@pytest.fixture(autouse=True)
def _isolate_singletons():
    get_settings.cache_clear()
    TrustRegistry.reset_instance()
    yield
    TrustRegistry.reset_instance()
    get_settings.cache_clear()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def registry(scheduler):
    return TrustRegistry(StaticRegistrySource(), scheduler=scheduler, refresh_interval=600)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def adapter():
    return ScriptedAdapter()


@pytest.fixture
def action(adapter, transport):
    return ActionModel.from_payload(ACTION_URL, action_payload(), adapter, transport)
