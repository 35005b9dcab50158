"""
Tests for TrustRegistry snapshot handling and refresh scheduling.
"""

import asyncio

import pytest

from actiongate.core.registry import RegistrySnapshot, TrustRegistry
from actiongate.protocol.enums import TrustDomain, TrustLevel
from actiongate.protocol.errors import RegistryError

from fakes import FakeScheduler, StaticRegistrySource, registry_payload


def _registry(source, scheduler=None):
    return TrustRegistry(source, scheduler=scheduler or FakeScheduler(), refresh_interval=600)


class TestRegistrySnapshot:
    def test_from_payload_builds_tables(self):
        snapshot = RegistrySnapshot.from_payload(
            registry_payload(
                actions={"Actions.Example.com": "trusted"},
                websites={"example.com": "malicious"},
            )
        )

        assert snapshot.lookup(TrustDomain.ACTIONS, "actions.example.com") is TrustLevel.TRUSTED
        assert snapshot.lookup(TrustDomain.WEBSITES, "example.com") is TrustLevel.MALICIOUS
        assert snapshot.size == 2
        assert snapshot.fetched_at is not None

    def test_unrecognised_state_is_unknown(self):
        snapshot = RegistrySnapshot.from_payload(registry_payload(actions={"a.example": "suspicious"}))
        assert snapshot.lookup(TrustDomain.ACTIONS, "a.example") is TrustLevel.UNKNOWN

    def test_tables_are_read_only(self):
        snapshot = RegistrySnapshot.from_payload(registry_payload(actions={"a.example": "trusted"}))
        with pytest.raises(TypeError):
            snapshot.actions["b.example"] = TrustLevel.TRUSTED

    def test_invalid_payload_raises(self):
        with pytest.raises(RegistryError):
            RegistrySnapshot.from_payload({"actions": "nope"})
        with pytest.raises(RegistryError):
            RegistrySnapshot.from_payload({"actions": [{"state": "trusted"}]})


class TestClassify:
    def test_empty_registry_classifies_unknown(self):
        registry = _registry(StaticRegistrySource())
        assert registry.classify(TrustDomain.ACTIONS, "https://a.example/api") is TrustLevel.UNKNOWN
        assert registry.loaded is False

    def test_lookup_by_url_host(self):
        registry = _registry(StaticRegistrySource())
        registry.load(registry_payload(actions={"a.example": "trusted"}, interstitials={"dial.to": "malicious"}))

        assert registry.action_state("https://A.example/api/x?y=1") is TrustLevel.TRUSTED
        assert registry.action_state("a.example") is TrustLevel.TRUSTED
        assert registry.interstitial_state("https://dial.to/?action=x") is TrustLevel.MALICIOUS
        assert registry.website_state("https://a.example") is TrustLevel.UNKNOWN

    def test_default_port_and_userinfo_match_registered_host(self):
        registry = _registry(StaticRegistrySource())
        registry.load(registry_payload(actions={"a.example": "trusted"}))

        assert registry.action_state("https://a.example:443/api") is TrustLevel.TRUSTED
        assert registry.action_state("https://someone@a.example/api") is TrustLevel.TRUSTED
        assert registry.action_state("https://a.example:8443/api") is TrustLevel.UNKNOWN

    def test_empty_identifier_is_unknown(self):
        registry = _registry(StaticRegistrySource())
        assert registry.classify(TrustDomain.WEBSITES, "") is TrustLevel.UNKNOWN


class TestRefresh:
    @pytest.mark.asyncio
    async def test_init_loads_snapshot(self):
        source = StaticRegistrySource(registry_payload(actions={"a.example": "trusted"}))
        registry = _registry(source)

        await registry.init()

        assert registry.loaded is True
        assert registry.action_state("https://a.example") is TrustLevel.TRUSTED

    @pytest.mark.asyncio
    async def test_init_is_idempotent_and_shared(self):
        source = StaticRegistrySource()
        registry = _registry(source)

        await asyncio.gather(registry.init(), registry.init(), registry.init())
        await registry.init()

        assert source.calls == 1

    @pytest.mark.asyncio
    async def test_init_failure_is_silent(self):
        registry = _registry(StaticRegistrySource(fail=True))

        await registry.init()

        assert registry.loaded is False
        assert registry.action_state("https://a.example") is TrustLevel.UNKNOWN

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_snapshot(self):
        source = StaticRegistrySource(registry_payload(actions={"a.example": "trusted"}))
        registry = _registry(source)
        await registry.refresh()
        before = registry.snapshot

        source.fail = True
        assert await registry.refresh() is False

        assert registry.snapshot is before
        assert registry.action_state("https://a.example") is TrustLevel.TRUSTED

    @pytest.mark.asyncio
    async def test_malformed_payload_keeps_previous_snapshot(self):
        source = StaticRegistrySource(registry_payload(actions={"a.example": "trusted"}))
        registry = _registry(source)
        await registry.refresh()

        source.payload = ["not", "a", "registry"]
        assert await registry.refresh() is False
        assert registry.action_state("https://a.example") is TrustLevel.TRUSTED

    @pytest.mark.asyncio
    async def test_refresh_replaces_snapshot_wholesale(self):
        source = StaticRegistrySource(registry_payload(actions={"a.example": "trusted"}))
        registry = _registry(source)
        await registry.refresh()
        first = registry.snapshot

        source.payload = registry_payload(actions={"a.example": "malicious"})
        await registry.refresh()

        assert registry.snapshot is not first
        assert first.lookup(TrustDomain.ACTIONS, "a.example") is TrustLevel.TRUSTED
        assert registry.action_state("https://a.example") is TrustLevel.MALICIOUS


class TestScheduling:
    @pytest.mark.asyncio
    async def test_start_schedules_refresh_every_interval(self):
        scheduler = FakeScheduler()
        source = StaticRegistrySource()
        registry = _registry(source, scheduler)

        await registry.start()
        assert source.calls == 1
        assert [d for d, _, _ in scheduler.pending] == [600]

        await scheduler.fire_next()
        assert source.calls == 2
        assert len(scheduler.pending) == 1

    @pytest.mark.asyncio
    async def test_refresh_loop_survives_failures(self):
        scheduler = FakeScheduler()
        source = StaticRegistrySource(fail=True)
        registry = _registry(source, scheduler)

        await registry.start()
        await scheduler.fire_next()
        await scheduler.fire_next()

        assert source.calls == 3
        assert len(scheduler.pending) == 1
        assert registry.running is True

    @pytest.mark.asyncio
    async def test_start_twice_does_not_double_schedule(self):
        scheduler = FakeScheduler()
        registry = _registry(StaticRegistrySource(), scheduler)

        await registry.start()
        await registry.start()

        assert len(scheduler.pending) == 1

    @pytest.mark.asyncio
    async def test_stop_cancels_pending_refresh(self):
        scheduler = FakeScheduler()
        registry = _registry(StaticRegistrySource(), scheduler)

        await registry.start()
        registry.stop()

        assert scheduler.pending == []
        assert registry.running is False


class TestSingleton:
    def test_get_instance_returns_same_registry(self):
        first = TrustRegistry.get_instance(StaticRegistrySource(), scheduler=FakeScheduler())
        second = TrustRegistry.get_instance()
        assert first is second

    def test_reset_instance(self):
        first = TrustRegistry.get_instance(StaticRegistrySource(), scheduler=FakeScheduler())
        TrustRegistry.reset_instance()
        second = TrustRegistry.get_instance(StaticRegistrySource(), scheduler=FakeScheduler())
        assert first is not second
