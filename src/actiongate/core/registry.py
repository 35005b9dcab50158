# actiongate/core/registry.py

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from actiongate.protocol.enums import TrustDomain, TrustLevel
from actiongate.protocol.validators import validate_registry_payload
from actiongate.utils.timestamps import now_iso
from actiongate.utils.url import get_host

from .scheduler import AsyncioScheduler, ScheduledHandle, Scheduler
from .settings import get_settings

logger = logging.getLogger("actiongate.registry")

_EMPTY: Mapping[str, TrustLevel] = MappingProxyType({})


@dataclass(frozen=True)
class RegistrySnapshot:
    """
    Immutable host -> TrustLevel tables, one per domain.

    The registry swaps whole snapshots; a snapshot is never edited after
    construction.
    """
    actions: Mapping[str, TrustLevel] = field(default_factory=lambda: _EMPTY)
    websites: Mapping[str, TrustLevel] = field(default_factory=lambda: _EMPTY)
    interstitials: Mapping[str, TrustLevel] = field(default_factory=lambda: _EMPTY)
    fetched_at: Optional[str] = None

    @classmethod
    def empty(cls) -> "RegistrySnapshot":
        return cls()

    @classmethod
    def from_payload(cls, payload: Any) -> "RegistrySnapshot":
        data = validate_registry_payload(payload)

        def table(key: str) -> Mapping[str, TrustLevel]:
            entries: Dict[str, TrustLevel] = {}
            for entry in data.get(key, []):
                entries[get_host(entry["host"])] = TrustLevel.parse(entry.get("state"))
            return MappingProxyType(entries)

        return cls(
            actions=table(TrustDomain.ACTIONS.value),
            websites=table(TrustDomain.WEBSITES.value),
            interstitials=table(TrustDomain.INTERSTITIALS.value),
            fetched_at=now_iso(),
        )

    def table_for(self, domain: TrustDomain) -> Mapping[str, TrustLevel]:
        return getattr(self, TrustDomain(domain).value)

    def lookup(self, domain: TrustDomain, host: str) -> TrustLevel:
        return self.table_for(domain).get(host, TrustLevel.UNKNOWN)

    @property
    def size(self) -> int:
        return len(self.actions) + len(self.websites) + len(self.interstitials)


class RegistrySource:
    """Where registry payloads come from (HTTP in production)."""

    async def fetch(self) -> Dict[str, Any]:
        raise NotImplementedError


class TrustRegistry:
    """
    Process-wide trust classification lookup.

    Responsibilities:
      - Hold the current RegistrySnapshot (empty until the first refresh)
      - Refresh it from a RegistrySource every refresh interval
      - Answer classify() synchronously from whatever snapshot is current

    Refresh failures are logged and swallowed; the previous snapshot stays
    authoritative until the next successful refresh.
    """

    _instance: Optional["TrustRegistry"] = None

    def __init__(
        self,
        source: Optional[RegistrySource] = None,
        *,
        scheduler: Optional[Scheduler] = None,
        refresh_interval: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        if source is None:
            from actiongate.transport.http import HTTPRegistrySource

            source = HTTPRegistrySource(
                settings.registry.url,
                timeout=settings.http.timeout,
                user_agent=settings.http.user_agent,
            )

        self._source = source
        self._scheduler = scheduler or AsyncioScheduler()
        self._interval = refresh_interval or settings.registry.refresh_seconds
        self._snapshot = RegistrySnapshot.empty()
        self._loaded = False
        self._init_task: Optional[asyncio.Future] = None
        self._handle: Optional[ScheduledHandle] = None
        self._running = False

    # ===========================================================
    # Singleton
    # ===========================================================
    @classmethod
    def get_instance(cls, source: Optional[RegistrySource] = None, **kwargs: Any) -> "TrustRegistry":
        """
        Return the process-wide registry, creating it on first use.

        Arguments are only honoured by the call that creates the instance.
        """
        if cls._instance is None:
            cls._instance = cls(source, **kwargs)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        if cls._instance is not None:
            cls._instance.stop()
        cls._instance = None

    # ===========================================================
    # Lifecycle
    # ===========================================================
    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def running(self) -> bool:
        return self._running

    async def init(self) -> None:
        """
        Load the first snapshot. Idempotent; concurrent callers share one
        fetch. Never raises: without data every lookup is UNKNOWN.
        """
        if self._loaded:
            return
        if self._init_task is None or self._init_task.done():
            self._init_task = asyncio.ensure_future(self.refresh())
        await self._init_task

    async def refresh(self) -> bool:
        try:
            payload = await self._source.fetch()
            self.load(payload)
        except Exception as ex:
            logger.warning("Trust registry refresh failed, keeping previous snapshot: %s", ex)
            return False
        return True

    def load(self, payload: Any) -> RegistrySnapshot:
        """Replace the current snapshot with one built from a registry payload."""
        snapshot = RegistrySnapshot.from_payload(payload)
        self._snapshot = snapshot
        self._loaded = True
        logger.info(
            "Trust registry loaded (actions=%d, websites=%d, interstitials=%d)",
            len(snapshot.actions),
            len(snapshot.websites),
            len(snapshot.interstitials),
        )
        return snapshot

    async def start(self) -> None:
        """Load the registry and keep refreshing it every interval."""
        if self._running:
            return
        self._running = True
        await self.init()
        self._schedule_next()

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule_next(self) -> None:
        if not self._running:
            return
        self._handle = self._scheduler.call_later(self._interval, self._tick)

    async def _tick(self) -> None:
        try:
            await self.refresh()
        finally:
            self._schedule_next()

    # ===========================================================
    # Lookups
    # ===========================================================
    def classify(self, domain: TrustDomain, identifier: str) -> TrustLevel:
        if not identifier:
            return TrustLevel.UNKNOWN
        return self._snapshot.lookup(TrustDomain(domain), get_host(identifier))

    def action_state(self, url: str) -> TrustLevel:
        return self.classify(TrustDomain.ACTIONS, url)

    def website_state(self, url: str) -> TrustLevel:
        return self.classify(TrustDomain.WEBSITES, url)

    def interstitial_state(self, url: str) -> TrustLevel:
        return self.classify(TrustDomain.INTERSTITIALS, url)
