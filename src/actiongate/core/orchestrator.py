# actiongate/core/orchestrator.py

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from actiongate.protocol.enums import TrustDomain
from actiongate.protocol.models import PolicyInput
from actiongate.utils.interstitial import is_interstitial
from actiongate.utils.logging import configure_logging, get_logger
from actiongate.utils.url import get_hostname

from .action import ActionResolver, HTTPActionResolver
from .adapter import TransactionAdapter
from .controller import ExecutionController
from .registry import TrustRegistry
from .security import SecurityGate

logger = get_logger("orchestrator")

UrlMapper = Callable[[str], Optional[str]]
UrlExpander = Callable[[str], Awaitable[str]]


class ActionOrchestrator:
    """
    Turns discovered links into ExecutionControllers.

    Pipeline for handle_link(url):
      1. expand shortened links (optional collaborator)
      2. interstitial  -> check interstitial policy, decode wrapped action URL
         website       -> check website policy, map page URL to action URL
      3. check action policy for the action URL
      4. resolve the action metadata
      5. bind a controller to the original link

    Any rejection returns None: nothing is rendered for that link.
    """

    def __init__(
        self,
        adapter: TransactionAdapter,
        *,
        callbacks: Optional[Any] = None,
        security_level: PolicyInput = None,
        registry: Optional[TrustRegistry] = None,
        resolver: Optional[ActionResolver] = None,
        url_mapper: Optional[UrlMapper] = None,
        url_expander: Optional[UrlExpander] = None,
    ) -> None:
        configure_logging()
        self.registry = registry or TrustRegistry.get_instance()
        self.gate = SecurityGate(security_level, self.registry)
        self._adapter = adapter
        self._callbacks = callbacks
        self._resolver = resolver or HTTPActionResolver(adapter)
        self._url_mapper = url_mapper
        self._url_expander = url_expander

    async def start(self) -> None:
        """The registry must be loaded before links are evaluated."""
        await self.registry.start()

    def stop(self) -> None:
        self.registry.stop()

    async def handle_link(self, url: str) -> Optional[ExecutionController]:
        if self._url_expander is not None:
            try:
                url = await self._url_expander(url)
            except Exception as ex:
                logger.info("Could not expand link %s: %s", url, ex)
                return None

        action_url = self._action_url_for(url)
        if not action_url:
            return None

        if not self.gate.check(TrustDomain.ACTIONS, action_url):
            logger.info("Action %s rejected by action policy", action_url)
            return None

        action = await self._resolver.resolve(action_url)
        if action is None:
            return None

        return ExecutionController(
            action,
            self.gate,
            website_url=url,
            website_text=get_hostname(url),
            callbacks=self._callbacks,
        )

    def _action_url_for(self, url: str) -> Optional[str]:
        interstitial = is_interstitial(url)
        if interstitial.is_interstitial:
            if not self.gate.check(TrustDomain.INTERSTITIALS, url):
                logger.info("Interstitial %s rejected by interstitial policy", url)
                return None
            return interstitial.decoded_action_url

        if not self.gate.check(TrustDomain.WEBSITES, url):
            logger.info("Website %s rejected by website policy", url)
            return None

        if self._url_mapper is None:
            return url
        try:
            return self._url_mapper(url)
        except Exception as ex:
            logger.info("Could not map %s to an action URL: %s", url, ex)
            return None
