from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from actiongate.protocol.enums import TrustLevel

logger = logging.getLogger("actiongate.callbacks")


@runtime_checkable
class ActionCallbacks(Protocol):
    """
    Host hooks fired by ExecutionController.

    Lifecycle:
      - on_action_mount(action, url, action_trust)   once per controller
      - on_render(action)                            every render

    Hooks observe only; whatever they raise is logged and dropped.
    """

    def on_action_mount(self, action: Any, url: str, action_trust: TrustLevel) -> None:  # pragma: no cover - interface
        ...

    def on_render(self, action: Any) -> Any:  # pragma: no cover - interface
        ...


class LoggingActionCallbacks:
    """
    Simple logging callbacks, handy as a default in demos.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger("actiongate.callbacks")

    def on_action_mount(self, action: Any, url: str, action_trust: TrustLevel) -> None:
        self._log.info("Mounted action '%s' from %s (trust=%s)", action.title, url, action_trust.value)

    def on_render(self, action: Any) -> Any:
        self._log.debug("Rendering action '%s'", action.title)
        return None


def fire_on_action_mount(callbacks: Optional[Any], action: Any, url: str, action_trust: TrustLevel) -> None:
    hook = getattr(callbacks, "on_action_mount", None)
    if hook is None:
        return
    try:
        hook(action, url, action_trust)
    except Exception:
        logger.exception("on_action_mount callback failed")


def fire_on_render(callbacks: Optional[Any], action: Any) -> Any:
    hook = getattr(callbacks, "on_render", None)
    if hook is None:
        return None
    try:
        return hook(action)
    except Exception:
        logger.exception("on_render callback failed")
        return None
