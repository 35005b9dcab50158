"""
Base interface for the HTTP collaborators used by actiongate.

Transports DO NOT:
  - interpret action metadata
  - classify trust
  - apply policy

Transports ONLY:
  - deliver JSON requests to action endpoints and the trust registry
  - decode JSON responses

Everything else is handled by:
  - core.action (metadata validation, component derivation)
  - core.registry / core.security (trust and admission)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class ActionTransport(ABC):
    """
    Async JSON transport towards action endpoints.

        get_json(url)          -> action metadata
        post_json(url, body)   -> transaction response
    """

    @abstractmethod
    async def get_json(self, url: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    async def post_json(self, url: str, body: Dict[str, Any]) -> Any:
        raise NotImplementedError
