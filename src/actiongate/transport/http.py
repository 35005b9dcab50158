"""
HTTP transport for actiongate.

- GETs action metadata and the trust registry snapshot as JSON
- POSTs {"account": ...} to action component hrefs
- Runs the blocking requests calls in a worker thread so the event loop
  keeps processing other work while a call is in flight
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from actiongate.core.registry import RegistrySource
from actiongate.protocol.errors import RegistryError
from actiongate.utils.json import json_dumps

from .base import ActionTransport

logger = logging.getLogger("actiongate.transport.http")

_JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def _user_agent_header(user_agent: Optional[str]) -> Dict[str, str]:
    # Sent per request; a caller-supplied session is never modified.
    return {"User-Agent": user_agent} if user_agent else {}


class HTTPActionTransport(ActionTransport):
    """
    Talks to action endpoints:

        GET  {action_url}          -> action metadata JSON
        POST {component_href}      -> {"transaction": str, "message": str?}
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._extra_headers = _user_agent_header(user_agent)

    # ------------------------------------------------------------------
    # Main API
    # ------------------------------------------------------------------
    async def get_json(self, url: str) -> Any:
        return await asyncio.to_thread(self._get, url)

    async def post_json(self, url: str, body: Dict[str, Any]) -> Any:
        return await asyncio.to_thread(self._post, url, body)

    # ------------------------------------------------------------------
    # Blocking helpers
    # ------------------------------------------------------------------
    def _get(self, url: str) -> Any:
        logger.debug("GET %s", url)
        response = self._session.get(
            url,
            headers={"Accept": "application/json", **self._extra_headers},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()

    def _post(self, url: str, body: Dict[str, Any]) -> Any:
        logger.debug("POST %s", url)
        response = self._session.post(
            url,
            data=json_dumps(body),
            headers={**_JSON_HEADERS, **self._extra_headers},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()


class HTTPRegistrySource(RegistrySource):
    """Fetches the registry snapshot JSON from a single endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._headers = {"Accept": "application/json", **_user_agent_header(user_agent)}

    async def fetch(self) -> Dict[str, Any]:
        return await asyncio.to_thread(self._fetch)

    def _fetch(self) -> Dict[str, Any]:
        try:
            response = self._session.get(self._url, headers=self._headers, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as ex:
            raise RegistryError(f"Could not fetch trust registry from {self._url}: {ex}") from ex
