# actiongate/core/action.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

from actiongate.protocol.errors import (
    ActionGateError,
    ActionResolutionError,
    ActionValidationError,
)
from actiongate.protocol.models import ActionParameter, TransactionResponse
from actiongate.protocol.validators import (
    validate_action_payload,
    validate_transaction_response,
)
from actiongate.transport.base import ActionTransport
from actiongate.utils.url import fill_template, resolve_href

from .adapter import TransactionAdapter

logger = logging.getLogger("actiongate.action")


def _default_transport() -> ActionTransport:
    from actiongate.transport.http import HTTPActionTransport
    from .settings import get_settings

    settings = get_settings()
    return HTTPActionTransport(timeout=settings.http.timeout, user_agent=settings.http.user_agent)


class ActionComponent:
    """
    One invocable unit of an action.

    component_id is stable for the lifetime of the parent ActionModel and is
    what the execution controller tracks as "currently executing".
    """

    def __init__(
        self,
        parent: "ActionModel",
        component_id: str,
        label: str,
        href: str,
        parameter: Optional[ActionParameter] = None,
    ) -> None:
        self.parent = parent
        self.component_id = component_id
        self.label = label
        self.href = href
        self.parameter = parameter
        self._value: Optional[str] = None

    def __repr__(self) -> str:
        return f"ActionComponent(id={self.component_id!r}, label={self.label!r})"

    @property
    def value(self) -> Optional[str]:
        return self._value

    def set_value(self, value: Optional[str]) -> None:
        self._value = value

    def resolved_href(self) -> str:
        if self.parameter is None:
            return self.href
        if not self._value:
            raise ActionValidationError(f"Parameter '{self.parameter.name}' requires a value")
        return fill_template(self.href, self.parameter.name, self._value)

    async def post(self, account: str) -> TransactionResponse:
        """POST the account to the component href and return the transaction to sign."""
        url = self.resolved_href()
        payload = await self.parent.transport.post_json(url, {"account": account})
        data = validate_transaction_response(payload)
        return TransactionResponse(transaction=data["transaction"], message=data.get("message"))


class ActionModel:
    """
    A resolved action: metadata plus ordered components.

    Immutable after construction apart from `disabled` and the components'
    parameter values.
    """

    def __init__(
        self,
        url: str,
        *,
        title: str,
        description: str,
        icon: str,
        label: str,
        adapter: TransactionAdapter,
        disabled: bool = False,
        error: Optional[str] = None,
        linked_actions: Optional[List[Dict[str, Any]]] = None,
        transport: Optional[ActionTransport] = None,
    ) -> None:
        self.url = url
        self.title = title
        self.description = description
        self.icon = icon
        self.label = label
        self.adapter = adapter
        self.disabled = disabled
        self.error = error
        self.transport = transport or _default_transport()
        self._components: Tuple[ActionComponent, ...] = self._build_components(linked_actions)

    def __repr__(self) -> str:
        return f"ActionModel(url={self.url!r}, title={self.title!r}, components={len(self._components)})"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_payload(
        cls,
        url: str,
        payload: Any,
        adapter: TransactionAdapter,
        transport: Optional[ActionTransport] = None,
    ) -> "ActionModel":
        data = validate_action_payload(payload)
        links = data.get("links") or {}
        error = data.get("error") or {}
        return cls(
            url,
            title=data["title"],
            description=data["description"],
            icon=data["icon"],
            label=data["label"],
            adapter=adapter,
            disabled=data.get("disabled", False),
            error=error.get("message"),
            linked_actions=links.get("actions"),
            transport=transport,
        )

    @classmethod
    async def fetch(
        cls,
        url: str,
        adapter: TransactionAdapter,
        transport: Optional[ActionTransport] = None,
    ) -> "ActionModel":
        transport = transport or _default_transport()
        try:
            payload = await transport.get_json(url)
            return cls.from_payload(url, payload, adapter, transport)
        except ActionGateError as ex:
            raise ActionResolutionError(f"Invalid action metadata at {url}: {ex}") from ex
        except Exception as ex:
            raise ActionResolutionError(f"Could not fetch action metadata from {url}: {ex}") from ex

    def _build_components(self, linked_actions: Optional[List[Dict[str, Any]]]) -> Tuple[ActionComponent, ...]:
        if not linked_actions:
            return (ActionComponent(self, "0", self.label, self.url),)

        components: List[ActionComponent] = []
        for index, linked in enumerate(linked_actions):
            params = linked.get("parameters") or []
            parameter = None
            if params:
                # Only the first parameter is supported per component.
                first = params[0]
                parameter = ActionParameter(
                    name=first["name"],
                    label=first.get("label"),
                    required=bool(first.get("required", False)),
                )
            components.append(
                ActionComponent(
                    self,
                    str(index),
                    linked["label"],
                    resolve_href(self.url, linked["href"]),
                    parameter,
                )
            )
        return tuple(components)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def components(self) -> Tuple[ActionComponent, ...]:
        return self._components

    def component(self, component_id: str) -> ActionComponent:
        for c in self._components:
            if c.component_id == component_id:
                return c
        raise ActionValidationError(f"Action {self.url} has no component '{component_id}'")


class ActionResolver(Protocol):
    async def resolve(self, url: str) -> Optional[ActionModel]:  # pragma: no cover - interface
        ...


class HTTPActionResolver:
    """
    Resolves an action endpoint URL into an ActionModel.

    Any resolution failure is terminal and reported as None: the caller
    renders nothing for that link.
    """

    def __init__(self, adapter: TransactionAdapter, transport: Optional[ActionTransport] = None) -> None:
        self._adapter = adapter
        self._transport = transport

    async def resolve(self, url: str) -> Optional[ActionModel]:
        try:
            return await ActionModel.fetch(url, self._adapter, self._transport)
        except ActionResolutionError as ex:
            logger.info("Not rendering %s: %s", url, ex)
            return None
