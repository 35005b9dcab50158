from typing import Any, Dict, List

from .errors import ActionValidationError, RegistryError

_REQUIRED_STRINGS = ("title", "description", "icon", "label")


def validate_action_payload(payload: Any) -> Dict[str, Any]:
    """
    Check the metadata returned by an action endpoint.

    Expected shape:
        {
          "title": str, "description": str, "icon": str, "label": str,
          "disabled": bool?, "error": {"message": str}?,
          "links": {"actions": [{"label": str, "href": str,
                                 "parameters": [{"name": str, "label": str?}]?}]}?
        }
    """
    if not isinstance(payload, dict):
        raise ActionValidationError("Action metadata must be a JSON object")

    for key in _REQUIRED_STRINGS:
        if not isinstance(payload.get(key), str):
            raise ActionValidationError(f"Action metadata field '{key}' must be a string")

    if "disabled" in payload and not isinstance(payload["disabled"], bool):
        raise ActionValidationError("Action metadata field 'disabled' must be a boolean")

    error = payload.get("error")
    if error is not None and not (isinstance(error, dict) and isinstance(error.get("message"), str)):
        raise ActionValidationError("Action metadata field 'error' must carry a message")

    links = payload.get("links")
    if links is not None:
        if not isinstance(links, dict) or not isinstance(links.get("actions"), list):
            raise ActionValidationError("Action metadata 'links.actions' must be a list")
        for linked in links["actions"]:
            validate_linked_action(linked)

    return payload


def validate_linked_action(linked: Any) -> None:
    if not isinstance(linked, dict):
        raise ActionValidationError("Linked action must be a JSON object")
    if not isinstance(linked.get("label"), str) or not isinstance(linked.get("href"), str):
        raise ActionValidationError("Linked action requires string 'label' and 'href'")

    params: List[Any] = linked.get("parameters") or []
    if not isinstance(params, list):
        raise ActionValidationError("Linked action 'parameters' must be a list")
    for p in params:
        if not isinstance(p, dict) or not isinstance(p.get("name"), str) or not p["name"]:
            raise ActionValidationError("Action parameter requires a non-empty 'name'")


def validate_transaction_response(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not isinstance(payload.get("transaction"), str):
        raise ActionValidationError("Transaction response must carry a 'transaction' string")
    message = payload.get("message")
    if message is not None and not isinstance(message, str):
        raise ActionValidationError("Transaction response 'message' must be a string")
    return payload


def validate_registry_payload(payload: Any) -> Dict[str, Any]:
    """Registry entries are {"host": str, "state": str} grouped per domain."""
    if not isinstance(payload, dict):
        raise RegistryError("Registry payload must be a JSON object")
    for key in ("actions", "websites", "interstitials"):
        entries = payload.get(key, [])
        if not isinstance(entries, list):
            raise RegistryError(f"Registry field '{key}' must be a list")
        for entry in entries:
            if not isinstance(entry, dict) or not isinstance(entry.get("host"), str):
                raise RegistryError(f"Registry entry in '{key}' requires a 'host' string")
    return payload
