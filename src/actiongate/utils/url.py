from __future__ import annotations

from typing import Optional
from urllib.parse import quote, urljoin, urlparse


_DEFAULT_PORTS = {"http": 80, "https": 443}


def get_host(identifier: str) -> str:
    """
    Host part of a URL, lower-cased, without userinfo. The port is kept only
    when it is not the scheme default. Bare hosts are returned as-is.
    """
    parsed = urlparse(identifier)
    if not parsed.netloc:
        return identifier.strip().lower()

    host = parsed.hostname or ""
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port is not None and port != _DEFAULT_PORTS.get(parsed.scheme):
        return f"{host}:{port}"
    return host


def get_hostname(url: str) -> Optional[str]:
    return urlparse(url).hostname


def resolve_href(base_url: str, href: str) -> str:
    return urljoin(base_url, href)


def fill_template(href: str, name: str, value: str) -> str:
    """Substitute {name} placeholders with the URL-encoded value."""
    return href.replace("{" + name + "}", quote(value, safe=""))
