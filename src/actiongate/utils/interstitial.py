"""
Interstitial link decoding.

An interstitial wraps the real action endpoint in an "action" query
parameter carrying a solana-action: or solana: URI, e.g.

    https://dial.to/?action=solana-action:https://example.com/api/donate
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

_ACTION_PREFIX = re.compile(r"^(solana-action:|solana:)")


@dataclass(frozen=True)
class InterstitialData:
    is_interstitial: bool
    decoded_action_url: Optional[str] = None


_NOT_INTERSTITIAL = InterstitialData(is_interstitial=False)


def is_interstitial(url: str) -> InterstitialData:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return _NOT_INTERSTITIAL

    values = parse_qs(parsed.query).get("action")
    if not values:
        return _NOT_INTERSTITIAL

    decoded = unquote(values[0])
    if not _ACTION_PREFIX.match(decoded):
        return _NOT_INTERSTITIAL

    action_url = _ACTION_PREFIX.sub("", decoded, count=1)
    target = urlparse(action_url)
    if target.scheme not in ("http", "https") or not target.netloc:
        return _NOT_INTERSTITIAL

    return InterstitialData(is_interstitial=True, decoded_action_url=action_url)
