from .timestamps import now_iso, utc_now
from .json import json_dumps
from .logging import get_logger, configure_logging
from .url import get_host, get_hostname
from .interstitial import is_interstitial, InterstitialData

__all__ = [
    "now_iso",
    "utc_now",
    "json_dumps",
    "get_logger",
    "configure_logging",
    "get_host",
    "get_hostname",
    "is_interstitial",
    "InterstitialData",
]
