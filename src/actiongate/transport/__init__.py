from .base import ActionTransport
from .http import HTTPActionTransport, HTTPRegistrySource

__all__ = ["ActionTransport", "HTTPActionTransport", "HTTPRegistrySource"]
