"""
REST adapter: the HTTP client and route builders.

Keep this layer free of cache and structure logic; it returns decoded JSON
and maps failures to shared errors.
"""

from .client import RESTClient
from .routes import Routes

__all__ = ["RESTClient", "Routes"]
