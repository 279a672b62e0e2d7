"""
Guild client SDK.

Structure:
- app.client: Client wiring config, REST, metrics and managers.
- app.rest: HTTP client and route builders.
- app.managers: Cached managers; GuildManager holds the guild API methods.
- app.structures: Guild and related structures, partial input types.
- app.util: Wire enums, bitfields, resolvers, the cache collection.
"""

from .client import Client
from .managers import GuildManager

__all__ = ["Client", "GuildManager"]
