"""
Client: owns configuration, the REST adapter, metrics and the guild manager.
"""

from typing import Any, Dict, Optional

import httpx

from shared.config import ClientConfig, get_config
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector
from .events import EventEmitter
from .managers.guild_manager import GuildManager
from .rest.client import RESTClient
from .structures.guild import Guild
from .util.constants import Events


class Client(EventEmitter):
    """Entry point for the guild API."""

    def __init__(self, config: Optional[ClientConfig] = None, *,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 metrics: Optional[MetricsCollector] = None,
                 configure_logs: bool = False):
        self.config = config or get_config()
        if configure_logs:
            configure_logging("guilds", self.config.log_level)
        super().__init__(max_listeners=self.config.max_listeners)
        self.logger = get_logger("guilds.client")
        self.metrics = metrics or MetricsCollector()
        self.rest = RESTClient(self.config, self.metrics, transport=transport)
        self.guilds = GuildManager(self)

    def handle_guild_create(self, data: Dict[str, Any]) -> Guild:
        """Handle a GUILD_CREATE gateway dispatch."""
        guild = self.guilds._add(data)
        self.logger.debug("GUILD_CREATE received", guild_id=guild.id)
        self.emit(Events.GUILD_CREATE, guild)
        return guild

    async def close(self):
        await self.rest.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
