"""
Shared configuration management for the guild client.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Client configuration read from ``GUILDS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GUILDS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # REST
    token: Optional[str] = Field(default=None)
    api_base_url: str = Field(default="https://discord.com/api")
    api_version: int = Field(default=9)
    request_timeout: float = Field(default=15.0)
    user_agent: str = Field(default="DiscordBot (guild-client, 1.0.0)")

    # Guild creation
    guild_create_timeout: float = Field(default=10.0)
    guild_template_code: str = Field(default="2TffvPucqHkN")

    # Events
    max_listeners: int = Field(default=10)

    @property
    def api_url(self) -> str:
        """Versioned REST root."""
        return f"{self.api_base_url.rstrip('/')}/v{self.api_version}"


def get_config(**overrides) -> ClientConfig:
    """Get client configuration, with explicit overrides taking precedence."""
    return ClientConfig(**overrides)
