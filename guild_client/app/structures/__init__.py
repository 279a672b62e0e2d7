"""
API-backed structures and partial input types.
"""

from .incident_actions import IncidentActions, transform_incidents_data
from .base import Base
from .guild import Guild, OAuth2Guild
from .guild_children import GuildChannel, GuildEmoji, GuildMember, Invite, Role
from .partials import (
    FetchGuildOptions,
    FetchGuildsOptions,
    PartialChannelData,
    PartialOverwriteData,
    PartialRoleData,
)

__all__ = [
    "Base",
    "FetchGuildOptions",
    "FetchGuildsOptions",
    "Guild",
    "GuildChannel",
    "GuildEmoji",
    "GuildMember",
    "IncidentActions",
    "Invite",
    "OAuth2Guild",
    "PartialChannelData",
    "PartialOverwriteData",
    "PartialRoleData",
    "Role",
    "transform_incidents_data",
]
