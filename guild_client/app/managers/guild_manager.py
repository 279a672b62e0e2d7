"""
Guild manager: API methods for guilds and their cache.
"""

import asyncio
import warnings
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union, TYPE_CHECKING

from shared.errors import ValidationError
from .base import CachedManager
from ..rest.routes import Routes
from ..structures.guild import Guild, OAuth2Guild
from ..structures.guild_children import GuildChannel, GuildEmoji, GuildMember, Invite, Role
from ..structures.incident_actions import IncidentActions, transform_incidents_data
from ..structures.partials import (
    FetchGuildOptions,
    FetchGuildsOptions,
    PartialChannelData,
    PartialRoleData,
)
from ..util.bitfield import SystemChannelFlags
from ..util.collection import Collection
from ..util.constants import (
    DefaultMessageNotificationLevels,
    EnumResolvable,
    Events,
    ExplicitContentFilterLevels,
    VerificationLevels,
    resolve_enum,
)
from ..util.resolvers import resolve_image, resolve_iso_date

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..client import Client


class UnsupportedCacheOverwriteWarning(RuntimeWarning):
    """The guild cache was replaced with something other than a Collection."""


_cache_warning_emitted = False

# Objects whose guild is reachable through a ``guild`` attribute
_GUILD_CHILDREN = (GuildChannel, GuildMember, GuildEmoji, Role)

GuildResolvable = Union[Guild, GuildChannel, GuildMember, GuildEmoji, Role, Invite, str, int]


class GuildManager(CachedManager):
    """Manages API methods for guilds and stores their cache."""

    def __init__(self, client: "Client", iterable: Optional[Iterable[Dict[str, Any]]] = None, **kwargs):
        global _cache_warning_emitted
        super().__init__(client, Guild, iterable, **kwargs)
        if not _cache_warning_emitted and type(self._cache) is not Collection:
            _cache_warning_emitted = True
            warnings.warn(
                f"Overriding the cache handling for {type(self).__name__} is unsupported and breaks functionality.",
                UnsupportedCacheOverwriteWarning,
                stacklevel=2
            )

    @staticmethod
    def _owning_guild(value: Any) -> Optional[Guild]:
        if isinstance(value, _GUILD_CHILDREN):
            return value.guild
        if isinstance(value, Invite) and value.guild is not None:
            return value.guild
        return None

    def resolve(self, guild: GuildResolvable) -> Optional[Guild]:
        """Resolve a guild, guild-owned object, invite or id to a cached Guild."""
        owner = self._owning_guild(guild)
        if owner is not None:
            return super().resolve(owner)
        return super().resolve(guild)

    def resolve_id(self, guild: GuildResolvable) -> Optional[str]:
        """Resolve a guild, guild-owned object, invite or id to a guild id."""
        owner = self._owning_guild(guild)
        if owner is not None:
            return super().resolve_id(owner.id)
        return super().resolve_id(guild)

    async def create(
        self,
        name: str,
        *,
        afk_channel_id: Optional[Union[str, int]] = None,
        afk_timeout: Optional[int] = None,
        channels: Sequence[Union[PartialChannelData, Mapping[str, Any]]] = (),
        default_message_notifications: EnumResolvable = None,
        explicit_content_filter: EnumResolvable = None,
        icon: Any = None,
        roles: Sequence[Union[PartialRoleData, Mapping[str, Any]]] = (),
        system_channel_id: Optional[Union[str, int]] = None,
        system_channel_flags: Any = None,
        verification_level: EnumResolvable = None,
    ) -> Guild:
        """Create a guild.

        The first entry of ``roles`` edits the guild's @everyone role. Channel
        and role ``id`` values are placeholders used to link channels to
        parents and overwrites; the API replaces them.

        Returns the cached guild once its GUILD_CREATE dispatch arrives, or a
        guild built from the REST response if none arrives within
        ``guild_create_timeout``.
        """
        payload: Dict[str, Any] = {
            "name": name,
            "icon": await resolve_image(icon, timeout=self.client.config.request_timeout),
            "verification_level": resolve_enum(VerificationLevels, verification_level),
            "default_message_notifications": resolve_enum(
                DefaultMessageNotificationLevels, default_message_notifications
            ),
            "explicit_content_filter": resolve_enum(ExplicitContentFilterLevels, explicit_content_filter),
            "roles": [PartialRoleData.coerce(role).to_wire() for role in roles],
            "channels": [PartialChannelData.coerce(channel).to_wire() for channel in channels],
            "afk_channel_id": afk_channel_id,
            "afk_timeout": afk_timeout,
            "system_channel_id": system_channel_id,
            "system_channel_flags": (
                SystemChannelFlags.resolve(system_channel_flags) if system_channel_flags else system_channel_flags
            ),
            "guild_template_code": self.client.config.guild_template_code,
        }
        # icon is always sent, null included
        payload = {key: value for key, value in payload.items() if value is not None or key == "icon"}

        data = await self.client.rest.post(Routes.guilds(), json=payload)
        guild_id = str(data["id"])
        self.logger.info("Guild created", guild_id=guild_id, name=name)

        existing = self.cache.get(guild_id)
        if existing is not None:
            return existing

        return await self._wait_for_guild_create(guild_id, data)

    async def _wait_for_guild_create(self, guild_id: str, data: Dict[str, Any]) -> Guild:
        loop = asyncio.get_running_loop()
        arrived: asyncio.Future = loop.create_future()

        def handle_guild(guild: Guild):
            if guild.id == guild_id and not arrived.done():
                arrived.set_result(guild)

        self.client.increment_max_listeners()
        self.client.on(Events.GUILD_CREATE, handle_guild)
        try:
            return await asyncio.wait_for(arrived, timeout=self.client.config.guild_create_timeout)
        except asyncio.TimeoutError:
            self.logger.info("No GUILD_CREATE before timeout, using REST payload", guild_id=guild_id)
            return self._add(data)
        finally:
            self.client.remove_listener(Events.GUILD_CREATE, handle_guild)
            self.client.decrement_max_listeners()

    async def fetch(
        self,
        guild: Any = None,
        *,
        with_counts: bool = True,
        cache: bool = True,
        force: bool = False,
        before: Optional[str] = None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Union[Guild, Collection]:
        """Fetch one guild, or the current user's guilds when no guild is given.

        A single guild is served from the cache unless ``force`` is set. The
        guild list is returned as a Collection of OAuth2Guild and not cached.
        """
        if isinstance(guild, FetchGuildOptions):
            with_counts, cache, force = guild.with_counts, guild.cache, guild.force
            guild = guild.guild
        elif isinstance(guild, FetchGuildsOptions):
            before, after, limit = guild.before, guild.after, guild.limit
            guild = None

        guild_id = self.resolve_id(guild)

        if guild_id:
            if not force:
                existing = self.cache.get(guild_id)
                self._record_lookup(existing is not None)
                if existing is not None:
                    return existing

            data = await self.client.rest.get(Routes.guild(guild_id), params={"with_counts": with_counts})
            return self._add(data, cache)

        query = FetchGuildsOptions(before=before, after=after, limit=limit).to_query()
        data = await self.client.rest.get(Routes.user_guilds(), params=query)
        self.logger.debug("Fetched current user guilds", count=len(data))
        return Collection((str(item["id"]), OAuth2Guild(self.client, item)) for item in data)

    async def set_incident_actions(
        self,
        guild: GuildResolvable,
        *,
        invites_disabled_until: Any = None,
        dms_disabled_until: Any = None,
    ) -> IncidentActions:
        """Set the incident actions for a guild. ``None`` disables an action."""
        guild_id = self.resolve_id(guild)
        if guild_id is None:
            raise ValidationError("Unable to resolve guild", details={"type": type(guild).__name__})

        data = await self.client.rest.put(
            Routes.guild_incident_actions(guild_id),
            json={
                "invites_disabled_until": resolve_iso_date(invites_disabled_until),
                "dms_disabled_until": resolve_iso_date(dms_disabled_until),
            }
        )

        parsed = transform_incidents_data(data)
        resolved = self.resolve(guild)
        if resolved is not None:
            resolved.incidents_data = parsed

        return parsed
