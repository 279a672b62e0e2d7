"""
Unit tests for GuildManager.
"""

import asyncio
import copy
from datetime import datetime, timezone

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from guild_client.app.client import Client
from guild_client.app.managers import guild_manager as guild_manager_module
from guild_client.app.managers.guild_manager import GuildManager, UnsupportedCacheOverwriteWarning
from guild_client.app.structures import (
    FetchGuildOptions,
    FetchGuildsOptions,
    Guild,
    GuildChannel,
    GuildEmoji,
    GuildMember,
    IncidentActions,
    Invite,
    OAuth2Guild,
    PartialChannelData,
    Role,
)
from guild_client.app.util.collection import Collection
from guild_client.app.util.constants import Events
from shared.config import ClientConfig
from shared.errors import EnumResolveError, GuildClientException, ValidationError


GUILD_ID = "123456789012345678"


class TestGuildManager:
    """Test cases for GuildManager."""

    @pytest.fixture
    def client(self):
        """Create a Client with a short guild create timeout."""
        config = ClientConfig(token="test-token", guild_create_timeout=0.05)
        return Client(config)

    @pytest.fixture
    def guild_data(self):
        """Mock guild payload."""
        return {
            "id": GUILD_ID,
            "name": "Test Guild",
            "icon": None,
            "owner_id": "80351110224678912",
            "features": ["COMMUNITY"],
            "verification_level": 1,
            "system_channel_flags": 3,
        }

    @pytest.fixture
    def cached_guild(self, client, guild_data):
        """Guild already in the cache."""
        return client.guilds._add(guild_data)

    def test_resolve_guild_and_ids(self, client, cached_guild):
        """Test resolving a guild by instance, string id and int id."""
        assert client.guilds.resolve(cached_guild) is cached_guild
        assert client.guilds.resolve(GUILD_ID) is cached_guild
        assert client.guilds.resolve(int(GUILD_ID)) is cached_guild
        assert client.guilds.resolve("1") is None
        assert client.guilds.resolve(None) is None

    def test_resolve_guild_children(self, client, cached_guild):
        """Test resolving guild-owned objects to their guild."""
        children = [
            GuildChannel(client, {"id": "1", "name": "general", "type": 0}, cached_guild),
            GuildMember(client, {"user": {"id": "2"}, "nick": "tester"}, cached_guild),
            GuildEmoji(client, {"id": "3", "name": "smile"}, cached_guild),
            Role(client, {"id": "4", "name": "mods", "color": 0}, cached_guild),
            Invite(client, {"code": "abc"}, cached_guild),
        ]

        for child in children:
            assert client.guilds.resolve(child) is cached_guild
            assert client.guilds.resolve_id(child) == GUILD_ID

    def test_resolve_invite_without_guild(self, client):
        """Test that a guild-less invite does not resolve."""
        invite = Invite(client, {"code": "abc"})

        assert client.guilds.resolve(invite) is None
        assert client.guilds.resolve_id(invite) is None

    def test_resolve_id_uncached(self, client):
        """Test resolve_id does not require the guild to be cached."""
        assert client.guilds.resolve_id("42") == "42"
        assert client.guilds.resolve_id(42) == "42"
        assert client.guilds.resolve_id(True) is None
        assert client.guilds.resolve_id({"id": "42"}) is None

    @pytest.mark.asyncio
    async def test_create_translates_payload(self, client):
        """Test that SDK names and symbolic values are translated to the wire format."""
        client.rest.post = AsyncMock(return_value={"id": GUILD_ID, "name": "New Guild"})
        channels = [
            {"id": 1, "name": "Voice", "type": "GUILD_CATEGORY"},
            {
                "name": "lobby",
                "type": "GUILD_VOICE",
                "parentId": 1,
                "userLimit": 10,
                "rtcRegion": "us-west",
                "videoQualityMode": "FULL",
                "permissionOverwrites": [
                    {"id": 0, "type": "role", "allow": ["VIEW_CHANNEL", "CONNECT"], "deny": "SPEAK"},
                ],
            },
            PartialChannelData(name="chat", type=0, rate_limit_per_user=5),
        ]
        roles = [{"id": 0, "color": "RED", "permissions": ["ADMINISTRATOR"]}]
        original_channels = copy.deepcopy(channels[:2])

        await client.guilds.create(
            "New Guild",
            channels=channels,
            roles=roles,
            verification_level="HIGH",
            default_message_notifications="ONLY_MENTIONS",
            explicit_content_filter="ALL_MEMBERS",
            system_channel_flags=["SUPPRESS_JOIN_NOTIFICATIONS"],
            afk_timeout=300,
        )

        path = client.rest.post.call_args.args[0]
        payload = client.rest.post.call_args.kwargs["json"]

        assert path == "/guilds"
        assert payload["name"] == "New Guild"
        assert payload["icon"] is None
        assert payload["verification_level"] == 3
        assert payload["default_message_notifications"] == 1
        assert payload["explicit_content_filter"] == 2
        assert payload["system_channel_flags"] == 1
        assert payload["afk_timeout"] == 300
        assert payload["guild_template_code"] == "2TffvPucqHkN"
        assert "afk_channel_id" not in payload
        assert "system_channel_id" not in payload

        assert payload["channels"][0] == {"id": 1, "name": "Voice", "type": 4}
        assert payload["channels"][1] == {
            "name": "lobby",
            "type": 2,
            "parent_id": 1,
            "user_limit": 10,
            "rtc_region": "us-west",
            "video_quality_mode": 2,
            "permission_overwrites": [
                {"id": 0, "type": 0, "allow": str(1024 | (1 << 20)), "deny": str(1 << 21)},
            ],
        }
        assert payload["channels"][2] == {"name": "chat", "type": 0, "rate_limit_per_user": 5}
        assert payload["roles"] == [{"id": 0, "color": 0xED4245, "permissions": "8"}]

        # Caller input is left untouched
        assert channels[:2] == original_channels

    @pytest.mark.asyncio
    async def test_create_encodes_icon(self, client):
        """Test that raw icon bytes are sent as a data URI."""
        client.rest.post = AsyncMock(return_value={"id": GUILD_ID})

        await client.guilds.create("Icon Guild", icon=b"\x89PNG")

        payload = client.rest.post.call_args.kwargs["json"]
        assert payload["icon"] == "data:image/jpg;base64,iVBORw=="

    @pytest.mark.asyncio
    async def test_create_icon_download_failure(self, client):
        """Test that an unreachable icon URL raises a client error before the request."""
        client.config.request_timeout = 2.5
        client.rest.post = AsyncMock()
        url = "http://127.0.0.1:1/icon.png"

        with patch('httpx.AsyncClient') as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("Connection refused", request=httpx.Request("GET", url))
            )

            with pytest.raises(GuildClientException) as exc_info:
                await client.guilds.create("Icon Guild", icon=url)

        assert exc_info.value.code == "HTTP_ERROR"
        assert mock_client.call_args.kwargs["timeout"] == 2.5
        client.rest.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_enum_name(self, client):
        """Test that an unknown symbolic name fails before any request."""
        client.rest.post = AsyncMock()

        with pytest.raises(EnumResolveError):
            await client.guilds.create("Bad Guild", verification_level="EXTREME")

        client.rest.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_returns_cached_guild(self, client, cached_guild):
        """Test that create returns the cached guild when GUILD_CREATE already arrived."""
        client.rest.post = AsyncMock(return_value={"id": GUILD_ID, "name": "Test Guild"})

        result = await client.guilds.create("Test Guild")

        assert result is cached_guild
        assert client.listener_count(Events.GUILD_CREATE) == 0

    @pytest.mark.asyncio
    async def test_create_waits_for_guild_create(self, client, guild_data):
        """Test that create resolves with the guild from the GUILD_CREATE dispatch."""
        client.config.guild_create_timeout = 5.0
        max_listeners = client.max_listeners
        dispatched = {**guild_data, "member_count": 1}

        async def post(path, json):
            loop = asyncio.get_running_loop()
            loop.call_later(0.01, client.handle_guild_create, {"id": "999999999999999999"})
            loop.call_later(0.02, client.handle_guild_create, dispatched)
            return {"id": GUILD_ID, "name": "Test Guild"}

        client.rest.post = AsyncMock(side_effect=post)

        result = await client.guilds.create("Test Guild")

        assert result.id == GUILD_ID
        assert result.member_count == 1
        assert client.guilds.cache[GUILD_ID] is result
        assert client.listener_count(Events.GUILD_CREATE) == 0
        assert client.max_listeners == max_listeners

    @pytest.mark.asyncio
    async def test_create_falls_back_to_rest_payload(self, client):
        """Test that create caches the REST payload when no dispatch arrives in time."""
        max_listeners = client.max_listeners
        client.rest.post = AsyncMock(return_value={"id": GUILD_ID, "name": "Timeout Guild"})

        result = await client.guilds.create("Timeout Guild")

        assert isinstance(result, Guild)
        assert result.name == "Timeout Guild"
        assert client.guilds.cache[GUILD_ID] is result
        assert client.listener_count(Events.GUILD_CREATE) == 0
        assert client.max_listeners == max_listeners

    @pytest.mark.asyncio
    async def test_fetch_cached_guild(self, client, cached_guild):
        """Test that a cached guild is returned without a request."""
        client.rest.get = AsyncMock()

        result = await client.guilds.fetch(GUILD_ID)

        assert result is cached_guild
        client.rest.get.assert_not_called()
        assert client.metrics.sample(
            "cache_lookups_total", {"manager": "GuildManager", "result": "hit"}
        ) == 1.0

    @pytest.mark.asyncio
    async def test_fetch_force_patches_cached_guild(self, client, cached_guild):
        """Test that force bypasses the cache and patches the cached entry."""
        client.rest.get = AsyncMock(return_value={
            "id": GUILD_ID,
            "name": "Renamed",
            "approximate_member_count": 12,
            "approximate_presence_count": 4,
        })

        result = await client.guilds.fetch(cached_guild, force=True)

        client.rest.get.assert_called_once_with(f"/guilds/{GUILD_ID}", params={"with_counts": True})
        assert result is cached_guild
        assert result.name == "Renamed"
        assert result.approximate_member_count == 12
        assert result.owner_id == "80351110224678912"

    @pytest.mark.asyncio
    async def test_fetch_uncached_without_caching(self, client, guild_data):
        """Test fetching with cache disabled leaves the cache empty."""
        client.rest.get = AsyncMock(return_value=guild_data)

        result = await client.guilds.fetch(FetchGuildOptions(guild=GUILD_ID, with_counts=False, cache=False))

        client.rest.get.assert_called_once_with(f"/guilds/{GUILD_ID}", params={"with_counts": False})
        assert isinstance(result, Guild)
        assert GUILD_ID not in client.guilds.cache
        assert client.metrics.sample(
            "cache_lookups_total", {"manager": "GuildManager", "result": "miss"}
        ) == 1.0

    @pytest.mark.asyncio
    async def test_fetch_current_user_guilds(self, client):
        """Test listing the current user's guilds."""
        client.rest.get = AsyncMock(return_value=[
            {"id": "1", "name": "One", "icon": None, "owner": True, "permissions": "8", "features": []},
            {"id": "2", "name": "Two", "icon": "abc", "owner": False, "permissions": "1024", "features": []},
        ])

        result = await client.guilds.fetch(limit=10, after="0")

        client.rest.get.assert_called_once_with("/users/@me/guilds", params={"after": "0", "limit": 10})
        assert isinstance(result, Collection)
        assert list(result) == ["1", "2"]
        assert all(isinstance(guild, OAuth2Guild) for guild in result.values())
        assert result["1"].owner is True
        assert "ADMINISTRATOR" in result["1"].permissions.to_array()
        assert len(client.guilds.cache) == 0

    @pytest.mark.asyncio
    async def test_fetch_guilds_options(self, client):
        """Test listing with FetchGuildsOptions."""
        client.rest.get = AsyncMock(return_value=[])

        result = await client.guilds.fetch(FetchGuildsOptions(before="100"))

        client.rest.get.assert_called_once_with("/users/@me/guilds", params={"before": "100"})
        assert result == {}

    @pytest.mark.asyncio
    async def test_set_incident_actions(self, client, cached_guild):
        """Test setting incident actions on a cached guild."""
        client.rest.put = AsyncMock(return_value={
            "invites_disabled_until": "2024-05-01T12:00:00.000000+00:00",
            "dms_disabled_until": None,
        })

        result = await client.guilds.set_incident_actions(
            GUILD_ID,
            invites_disabled_until=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            dms_disabled_until=None,
        )

        client.rest.put.assert_called_once_with(
            f"/guilds/{GUILD_ID}/incident-actions",
            json={"invites_disabled_until": "2024-05-01T12:00:00.000Z", "dms_disabled_until": None}
        )
        assert isinstance(result, IncidentActions)
        assert result.invites_disabled_until == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert result.dms_disabled_until is None
        assert cached_guild.incidents_data is result

    @pytest.mark.asyncio
    async def test_set_incident_actions_uncached(self, client):
        """Test setting incident actions on a guild that is not cached."""
        client.rest.put = AsyncMock(return_value={"dms_disabled_until": "2024-05-01T12:00:00Z"})

        result = await client.guilds.set_incident_actions("42", dms_disabled_until=1714564800000)

        assert client.rest.put.call_args.kwargs["json"]["dms_disabled_until"] == "2024-05-01T12:00:00.000Z"
        assert result.dms_disabled_until == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert result.invites_disabled_until is None

    @pytest.mark.asyncio
    async def test_set_incident_actions_unresolvable(self, client):
        """Test that an unresolvable guild is rejected."""
        client.rest.put = AsyncMock()

        with pytest.raises(ValidationError):
            await client.guilds.set_incident_actions(Invite(client, {"code": "abc"}))

        client.rest.put.assert_not_called()

    def test_cache_override_warning(self, client, monkeypatch):
        """Test the one-time warning when the cache is not a Collection."""
        monkeypatch.setattr(guild_manager_module, "_cache_warning_emitted", False)

        with pytest.warns(UnsupportedCacheOverwriteWarning):
            GuildManager(client, cache_factory=dict)

        assert guild_manager_module._cache_warning_emitted is True
