"""
Guild structures.
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .base import Base
from .incident_actions import IncidentActions, transform_incidents_data
from ..util.bitfield import Permissions, SystemChannelFlags

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..client import Client


class Guild(Base):
    """A guild (server)."""

    def __init__(self, client: "Client", data: Dict[str, Any]):
        super().__init__(client)
        self.id: str = str(data["id"])
        self.name: Optional[str] = None
        self.icon: Optional[str] = None
        self.owner_id: Optional[str] = None
        self.features: List[str] = []
        self.verification_level: Optional[int] = None
        self.default_message_notifications: Optional[int] = None
        self.explicit_content_filter: Optional[int] = None
        self.afk_channel_id: Optional[str] = None
        self.afk_timeout: Optional[int] = None
        self.system_channel_id: Optional[str] = None
        self.system_channel_flags = SystemChannelFlags(0)
        self.member_count: Optional[int] = None
        self.approximate_member_count: Optional[int] = None
        self.approximate_presence_count: Optional[int] = None
        self.available = True
        self.incidents_data: Optional[IncidentActions] = None
        self._patch(data)

    def _patch(self, data: Dict[str, Any]):
        # Only fields present in the payload are overwritten
        for field in (
            "name",
            "icon",
            "owner_id",
            "verification_level",
            "default_message_notifications",
            "explicit_content_filter",
            "afk_channel_id",
            "afk_timeout",
            "system_channel_id",
            "member_count",
            "approximate_member_count",
            "approximate_presence_count",
        ):
            if field in data:
                setattr(self, field, data[field])

        if "features" in data:
            self.features = list(data["features"] or [])
        if "system_channel_flags" in data:
            self.system_channel_flags = SystemChannelFlags(data["system_channel_flags"] or 0)
        if "unavailable" in data:
            self.available = not data["unavailable"]
        if "incidents_data" in data:
            self.incidents_data = (
                transform_incidents_data(data["incidents_data"]) if data["incidents_data"] else None
            )
        return data

    async def fetch(self, force: bool = True) -> "Guild":
        """Refresh this guild from the API."""
        return await self.client.guilds.fetch(self.id, force=force)

    async def set_incident_actions(self, **incident_actions) -> IncidentActions:
        return await self.client.guilds.set_incident_actions(self, **incident_actions)


class OAuth2Guild(Base):
    """A partial guild as listed for the current user."""

    def __init__(self, client: "Client", data: Dict[str, Any]):
        super().__init__(client)
        self.id: str = str(data["id"])
        self.name: Optional[str] = data.get("name")
        self.icon: Optional[str] = data.get("icon")
        self.owner: bool = bool(data.get("owner", False))
        self.features: List[str] = list(data.get("features") or [])
        self.permissions = Permissions(int(data.get("permissions") or 0))

    async def fetch(self) -> Guild:
        """Fetch the full guild."""
        return await self.client.guilds.fetch(self.id)
