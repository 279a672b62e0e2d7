"""
Structures owned by a guild.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

from .base import Base

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..client import Client
    from .guild import Guild


class GuildOwned(Base):
    """An object that belongs to exactly one guild."""

    def __init__(self, client: "Client", data: Dict[str, Any], guild: "Guild"):
        super().__init__(client)
        self.guild = guild
        self.id: str = str(data["id"])
        self.name: Optional[str] = None
        self._patch(data)

    def _patch(self, data: Dict[str, Any]):
        if "name" in data:
            self.name = data["name"]
        return data


class GuildChannel(GuildOwned):
    """A channel in a guild."""

    type: Optional[int] = None
    parent_id: Optional[str] = None

    def _patch(self, data: Dict[str, Any]):
        super()._patch(data)
        if "type" in data:
            self.type = data["type"]
        if "parent_id" in data:
            self.parent_id = data["parent_id"]
        return data


class GuildMember(GuildOwned):
    """A member of a guild."""

    def __init__(self, client: "Client", data: Dict[str, Any], guild: "Guild"):
        # Members are keyed by their user id
        user = data.get("user") or {}
        super().__init__(client, {**data, "id": user.get("id", data.get("id"))}, guild)
        self.nick: Optional[str] = data.get("nick")


class GuildEmoji(GuildOwned):
    """A custom emoji in a guild."""


class Role(GuildOwned):
    """A role in a guild."""

    color: int = 0
    permissions: Optional[str] = None

    def _patch(self, data: Dict[str, Any]):
        super()._patch(data)
        if "color" in data:
            self.color = data["color"]
        if "permissions" in data:
            self.permissions = data["permissions"]
        return data


class Invite(Base):
    """An invite, which may or may not reference a guild."""

    def __init__(self, client: "Client", data: Dict[str, Any], guild: Optional["Guild"] = None):
        super().__init__(client)
        self.code: str = data["code"]
        self.guild = guild

    def __repr__(self) -> str:
        return f"<Invite code={self.code!r}>"
