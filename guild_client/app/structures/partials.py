"""
Partial input data and fetch options.

Partial channel, role and overwrite data may be given either as the
dataclasses below or as plain mappings. Mappings may use the SDK's camelCase
names (``parentId``, ``userLimit``, ...) or the snake_case attribute names;
``to_wire()`` produces the payload the API expects.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Sequence, Type, TypeVar, Union

from shared.errors import ValidationError
from ..util.bitfield import Permissions
from ..util.constants import (
    ChannelTypes,
    EnumResolvable,
    OverwriteTypes,
    VideoQualityModes,
    resolve_enum,
)
from ..util.resolvers import ColorResolvable, resolve_color


P = TypeVar("P", bound="_Partial")


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset (None) entries."""
    return {key: value for key, value in payload.items() if value is not None}


class _Partial:
    """Mapping coercion shared by the partial data classes."""

    ALIASES: Dict[str, str] = {}

    @classmethod
    def from_mapping(cls: Type[P], data: Mapping[str, Any]) -> P:
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = cls.ALIASES.get(key, key)
            if name not in names:
                raise ValidationError(
                    f"Unknown {cls.__name__} field: {key}",
                    details={"field": key}
                )
            kwargs[name] = value
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValidationError(str(e), details={"type": cls.__name__}) from None

    @classmethod
    def coerce(cls: Type[P], value: Union[P, Mapping[str, Any]]) -> P:
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise ValidationError(
            f"Expected {cls.__name__} or mapping, got {type(value).__name__}",
            details={"type": type(value).__name__}
        )


@dataclass
class PartialOverwriteData(_Partial):
    """Permission overwrite for a channel being created with a guild."""
    id: Union[str, int]
    type: EnumResolvable = None
    allow: Any = None
    deny: Any = None

    def to_wire(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "type": resolve_enum(OverwriteTypes, self.type),
            "allow": Permissions.resolve_string(self.allow) if self.allow else self.allow,
            "deny": Permissions.resolve_string(self.deny) if self.deny else self.deny,
        })


@dataclass
class PartialChannelData(_Partial):
    """Channel to create with a guild. ``id`` is a placeholder the API replaces."""
    name: str
    id: Optional[Union[str, int]] = None
    parent_id: Optional[Union[str, int]] = None
    type: EnumResolvable = None
    topic: Optional[str] = None
    nsfw: Optional[bool] = None
    bitrate: Optional[int] = None
    user_limit: Optional[int] = None
    rtc_region: Optional[str] = None
    video_quality_mode: EnumResolvable = None
    permission_overwrites: Optional[Sequence[Union[PartialOverwriteData, Mapping[str, Any]]]] = None
    rate_limit_per_user: Optional[int] = None

    ALIASES = {
        "parentId": "parent_id",
        "userLimit": "user_limit",
        "rtcRegion": "rtc_region",
        "videoQualityMode": "video_quality_mode",
        "permissionOverwrites": "permission_overwrites",
        "rateLimitPerUser": "rate_limit_per_user",
    }

    def to_wire(self) -> Dict[str, Any]:
        overwrites = None
        if self.permission_overwrites is not None:
            overwrites = [
                PartialOverwriteData.coerce(overwrite).to_wire()
                for overwrite in self.permission_overwrites
            ]

        return _compact({
            "id": self.id,
            "parent_id": self.parent_id,
            "type": resolve_enum(ChannelTypes, self.type) if self.type else self.type,
            "name": self.name,
            "topic": self.topic,
            "nsfw": self.nsfw,
            "bitrate": self.bitrate,
            "user_limit": self.user_limit,
            "rtc_region": self.rtc_region,
            "video_quality_mode": resolve_enum(VideoQualityModes, self.video_quality_mode),
            "permission_overwrites": overwrites,
            "rate_limit_per_user": self.rate_limit_per_user,
        })


@dataclass
class PartialRoleData(_Partial):
    """Role to create with a guild. The first role edits @everyone."""
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    color: Optional[ColorResolvable] = None
    hoist: Optional[bool] = None
    position: Optional[int] = None
    permissions: Any = None
    mentionable: Optional[bool] = None

    def to_wire(self) -> Dict[str, Any]:
        return _compact({
            "id": self.id,
            "name": self.name,
            "color": resolve_color(self.color) if self.color else self.color,
            "hoist": self.hoist,
            "position": self.position,
            "permissions": Permissions.resolve_string(self.permissions) if self.permissions else self.permissions,
            "mentionable": self.mentionable,
        })


@dataclass
class FetchGuildOptions:
    """Options for fetching a single guild."""
    guild: Any
    with_counts: bool = True
    cache: bool = True
    force: bool = False


@dataclass
class FetchGuildsOptions:
    """Options for listing the current user's guilds."""
    before: Optional[str] = None
    after: Optional[str] = None
    limit: Optional[int] = None

    def to_query(self) -> Dict[str, Any]:
        return _compact({"before": self.before, "after": self.after, "limit": self.limit})
