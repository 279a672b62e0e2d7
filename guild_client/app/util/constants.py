"""
Wire-level enums and lookup tables.
"""

from enum import Enum, IntEnum
from typing import Any, Optional, Type, Union

from shared.errors import EnumResolveError


class Events(str, Enum):
    """Client events."""
    GUILD_CREATE = "guild_create"


class ChannelTypes(IntEnum):
    """Channel types."""
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_NEWS = 5
    GUILD_STORE = 6
    GUILD_NEWS_THREAD = 10
    GUILD_PUBLIC_THREAD = 11
    GUILD_PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15


class OverwriteTypes(IntEnum):
    """Permission overwrite target types."""
    role = 0
    member = 1


class VerificationLevels(IntEnum):
    """Guild verification levels."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4


class DefaultMessageNotificationLevels(IntEnum):
    """Default message notification levels."""
    ALL_MESSAGES = 0
    ONLY_MENTIONS = 1


class ExplicitContentFilterLevels(IntEnum):
    """Explicit content filter levels."""
    DISABLED = 0
    MEMBERS_WITHOUT_ROLES = 1
    ALL_MEMBERS = 2


class VideoQualityModes(IntEnum):
    """Camera video quality modes."""
    AUTO = 1
    FULL = 2


Colors = {
    "DEFAULT": 0x000000,
    "WHITE": 0xFFFFFF,
    "AQUA": 0x1ABC9C,
    "GREEN": 0x57F287,
    "BLUE": 0x3498DB,
    "YELLOW": 0xFEE75C,
    "PURPLE": 0x9B59B6,
    "LUMINOUS_VIVID_PINK": 0xE91E63,
    "FUCHSIA": 0xEB459E,
    "GOLD": 0xF1C40F,
    "ORANGE": 0xE67E22,
    "RED": 0xED4245,
    "GREY": 0x95A5A6,
    "NAVY": 0x34495E,
    "DARK_AQUA": 0x11806A,
    "DARK_GREEN": 0x1F8B4C,
    "DARK_BLUE": 0x206694,
    "DARK_PURPLE": 0x71368A,
    "DARK_VIVID_PINK": 0xAD1457,
    "DARK_GOLD": 0xC27C0E,
    "DARK_ORANGE": 0xA84300,
    "DARK_RED": 0x992D22,
    "DARK_GREY": 0x979C9F,
    "DARKER_GREY": 0x7F8C8D,
    "LIGHT_GREY": 0xBCC0C0,
    "DARK_NAVY": 0x2C3E50,
    "BLURPLE": 0x5865F2,
    "GREYPLE": 0x99AAB5,
    "DARK_BUT_NOT_BLACK": 0x2C2F33,
    "NOT_QUITE_BLACK": 0x23272A,
}


def resolve_enum(enum_cls: Type[IntEnum], value: Any) -> Optional[int]:
    """Translate a symbolic enum name (or number) to its wire value."""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(enum_cls[value])
        except KeyError:
            raise EnumResolveError(value, enum_cls.__name__) from None
    raise EnumResolveError(value, enum_cls.__name__)


EnumResolvable = Union[str, int, IntEnum, None]
