"""
Bitfield flags (permissions, system channel flags) and their resolution.
"""

from enum import IntFlag
from typing import Any

from shared.errors import BitFieldInvalidError


class ResolvableFlag(IntFlag):
    """IntFlag that can resolve loosely-typed input to a bit number."""

    @classmethod
    def resolve(cls, bit: Any = 0) -> int:
        """Resolve a flag name, number, flag or iterable of those to an int."""
        if isinstance(bit, cls):
            return int(bit)
        if isinstance(bit, int) and not isinstance(bit, bool):
            if bit < 0:
                raise BitFieldInvalidError(bit, cls.__name__)
            return bit
        if isinstance(bit, str):
            if bit.isdigit():
                return int(bit)
            if bit in cls.__members__:
                return int(cls.__members__[bit])
            raise BitFieldInvalidError(bit, cls.__name__)
        if isinstance(bit, (list, tuple, set, frozenset)):
            value = 0
            for part in bit:
                value |= cls.resolve(part)
            return value
        raise BitFieldInvalidError(bit, cls.__name__)

    def to_array(self):
        """Names of the set flags."""
        return [name for name, member in type(self).__members__.items() if member and member in self]

    def serialize(self) -> str:
        return str(int(self))


class Permissions(ResolvableFlag):
    """Permission bits."""
    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_CHANNELS = 1 << 4
    MANAGE_GUILD = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    PRIORITY_SPEAKER = 1 << 8
    STREAM = 1 << 9
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    READ_MESSAGE_HISTORY = 1 << 16
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    VIEW_GUILD_INSIGHTS = 1 << 19
    CONNECT = 1 << 20
    SPEAK = 1 << 21
    MUTE_MEMBERS = 1 << 22
    DEAFEN_MEMBERS = 1 << 23
    MOVE_MEMBERS = 1 << 24
    USE_VAD = 1 << 25
    CHANGE_NICKNAME = 1 << 26
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    MANAGE_EMOJIS_AND_STICKERS = 1 << 30
    USE_APPLICATION_COMMANDS = 1 << 31
    REQUEST_TO_SPEAK = 1 << 32
    MANAGE_EVENTS = 1 << 33
    MANAGE_THREADS = 1 << 34
    CREATE_PUBLIC_THREADS = 1 << 35
    CREATE_PRIVATE_THREADS = 1 << 36
    USE_EXTERNAL_STICKERS = 1 << 37
    SEND_MESSAGES_IN_THREADS = 1 << 38
    START_EMBEDDED_ACTIVITIES = 1 << 39
    MODERATE_MEMBERS = 1 << 40
    VIEW_CREATOR_MONETIZATION_ANALYTICS = 1 << 41
    USE_SOUNDBOARD = 1 << 42
    SEND_VOICE_MESSAGES = 1 << 46

    @classmethod
    def resolve_string(cls, bit: Any) -> str:
        """Resolve to the decimal string the API expects for permissions."""
        return str(cls.resolve(bit))


class SystemChannelFlags(ResolvableFlag):
    """System channel suppression flags."""
    SUPPRESS_JOIN_NOTIFICATIONS = 1 << 0
    SUPPRESS_PREMIUM_SUBSCRIPTIONS = 1 << 1
    SUPPRESS_GUILD_REMINDER_NOTIFICATIONS = 1 << 2
    SUPPRESS_JOIN_NOTIFICATION_REPLIES = 1 << 3
