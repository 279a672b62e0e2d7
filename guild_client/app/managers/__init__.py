"""
Managers: id resolution, caching and API methods per data model.
"""

from .base import BaseManager, CachedManager, DataManager
from .guild_manager import GuildManager, UnsupportedCacheOverwriteWarning

__all__ = [
    "BaseManager",
    "CachedManager",
    "DataManager",
    "GuildManager",
    "UnsupportedCacheOverwriteWarning",
]
