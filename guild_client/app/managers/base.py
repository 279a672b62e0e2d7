"""
Base managers: client binding, id resolution and the id-keyed cache.
"""

from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Type, TYPE_CHECKING

from shared.logging import get_logger
from ..util.collection import Collection

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..client import Client


class BaseManager:
    """Manages API methods for a data model."""

    def __init__(self, client: "Client"):
        self.client = client


class DataManager(BaseManager):
    """Manages a data model and resolves references to it."""

    def __init__(self, client: "Client", holds: Type):
        super().__init__(client)
        self.holds = holds

    @property
    def cache(self) -> Dict[str, Any]:
        raise NotImplementedError(f"{type(self).__name__} does not implement a cache")

    def resolve(self, value: Any) -> Optional[Any]:
        """Resolve an instance or id to a cached instance."""
        if isinstance(value, self.holds):
            return value
        key = self._normalize_id(value)
        if key is not None:
            return self.cache.get(key)
        return None

    def resolve_id(self, value: Any) -> Optional[str]:
        """Resolve an instance or id to an id string."""
        if isinstance(value, self.holds):
            return value.id
        return self._normalize_id(value)

    @staticmethod
    def _normalize_id(value: Any) -> Optional[str]:
        if isinstance(value, str):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return None


class CachedManager(DataManager):
    """Manages a data model backed by an in-memory cache."""

    def __init__(self, client: "Client", holds: Type, iterable: Optional[Iterable[Dict[str, Any]]] = None,
                 cache_factory: Callable[[], Dict[str, Any]] = Collection):
        super().__init__(client, holds)
        self.logger = get_logger(f"guilds.managers.{type(self).__name__}")
        self._cache = cache_factory()

        if iterable:
            for item in iterable:
                self._add(item)

    @property
    def cache(self) -> Dict[str, Any]:
        return self._cache

    def _record_lookup(self, hit: bool):
        metrics = getattr(self.client, "metrics", None)
        if metrics is not None:
            metrics.record_cache_lookup(type(self).__name__, hit)

    def _add(self, data: Dict[str, Any], cache: bool = True, id: Optional[str] = None,
             extras: Sequence[Any] = ()) -> Any:
        """Add or patch an entry.

        An existing cached entry is patched in place, or a patched clone of it
        is returned when ``cache`` is False. Otherwise a new instance is built
        and stored only when ``cache`` is True.
        """
        key = str(id if id is not None else data["id"])
        existing = self.cache.get(key)
        if existing is not None:
            if cache:
                existing._patch(data)
                return existing
            clone = existing._clone()
            clone._patch(data)
            return clone

        entry = self.holds(self.client, data, *extras) if self.holds else data
        if cache:
            self.cache[key] = entry
        return entry
