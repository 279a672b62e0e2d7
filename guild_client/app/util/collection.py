"""
Id-keyed collection used for caches and list results.
"""

from typing import Any, Callable, Dict, Optional, TypeVar

V = TypeVar("V")


class Collection(Dict[str, V]):
    """A dict with a few lookup helpers."""

    def first(self) -> Optional[V]:
        return next(iter(self.values()), None)

    def find(self, fn: Callable[[V], Any]) -> Optional[V]:
        for value in self.values():
            if fn(value):
                return value
        return None

    def filter(self, fn: Callable[[V], Any]) -> "Collection[V]":
        return Collection((key, value) for key, value in self.items() if fn(value))
