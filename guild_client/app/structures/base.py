"""
Base class for API-backed structures.
"""

import copy
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..client import Client


class Base:
    """An object bound to a client and built from an API payload."""

    def __init__(self, client: "Client"):
        self.client = client

    def _clone(self):
        return copy.copy(self)

    def _patch(self, data: Dict[str, Any]):
        return data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)!r}>"
