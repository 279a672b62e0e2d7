"""
Guild incident actions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..util.resolvers import parse_date


@dataclass
class IncidentActions:
    """Incident actions and detections active on a guild."""
    invites_disabled_until: Optional[datetime] = None
    dms_disabled_until: Optional[datetime] = None
    dm_spam_detected_at: Optional[datetime] = None
    raid_detected_at: Optional[datetime] = None


def transform_incidents_data(data: Optional[Dict[str, Any]]) -> IncidentActions:
    """Transform an API incidents payload into IncidentActions."""
    data = data or {}

    def _date(key: str) -> Optional[datetime]:
        value = data.get(key)
        return parse_date(value) if value else None

    return IncidentActions(
        invites_disabled_until=_date("invites_disabled_until"),
        dms_disabled_until=_date("dms_disabled_until"),
        dm_spam_detected_at=_date("dm_spam_detected_at"),
        raid_detected_at=_date("raid_detected_at"),
    )
