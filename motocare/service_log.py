"""ServiceLog record of a completed service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ServiceLog:
    """A completed service. item_name is a snapshot taken at event time."""

    id: str
    item_id: str
    item_name: str
    odo_at_service: float
    date: datetime
    notes: Optional[str] = None
