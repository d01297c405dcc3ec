"""MaintenanceItem and its category/action tags."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class MaintenanceCategory(Enum):
    """Grouping tag for maintenance items. Opaque to the health model."""

    OIL_LUBE = "OIL & LUBE"
    DRIVE_SYSTEM = "DRIVE SYSTEM"
    AIR_SYSTEM = "AIR SYSTEM"
    FLUIDS = "FLUIDS"
    BRAKES = "BRAKES"
    ELECTRICAL = "ELECTRICAL"
    TIRES = "TIRES"
    CLEANING = "CLEANING"
    MECHANICAL = "MECHANICAL"


class Action(Enum):
    """What gets done when the item is serviced."""

    CHANGE = "Change"
    CLEAN = "Clean"
    CHECK = "Check"
    FLUSH = "Flush"


@dataclass(frozen=True)
class MaintenanceItem:
    """
    One trackable maintenance action and its last-service markers.

    An item is tracked by distance (interval_km), by time (interval_months),
    or both. Items that set tracks_service_count also keep a running
    service_count that goes up on every recorded service.
    """

    id: str
    category: MaintenanceCategory
    name: str
    description: str
    action: Action
    last_service_odo: float
    last_service_date: datetime
    interval_km: Optional[float] = None
    interval_months: Optional[float] = None
    tracks_service_count: bool = False
    service_count: Optional[int] = None

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. 'Change - Engine Oil'."""
        return f"{self.action.value} - {self.name}"
