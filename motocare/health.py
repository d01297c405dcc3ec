"""HealthStatus derived from an item's interval and the current readings."""

from dataclasses import dataclass
from typing import Optional

from .status import Status, presentation_hint

KM = "km"
MONTHS = "months"


@dataclass(frozen=True)
class HealthStatus:
    """
    Health of one maintenance item at a given odometer/date.

    remaining is signed and measured in `basis` units ("km" or "months");
    basis is None for items with no interval at all.
    """

    percentage: float
    status: Status
    remaining: float
    basis: Optional[str] = None

    @property
    def needs_attention(self) -> bool:
        return self.status in (Status.CRITICAL, Status.WARNING)

    @property
    def hint(self) -> str:
        return presentation_hint(self.status)
