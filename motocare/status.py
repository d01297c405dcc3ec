"""Status enum and percentage classifier for maintenance health."""

from enum import Enum

WARNING_THRESHOLD = 25


class Status(Enum):
    """Maintenance health levels. Lower value = more urgent."""

    CRITICAL = 1
    WARNING = 2
    GOOD = 3

    @property
    def label(self) -> str:
        """Display label ("Critical", "Warning", "Good")."""
        return self.name.capitalize()


_HINTS = {
    Status.CRITICAL: "red",
    Status.WARNING: "amber",
    Status.GOOD: "emerald",
}


def classify(percentage: float) -> Status:
    """
    Map a health percentage to a status.

    Both boundaries are inclusive of the more urgent level:
    0% is CRITICAL and 25% is WARNING.
    """
    if percentage <= 0:
        return Status.CRITICAL
    if percentage <= WARNING_THRESHOLD:
        return Status.WARNING
    return Status.GOOD


def presentation_hint(status: Status) -> str:
    """Color name a surface can use when rendering the status."""
    return _HINTS[status]
