"""Health calculations for maintenance items."""

from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from .health import KM, MONTHS, HealthStatus
from .item import MaintenanceItem
from .status import Status, classify


def clamp_percentage(remaining: float, interval: float) -> float:
    """Remaining share of the interval as a percentage in [0, 100]."""
    return max(0.0, min(100.0, remaining / interval * 100))


def month_diff(last: date, now: date) -> int:
    """Whole calendar months from last to now. Day of month is ignored."""
    return (now.year - last.year) * 12 + (now.month - last.month)


def _axis_health(interval: float, elapsed: float, basis: str) -> HealthStatus:
    remaining = interval - elapsed
    if interval <= 0:
        # Zero/negative interval: never divide, always critical
        return HealthStatus(0.0, Status.CRITICAL, remaining, basis)
    percentage = clamp_percentage(remaining, interval)
    return HealthStatus(percentage, classify(percentage), remaining, basis)


def distance_health(item: MaintenanceItem, current_odo: float) -> HealthStatus:
    """Health along the distance axis. Requires item.interval_km."""
    elapsed = current_odo - item.last_service_odo
    return _axis_health(item.interval_km, elapsed, KM)


def time_health(item: MaintenanceItem, now: date) -> HealthStatus:
    """Health along the time axis. Requires item.interval_months."""
    elapsed = month_diff(item.last_service_date, now)
    return _axis_health(item.interval_months, elapsed, MONTHS)


def evaluate(
    item: MaintenanceItem,
    current_odo: float,
    now: date,
    whichever_first: bool = False,
) -> HealthStatus:
    """
    Compute the health of an item at the given odometer reading and date.

    - Distance interval set: health from km elapsed since last service.
    - Only a time interval set: health from calendar months elapsed.
    - Neither: always 100% / GOOD with nothing remaining.

    When both intervals are set, distance wins and time is not looked at.
    With whichever_first=True both axes are evaluated and the lower
    percentage is returned (distance on a tie).

    `now` must be supplied by the caller; nothing here reads the clock.
    """
    if item.interval_km is not None:
        health = distance_health(item, current_odo)
        if whichever_first and item.interval_months is not None:
            by_time = time_health(item, now)
            if by_time.percentage < health.percentage:
                return by_time
        return health

    if item.interval_months is not None:
        return time_health(item, now)

    return HealthStatus(100.0, Status.GOOD, 0, None)


def due_odo(item: MaintenanceItem) -> Optional[float]:
    """Odometer reading at which the distance interval runs out."""
    if item.interval_km is None:
        return None
    return item.last_service_odo + item.interval_km


def due_date(item: MaintenanceItem) -> Optional[date]:
    """Date at which the time interval runs out: last service + interval months."""
    if item.interval_months is None:
        return None
    months = int(item.interval_months)
    days = int((item.interval_months - months) * 30)
    return item.last_service_date + relativedelta(months=months, days=days)
