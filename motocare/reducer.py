"""Pure reducer over local commands and snapshots delivered by storage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from .recorder import record_service, update_odometer
from .state import MotorbikeState


@dataclass(frozen=True)
class OdometerUpdated:
    new_odo: float


@dataclass(frozen=True)
class ServiceRecorded:
    item_id: str
    now: datetime
    notes: Optional[str] = None
    log_id: Optional[str] = None


@dataclass(frozen=True)
class SnapshotReceived:
    """A full state pushed from storage. Always replaces local state."""

    state: MotorbikeState


Event = Union[OdometerUpdated, ServiceRecorded, SnapshotReceived]


def reduce(state: MotorbikeState, event: Event) -> MotorbikeState:
    """Apply one event to the state and return the resulting state."""
    if isinstance(event, SnapshotReceived):
        return event.state
    if isinstance(event, OdometerUpdated):
        return update_odometer(state, event.new_odo)
    if isinstance(event, ServiceRecorded):
        return record_service(
            state, event.item_id, event.now, notes=event.notes, log_id=event.log_id
        )
    raise TypeError(f"Unsupported event: {event!r}")
