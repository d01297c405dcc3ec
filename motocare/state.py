"""MotorbikeState - the aggregate root held by the surrounding application."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .errors import InvalidInputError
from .item import MaintenanceItem
from .service_log import ServiceLog


@dataclass(frozen=True)
class MotorbikeState:
    """
    Immutable snapshot of one motorbike: odometer, items and service history.

    history is ordered newest first. Item ids must be unique; any sequence
    passed in is stored as a tuple.
    """

    model_name: str
    current_odo: float
    maintenance_items: Tuple[MaintenanceItem, ...] = field(default_factory=tuple)
    history: Tuple[ServiceLog, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "maintenance_items", tuple(self.maintenance_items))
        object.__setattr__(self, "history", tuple(self.history))
        seen = set()
        for item in self.maintenance_items:
            if item.id in seen:
                raise InvalidInputError(f"Duplicate maintenance item id '{item.id}'")
            seen.add(item.id)

    @property
    def items_by_id(self) -> Dict[str, MaintenanceItem]:
        return {item.id: item for item in self.maintenance_items}

    @property
    def last_service(self):
        """Most recent service log, or None when nothing has been recorded."""
        return self.history[0] if self.history else None
