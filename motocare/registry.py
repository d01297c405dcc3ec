"""
Maintenance item registry: the seed catalog and lookups by item id.

The catalog is a stock small-displacement motorcycle/scooter schedule.
Every new account starts from it with all items freshly serviced at
the starting odometer.
"""

from datetime import datetime
from typing import List, Optional

from .errors import NotFoundError
from .item import Action, MaintenanceCategory, MaintenanceItem
from .state import MotorbikeState

ENGINE_OIL_ID = "engine-oil"

DEFAULT_MODEL_NAME = "My Daily Ride"

# (id, category, name, action, interval_km, interval_months, description)
SEED_CATALOG = (
    (ENGINE_OIL_ID, MaintenanceCategory.OIL_LUBE, "Engine Oil", Action.CHANGE,
     3000, None, "Replace engine oil and clean the oil strainer."),
    ("gear-oil", MaintenanceCategory.OIL_LUBE, "Gear Oil", Action.CHANGE,
     6000, None, "Replace final drive gear oil."),
    ("cvt-cleaning", MaintenanceCategory.DRIVE_SYSTEM, "CVT Cleaning", Action.CLEAN,
     6000, None, "Clean pulleys, clutch lining and belt housing."),
    ("drive-belt", MaintenanceCategory.DRIVE_SYSTEM, "Drive Belt", Action.CHANGE,
     20000, None, "Replace the CVT drive belt."),
    ("air-filter", MaintenanceCategory.AIR_SYSTEM, "Air Filter", Action.CHANGE,
     8000, None, "Replace the air cleaner element."),
    ("coolant", MaintenanceCategory.FLUIDS, "Coolant", Action.FLUSH,
     12000, 24, "Drain, flush and refill the cooling system."),
    ("brake-fluid", MaintenanceCategory.BRAKES, "Brake Fluid", Action.FLUSH,
     None, 24, "Bleed and replace hydraulic brake fluid."),
    ("brake-pads", MaintenanceCategory.BRAKES, "Brake Pads", Action.CHECK,
     5000, None, "Inspect pad thickness and disc condition."),
    ("spark-plug", MaintenanceCategory.ELECTRICAL, "Spark Plug", Action.CHANGE,
     8000, None, "Replace the spark plug and check the gap."),
    ("battery", MaintenanceCategory.ELECTRICAL, "Battery", Action.CHECK,
     None, 6, "Check voltage, terminals and charging output."),
    ("tires", MaintenanceCategory.TIRES, "Tires", Action.CHECK,
     5000, None, "Check tread depth, sidewalls and pressure."),
    ("throttle-body", MaintenanceCategory.CLEANING, "Throttle Body", Action.CLEAN,
     10000, None, "Clean the throttle body and idle passages."),
    ("valve-clearance", MaintenanceCategory.MECHANICAL, "Valve Clearance", Action.CHECK,
     12000, None, "Check and adjust intake/exhaust valve clearance."),
)

# Item ids whose service count is tracked when a document predates the flag.
COUNTED_IDS = frozenset([ENGINE_OIL_ID])


def seed_items(now: datetime, odo: float = 0) -> List[MaintenanceItem]:
    """Build fresh items from the catalog, serviced at `odo` on `now`."""
    items = []
    for item_id, category, name, action, km, months, description in SEED_CATALOG:
        counted = item_id in COUNTED_IDS
        items.append(
            MaintenanceItem(
                id=item_id,
                category=category,
                name=name,
                description=description,
                action=action,
                last_service_odo=odo,
                last_service_date=now,
                interval_km=km,
                interval_months=months,
                tracks_service_count=counted,
                service_count=0 if counted else None,
            )
        )
    return items


def new_state(
    now: datetime, model_name: str = DEFAULT_MODEL_NAME, current_odo: float = 0
) -> MotorbikeState:
    """Initial state for a new account. Items count as serviced at `current_odo`."""
    return MotorbikeState(
        model_name=model_name,
        current_odo=current_odo,
        maintenance_items=seed_items(now, current_odo),
        history=(),
    )


def get_item(state: MotorbikeState, item_id: str) -> MaintenanceItem:
    """Find an item by id. Raises NotFoundError for unknown ids."""
    item = state.items_by_id.get(item_id)
    if item is None:
        raise NotFoundError(item_id)
    return item


def list_items(
    state: MotorbikeState, category: Optional[MaintenanceCategory] = None
) -> List[MaintenanceItem]:
    """All items in the state, optionally limited to one category."""
    if category is None:
        return list(state.maintenance_items)
    return [item for item in state.maintenance_items if item.category == category]
