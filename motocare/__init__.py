"""
Motorbike maintenance tracking.

This package provides the health model and its collaborators:
- Status: Health levels (CRITICAL, WARNING, GOOD)
- MaintenanceItem: Trackable maintenance action with interval and markers
- ServiceLog: Completed service record
- MotorbikeState: Aggregate of odometer, items and history
- HealthStatus: Calculated health of an item
- evaluate / record_service / update_odometer: Core operations
- YamlStore / Tracker: Persistence and session glue
- AdvisoryClient: Natural-language maintenance advice
"""

from .errors import MotoCareError, NotFoundError, InvalidInputError
from .status import Status, classify, presentation_hint
from .item import Action, MaintenanceCategory, MaintenanceItem
from .service_log import ServiceLog
from .state import MotorbikeState
from .health import HealthStatus
from .calculations import evaluate, month_diff, due_odo, due_date
from .registry import (
    ENGINE_OIL_ID,
    SEED_CATALOG,
    seed_items,
    new_state,
    get_item,
    list_items,
)
from .recorder import record_service, update_odometer, parse_odometer
from .reducer import OdometerUpdated, ServiceRecorded, SnapshotReceived, reduce
from .loader import state_to_dict, state_from_dict, load_state, save_state
from .store import YamlStore
from .tracker import Tracker
from .advisory import AdvisoryClient, FALLBACK_ADVICE, build_prompt

__all__ = [
    "MotoCareError",
    "NotFoundError",
    "InvalidInputError",
    "Status",
    "classify",
    "presentation_hint",
    "Action",
    "MaintenanceCategory",
    "MaintenanceItem",
    "ServiceLog",
    "MotorbikeState",
    "HealthStatus",
    "evaluate",
    "month_diff",
    "due_odo",
    "due_date",
    "ENGINE_OIL_ID",
    "SEED_CATALOG",
    "seed_items",
    "new_state",
    "get_item",
    "list_items",
    "record_service",
    "update_odometer",
    "parse_odometer",
    "OdometerUpdated",
    "ServiceRecorded",
    "SnapshotReceived",
    "reduce",
    "state_to_dict",
    "state_from_dict",
    "load_state",
    "save_state",
    "YamlStore",
    "Tracker",
    "AdvisoryClient",
    "FALLBACK_ADVICE",
    "build_prompt",
]
