"""Service-event recorder and odometer updates.

Every function here returns a new MotorbikeState and leaves its input
untouched.
"""

import math
import uuid
from dataclasses import replace
from datetime import datetime
from numbers import Real
from typing import Optional

from .errors import InvalidInputError
from .registry import get_item
from .service_log import ServiceLog
from .state import MotorbikeState


def record_service(
    state: MotorbikeState,
    item_id: str,
    now: datetime,
    notes: Optional[str] = None,
    log_id: Optional[str] = None,
) -> MotorbikeState:
    """
    Record a completed service of `item_id` at the current odometer.

    - Prepends a ServiceLog to history
    - Resets the item's last-service odometer/date
    - Bumps service_count for items that track it

    Raises NotFoundError if the item id is unknown. Not idempotent: each
    call is a separate service event.
    """
    item = get_item(state, item_id)

    log = ServiceLog(
        id=log_id or uuid.uuid4().hex,
        item_id=item.id,
        item_name=item.name,
        odo_at_service=state.current_odo,
        date=now,
        notes=notes,
    )

    changes = {"last_service_odo": state.current_odo, "last_service_date": now}
    if item.tracks_service_count:
        changes["service_count"] = (item.service_count or 0) + 1
    serviced = replace(item, **changes)

    items = tuple(serviced if i.id == item.id else i for i in state.maintenance_items)
    return replace(state, maintenance_items=items, history=(log,) + state.history)


def _check_odometer(value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"Odometer must be a number, got {value!r}")
    if math.isnan(value) or math.isinf(value):
        raise InvalidInputError(f"Odometer must be finite, got {value!r}")
    return value


def update_odometer(state: MotorbikeState, new_odo: float) -> MotorbikeState:
    """
    Set the current odometer reading.

    A reading lower than the current one is ignored and the same state is
    returned. Health is not recomputed here; it is always derived on demand.
    """
    new_odo = _check_odometer(new_odo)
    if new_odo < state.current_odo:
        return state
    return replace(state, current_odo=new_odo)


def parse_odometer(text: str) -> int:
    """Parse a user-entered odometer reading (e.g. '12,500')."""
    cleaned = str(text).strip().replace(",", "").replace("_", "")
    try:
        value = int(cleaned)
    except ValueError:
        try:
            value = float(cleaned)
        except ValueError:
            raise InvalidInputError(f"Odometer must be a number, got {text!r}") from None
        if math.isnan(value) or math.isinf(value):
            raise InvalidInputError(f"Odometer must be a number, got {text!r}")
        value = int(value)
    if value < 0:
        raise InvalidInputError(f"Odometer cannot be negative, got {text!r}")
    return value
