"""Snapshot conversion and YAML loading/saving for motorbike state.

Snapshots are plain dicts (strings, numbers, lists, dicts) with camelCase
keys, suitable for any document store and for the advisory summary.
"""

import math
from datetime import date, datetime
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from dateutil.parser import isoparse

from .errors import InvalidInputError
from .item import Action, MaintenanceCategory, MaintenanceItem
from .registry import COUNTED_IDS
from .service_log import ServiceLog
from .state import MotorbikeState


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


def _parse_timestamp(value: Any) -> datetime:
    """Accept ISO strings as well as dates YAML already parsed."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return isoparse(value)
        except ValueError:
            raise InvalidInputError(f"Invalid timestamp: {value!r}") from None
    raise InvalidInputError(f"Invalid timestamp: {value!r}")


def _number(value: Any, key: str, optional: bool = False, minimum: Any = None) -> Any:
    """Numeric field of a document; bools, strings and NaN are rejected."""
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise InvalidInputError(f"'{key}' must be a number, got {value!r}")
    if minimum is not None and value < minimum:
        raise InvalidInputError(f"'{key}' cannot be below {minimum}, got {value!r}")
    return value


def item_to_dict(item: MaintenanceItem) -> Dict[str, Any]:
    """Serialize a MaintenanceItem (camelCase keys, None values omitted)."""
    d: Dict[str, Any] = {
        "id": item.id,
        "category": item.category.value,
        "name": item.name,
        "description": item.description,
        "action": item.action.value,
    }
    if item.interval_km is not None:
        d["intervalKm"] = item.interval_km
    if item.interval_months is not None:
        d["intervalMonths"] = item.interval_months
    d["lastServiceOdo"] = item.last_service_odo
    d["lastServiceDate"] = _format_timestamp(item.last_service_date)
    d["tracksServiceCount"] = item.tracks_service_count
    if item.service_count is not None:
        d["engineOilCount"] = item.service_count
    return d


def item_from_dict(dct: Dict[str, Any]) -> MaintenanceItem:
    # Older documents carry no tracksServiceCount flag
    tracks = dct.get("tracksServiceCount")
    if tracks is None:
        tracks = dct["id"] in COUNTED_IDS
    return MaintenanceItem(
        id=dct["id"],
        category=MaintenanceCategory(dct["category"]),
        name=dct["name"],
        description=dct.get("description", ""),
        action=Action(dct["action"]),
        last_service_odo=_number(dct.get("lastServiceOdo", 0), "lastServiceOdo", minimum=0),
        last_service_date=_parse_timestamp(dct["lastServiceDate"]),
        interval_km=_number(dct.get("intervalKm"), "intervalKm", optional=True),
        interval_months=_number(dct.get("intervalMonths"), "intervalMonths", optional=True),
        tracks_service_count=bool(tracks),
        service_count=_number(
            dct.get("engineOilCount"), "engineOilCount", optional=True, minimum=0
        ),
    )


def log_to_dict(log: ServiceLog) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": log.id,
        "itemId": log.item_id,
        "itemName": log.item_name,
        "odoAtService": log.odo_at_service,
        "date": _format_timestamp(log.date),
    }
    if log.notes is not None:
        d["notes"] = log.notes
    return d


def log_from_dict(dct: Dict[str, Any]) -> ServiceLog:
    return ServiceLog(
        id=dct["id"],
        item_id=dct["itemId"],
        item_name=dct["itemName"],
        odo_at_service=_number(dct["odoAtService"], "odoAtService", minimum=0),
        date=_parse_timestamp(dct["date"]),
        notes=dct.get("notes"),
    )


def state_to_dict(state: MotorbikeState) -> Dict[str, Any]:
    """Read-only snapshot of the state as plain data."""
    return {
        "modelName": state.model_name,
        "currentOdo": state.current_odo,
        "maintenanceItems": [item_to_dict(i) for i in state.maintenance_items],
        "history": [log_to_dict(h) for h in state.history],
    }


def state_from_dict(dct: Dict[str, Any]) -> MotorbikeState:
    """
    Build a MotorbikeState from a snapshot dict.

    Raises InvalidInputError for missing keys, unknown enum values,
    non-numeric counters or intervals, and negative odometer readings.
    """
    if not isinstance(dct, dict):
        raise InvalidInputError("State document must be a mapping")
    try:
        return MotorbikeState(
            model_name=dct["modelName"],
            current_odo=_number(dct.get("currentOdo", 0), "currentOdo", minimum=0),
            maintenance_items=[
                item_from_dict(i) for i in dct.get("maintenanceItems") or []
            ],
            history=[log_from_dict(h) for h in dct.get("history") or []],
        )
    except InvalidInputError:
        raise
    except KeyError as e:
        raise InvalidInputError(f"State document is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid state document: {e}") from e


def load_state(filename: Union[str, Path]) -> MotorbikeState:
    """Load a motorbike state from a YAML file."""
    with open(filename, "r") as fp:
        return state_from_dict(yaml.load(fp, Loader=yaml.SafeLoader))


def save_state(filename: Union[str, Path], state: MotorbikeState) -> None:
    """Write a motorbike state to a YAML file, replacing its contents."""
    with open(filename, "w") as fp:
        yaml.dump(
            state_to_dict(state),
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )
