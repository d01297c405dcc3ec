"""Tracker - holds one account's current state and keeps it in sync with the store."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, Union

from .calculations import evaluate
from .health import HealthStatus
from .item import MaintenanceItem
from .reducer import Event, OdometerUpdated, ServiceRecorded, SnapshotReceived, reduce
from .recorder import parse_odometer
from .registry import DEFAULT_MODEL_NAME, new_state
from .service_log import ServiceLog
from .state import MotorbikeState
from .store import YamlStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tracker:
    """
    Session over a single account.

    Local commands go through the reducer and are saved to the store;
    snapshots delivered by the store replace the local state wholesale.
    A failed save keeps the new local state and is only logged.
    """

    def __init__(
        self,
        store: YamlStore,
        account_id: str,
        model_name: str = DEFAULT_MODEL_NAME,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.account_id = account_id
        self.clock = clock or utcnow
        state = store.load(account_id)
        self.created = state is None
        if state is None:
            state = new_state(self.clock(), model_name)
            store.save(account_id, state)
        self.state: MotorbikeState = state
        self._unsubscribe = store.subscribe(account_id, self._on_snapshot)

    def _on_snapshot(self, snapshot: MotorbikeState) -> None:
        logger.debug("Applying snapshot for account %s", self.account_id)
        self.state = reduce(self.state, SnapshotReceived(snapshot))

    def dispatch(self, event: Event) -> MotorbikeState:
        """Reduce a local event, save the result and return it."""
        new = reduce(self.state, event)
        if new is self.state:
            return new
        self.state = new
        if not self.store.save(self.account_id, new):
            logger.warning("Account %s has unsaved changes", self.account_id)
        return self.state

    def update_odometer(self, value: Union[str, float]) -> bool:
        """Apply a new odometer reading. Returns False when it was a regression."""
        if isinstance(value, str):
            value = parse_odometer(value)
        before = self.state
        return self.dispatch(OdometerUpdated(value)) is not before

    def record_service(self, item_id: str, notes: Optional[str] = None) -> ServiceLog:
        """Record a service of `item_id` now and return its log entry."""
        self.dispatch(ServiceRecorded(item_id, self.clock(), notes=notes))
        return self.state.history[0]

    def health(
        self, whichever_first: bool = False
    ) -> List[Tuple[MaintenanceItem, HealthStatus]]:
        """Health of every item at the current odometer and time."""
        now = self.clock()
        return [
            (item, evaluate(item, self.state.current_odo, now, whichever_first))
            for item in self.state.maintenance_items
        ]

    def attention(self) -> List[Tuple[MaintenanceItem, HealthStatus]]:
        """Critical and warning items, most urgent first."""
        flagged = [(i, h) for i, h in self.health() if h.needs_attention]
        return sorted(flagged, key=lambda pair: (pair[1].status.value, pair[1].percentage))

    def close(self) -> None:
        self._unsubscribe()
