"""
YAML document store with an in-process change feed.

One YAML file per account under a data directory. Saves are last-writer-wins
and every successful save is pushed, as a full snapshot, to the account's
subscribers.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import yaml

from .errors import InvalidInputError
from .loader import load_state, save_state
from .state import MotorbikeState

logger = logging.getLogger(__name__)

ACCOUNT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

Listener = Callable[[MotorbikeState], None]


class YamlStore:
    """Persistence collaborator: load/save account state plus change notifications."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self._listeners: Dict[str, List[Listener]] = {}

    def path_for(self, account_id: str) -> Path:
        if not ACCOUNT_ID_PATTERN.match(account_id or ""):
            raise InvalidInputError(f"Invalid account id: {account_id!r}")
        return self.directory / f"{account_id}.yaml"

    def exists(self, account_id: str) -> bool:
        return self.path_for(account_id).exists()

    def accounts(self) -> List[str]:
        """Ids of all stored accounts."""
        return sorted(
            p.stem
            for p in self.directory.glob("*.yaml")
            if ACCOUNT_ID_PATTERN.match(p.stem)
        )

    def load(self, account_id: str) -> Optional[MotorbikeState]:
        """Stored state for the account, or None when there is none."""
        path = self.path_for(account_id)
        if not path.exists():
            return None
        return load_state(path)

    def save(self, account_id: str, state: MotorbikeState) -> bool:
        """
        Replace the stored state for the account.

        Returns False (and logs) when the document could not be written.
        Subscribers are notified only after a successful write.
        """
        path = self.path_for(account_id)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            save_state(path, state)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to save account %s: %s", account_id, e)
            return False
        logger.debug("Saved account %s to %s", account_id, path)
        self._notify(account_id, state)
        return True

    def subscribe(self, account_id: str, listener: Listener) -> Callable[[], None]:
        """Register a listener for saved snapshots. Returns an unsubscribe callable."""
        listeners = self._listeners.setdefault(account_id, [])
        listeners.append(listener)

        def unsubscribe():
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def _notify(self, account_id: str, state: MotorbikeState) -> None:
        for listener in list(self._listeners.get(account_id, [])):
            listener(state)
