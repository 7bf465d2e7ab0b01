import copy
from typing import Any, Dict, Optional

from industry_pulse.signals.interfaces.snapshot_store import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """
    In-memory storage for serialized pulse snapshots, one slot per window size.
    """

    def __init__(self):
        self._store: Dict[int, Dict[str, Any]] = {}
        self.writes = 0

    def get(self, window_days: int) -> Optional[Dict[str, Any]]:
        document = self._store.get(window_days)
        return copy.deepcopy(document) if document is not None else None

    def put(self, window_days: int, document: Dict[str, Any]) -> None:
        self._store[window_days] = copy.deepcopy(document)
        self.writes += 1
