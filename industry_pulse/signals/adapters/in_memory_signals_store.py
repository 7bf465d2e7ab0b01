import copy
from typing import Any, Dict, Optional

from industry_pulse.signals.interfaces.signals_store import SignalsStore


class InMemorySignalsStore(SignalsStore):

    def __init__(self):
        self._store: Dict[str, Dict[str, Any]] = {}
        self.writes = 0

    def get(self, cache_id: str) -> Optional[Dict[str, Any]]:
        document = self._store.get(cache_id)
        return copy.deepcopy(document) if document is not None else None

    def put(self, cache_id: str, document: Dict[str, Any]) -> None:
        self._store[cache_id] = copy.deepcopy(document)
        self.writes += 1
