from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

class SnapshotStore(ABC):
    """
    Holds the latest serialized pulse snapshot per window size.
    """
    @abstractmethod
    def get(self, window_days: int) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def put(self, window_days: int, document: Dict[str, Any]) -> None:
        """
        Overwrites the stored document for this window atomically.
        """
        pass
