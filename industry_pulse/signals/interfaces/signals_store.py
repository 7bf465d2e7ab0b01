from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

class SignalsStore(ABC):
    """
    Write-once cache of serialized signal results, keyed "{dateKey}_w{windowDays}".
    """
    @abstractmethod
    def get(self, cache_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def put(self, cache_id: str, document: Dict[str, Any]) -> None:
        pass
