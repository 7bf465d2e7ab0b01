from abc import ABC, abstractmethod
from typing import Sequence


class TopicNormalizer(ABC):
    """
    Interface for turning free-text topics into stable canonical keys.
    Must be pure, deterministic and idempotent.
    """
    @abstractmethod
    def canonical_key(self, raw: str) -> str:
        """
        Returns the canonical key, or "" when the topic is pure noise.
        """
        pass

    @abstractmethod
    def pick_display_name(self, canon_key: str, raw_candidates: Sequence[str]) -> str:
        pass
