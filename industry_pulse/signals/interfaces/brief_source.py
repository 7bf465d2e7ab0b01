from abc import ABC, abstractmethod
from typing import List, Sequence
from industry_pulse.signals.domain.brief import BriefInput

class BriefSource(ABC):
    """
    Read side of the daily brief document collection.
    """
    @abstractmethod
    def fetch(self, dates: Sequence[str]) -> List[BriefInput]:
        """
        Returns the briefs with topics for the given date keys. Missing dates are skipped.
        """
        pass
