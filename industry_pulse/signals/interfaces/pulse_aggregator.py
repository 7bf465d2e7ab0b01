from abc import ABC, abstractmethod
from typing import Sequence
from industry_pulse.signals.domain.brief import BriefInput
from industry_pulse.signals.domain.pulse import PulseSnapshot

class PulseAggregator(ABC):
    """
    Interface for turning daily briefs into a windowed pulse snapshot.
    Must be pure and deterministic: same input, byte-identical output.
    """
    @abstractmethod
    def compute(
        self,
        briefs: Sequence[BriefInput],
        date_key: str,
        window_days: int = 7
    ) -> PulseSnapshot:
        pass
