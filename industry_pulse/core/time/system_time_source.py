from datetime import datetime, timezone
from industry_pulse.core.time.time_source import TimeSource

class SystemTimeSource(TimeSource):
    """
    Wall clock, always UTC so date keys roll over at UTC midnight.
    """
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
