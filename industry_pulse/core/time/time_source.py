from abc import ABC, abstractmethod
from datetime import datetime

import pytz

DATE_KEY_FORMAT = "%Y-%m-%d"

# Briefs are published on New York calendar days
DEFAULT_BRIEF_TIMEZONE = "America/New_York"


class TimeSource(ABC):
    """
    Clock injected into the snapshot runner.
    now() is UTC-aware; today_key() is the brief date key for that instant.
    """
    @abstractmethod
    def now(self) -> datetime:
        pass

    def today_key(self, tz_name: str = DEFAULT_BRIEF_TIMEZONE) -> str:
        return self.now().astimezone(pytz.timezone(tz_name)).strftime(DATE_KEY_FORMAT)
