from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class SignalSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class SignalItem:
    topic: str                     # first raw form seen
    canonical: str
    recent_count: int              # days present in recent window
    prev_count: int                # days present in previous window
    delta: int
    intensity: int                 # 0-100, share of recent days with the topic
    sparkline: Tuple[int, ...]     # 1 = present that day, oldest first

    # Filled in later by the narrative layer, never by the aggregator
    why: Optional[str] = None
    implication: Optional[str] = None
    severity: Optional[SignalSeverity] = None

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "topic": self.topic,
            "canonical": self.canonical,
            "recentCount": self.recent_count,
            "prevCount": self.prev_count,
            "delta": self.delta,
            "intensity": self.intensity,
            "sparkline": list(self.sparkline),
        }
        if self.why is not None:
            doc["why"] = self.why
        if self.implication is not None:
            doc["implication"] = self.implication
        if self.severity is not None:
            doc["severity"] = self.severity.value
        return doc


@dataclass(frozen=True)
class SignalsMeta:
    date_key: str
    window_days: int
    recent_dates: Tuple[str, ...]
    prev_dates: Tuple[str, ...]
    total_topics: int
    briefs_available: int          # distinct dates that had at least one brief


@dataclass(frozen=True)
class SignalsResult:
    meta: SignalsMeta
    rising: Tuple[SignalItem, ...] = field(default_factory=tuple)
    falling: Tuple[SignalItem, ...] = field(default_factory=tuple)
    persistent: Tuple[SignalItem, ...] = field(default_factory=tuple)

    def to_document(self) -> Dict[str, Any]:
        return {
            "rising": [s.to_document() for s in self.rising],
            "falling": [s.to_document() for s in self.falling],
            "persistent": [s.to_document() for s in self.persistent],
            "meta": {
                "dateKey": self.meta.date_key,
                "windowDays": self.meta.window_days,
                "recentDates": list(self.meta.recent_dates),
                "prevDates": list(self.meta.prev_dates),
                "totalTopics": self.meta.total_topics,
                "briefsAvailable": self.meta.briefs_available,
            },
        }
