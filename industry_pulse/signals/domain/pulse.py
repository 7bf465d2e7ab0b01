from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from industry_pulse.signals.domain.topic_type import TopicType


@dataclass(frozen=True)
class PulseTopic:
    """
    Fully computed metrics for one canonical topic.
    momentum == mentions - baseline_mentions; len(trend_series) == window days.
    """
    key: str                       # canonical key
    display_name: str              # shortest raw form seen
    type: TopicType
    mentions: int                  # briefs mentioning it in the recent window
    baseline_mentions: int         # same, in the baseline window
    momentum: int
    days_present: int              # distinct recent dates
    unique_sources: int            # distinct source ids across recent briefs
    trend_series: Tuple[int, ...]  # per recent date, oldest first

    def to_document(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "displayName": self.display_name,
            "type": self.type.value,
            "mentions": self.mentions,
            "baselineMentions": self.baseline_mentions,
            "momentum": self.momentum,
            "daysPresent": self.days_present,
            "uniqueSources": self.unique_sources,
            "trendSeries": list(self.trend_series),
        }


@dataclass(frozen=True)
class PulseSnapshot:
    window_days: int
    date_key: str
    total_topics: int              # distinct keys across both windows, before capping
    rising: Tuple[PulseTopic, ...] = field(default_factory=tuple)
    falling: Tuple[PulseTopic, ...] = field(default_factory=tuple)
    stable: Tuple[PulseTopic, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls, window_days: int, date_key: str) -> 'PulseSnapshot':
        return cls(window_days=window_days, date_key=date_key, total_topics=0)

    def to_document(self) -> Dict[str, Any]:
        return {
            "windowDays": self.window_days,
            "dateKey": self.date_key,
            "totalTopics": self.total_topics,
            "rising": [t.to_document() for t in self.rising],
            "falling": [t.to_document() for t in self.falling],
            "stable": [t.to_document() for t in self.stable],
        }
