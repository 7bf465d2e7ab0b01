from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class PulseTopicDetail:
    """
    Drilldown for one topic of a stored snapshot: its metrics as stored,
    plus the recent-window briefs that mention it.
    """
    window_days: int
    snapshot_date_key: str
    topic: Dict[str, Any]                                # serialized PulseTopic from the snapshot
    driver_dates: Tuple[str, ...] = field(default_factory=tuple)  # oldest first
    article_ids: Tuple[str, ...] = field(default_factory=tuple)   # first-seen order, no repeats
    stale: bool = False

    def to_document(self) -> Dict[str, Any]:
        doc = dict(self.topic)
        doc.update({
            "windowDays": self.window_days,
            "snapshotDateKey": self.snapshot_date_key,
            "driverDates": list(self.driver_dates),
            "articleIds": list(self.article_ids),
            "stale": self.stale,
        })
        return doc
