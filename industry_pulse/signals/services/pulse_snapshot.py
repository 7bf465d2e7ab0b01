"""
Deterministic pulse snapshot computation.

Input:  BriefInput records (date, raw topics, source ids)
Output: PulseSnapshot with rising / falling / stable topics and full metrics

Pure function of its inputs. No IO, no AI calls.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Set

from industry_pulse.signals.domain.brief import BriefInput
from industry_pulse.signals.domain.date_window import date_range, previous_window
from industry_pulse.signals.domain.pulse import PulseSnapshot, PulseTopic
from industry_pulse.signals.interfaces.pulse_aggregator import PulseAggregator
from industry_pulse.signals.interfaces.topic_classifier import TopicClassifier
from industry_pulse.signals.interfaces.topic_normalizer import TopicNormalizer
from industry_pulse.signals.services.topic_classification import RuleBasedTopicClassifier
from industry_pulse.signals.services.topic_normalization import VocabularyTopicNormalizer

PersistenceMode = Literal["momentum-zero", "threshold"]

MAX_ITEMS = 25


@dataclass
class _TopicAccumulator:
    raw_names: List[str] = field(default_factory=list)
    dates: Set[str] = field(default_factory=set)
    mentions: int = 0               # two briefs on the same day count twice
    source_ids: Set[str] = field(default_factory=set)
    per_date: Dict[str, int] = field(default_factory=dict)


class PulseSnapshotAggregator(PulseAggregator):
    """
    Compares a recent window against the equally long window right before it.

    persistence_mode:
      "momentum-zero" - third list holds topics with momentum == 0 and mentions > 0
      "threshold"     - third list holds topics present on at least
                        ceil(persistence_ratio * window_days) recent days
    """

    def __init__(
            self,
            normalizer: Optional[TopicNormalizer] = None,
            classifier: Optional[TopicClassifier] = None,
            max_items: int = MAX_ITEMS,
            persistence_mode: PersistenceMode = "momentum-zero",
            persistence_ratio: float = 0.6
    ):
        if persistence_mode not in ("momentum-zero", "threshold"):
            raise ValueError(f"Unknown persistence mode: {persistence_mode!r}")
        if not 0.0 < persistence_ratio <= 1.0:
            raise ValueError(f"persistence_ratio must be in (0, 1], got {persistence_ratio!r}")
        self.normalizer = normalizer or VocabularyTopicNormalizer()
        self.classifier = classifier or RuleBasedTopicClassifier()
        self.max_items = max_items
        self.persistence_mode = persistence_mode
        self.persistence_ratio = persistence_ratio

    def compute(
            self,
            briefs: Sequence[BriefInput],
            date_key: str,
            window_days: int = 7
    ) -> PulseSnapshot:
        if window_days < 1:
            return PulseSnapshot.empty(window_days, date_key)

        # 1. Windows
        recent_dates = date_range(date_key, window_days)
        baseline_dates = previous_window(recent_dates, window_days)

        # 2. Accumulate each window independently
        recent_acc = self._accumulate(briefs, set(recent_dates))
        baseline_acc = self._accumulate(briefs, set(baseline_dates))

        # 3. Merge over the key union
        all_keys = sorted(set(recent_acc) | set(baseline_acc))
        topics = [
            self._build_topic(key, recent_acc.get(key), baseline_acc.get(key), recent_dates)
            for key in all_keys
        ]

        # 4. Partition, sort, cap
        rising = sorted(
            (t for t in topics if t.momentum > 0),
            key=lambda t: (-t.momentum, -t.mentions, t.key)
        )
        falling = sorted(
            (t for t in topics if t.momentum < 0),
            key=lambda t: (t.momentum, -t.baseline_mentions, t.key)
        )
        third = self._third_list(topics, window_days)

        return PulseSnapshot(
            window_days=window_days,
            date_key=date_key,
            total_topics=len(all_keys),
            rising=tuple(rising[:self.max_items]),
            falling=tuple(falling[:self.max_items]),
            stable=tuple(third[:self.max_items]),
        )

    def _third_list(self, topics: Iterable[PulseTopic], window_days: int) -> List[PulseTopic]:
        if self.persistence_mode == "threshold":
            threshold = self.persistence_threshold(window_days)
            return sorted(
                (t for t in topics if t.days_present >= threshold),
                key=lambda t: (-t.days_present, -t.mentions, t.key)
            )
        return sorted(
            (t for t in topics if t.momentum == 0 and t.mentions > 0),
            key=lambda t: (-t.mentions, -t.days_present, t.key)
        )

    def persistence_threshold(self, window_days: int) -> int:
        # round() keeps float noise (0.6 * 5 -> 3.0000000000000004) from bumping the ceiling
        return math.ceil(round(self.persistence_ratio * window_days, 9))

    def _accumulate(
            self,
            briefs: Sequence[BriefInput],
            date_set: Set[str]
    ) -> Dict[str, _TopicAccumulator]:
        acc: Dict[str, _TopicAccumulator] = {}

        for brief in briefs:
            if brief.date not in date_set:
                continue

            # A topic repeated inside one brief counts once for that brief
            seen_in_brief: Set[str] = set()

            for raw_topic in brief.topics:
                key = self.normalizer.canonical_key(raw_topic)
                if not key or key in seen_in_brief:
                    continue
                seen_in_brief.add(key)

                entry = acc.get(key)
                if entry is None:
                    entry = _TopicAccumulator()
                    acc[key] = entry

                entry.raw_names.append(raw_topic)
                entry.dates.add(brief.date)
                entry.mentions += 1
                entry.source_ids.update(brief.source_ids)
                entry.per_date[brief.date] = entry.per_date.get(brief.date, 0) + 1

        return acc

    def _build_topic(
            self,
            key: str,
            recent: Optional[_TopicAccumulator],
            baseline: Optional[_TopicAccumulator],
            recent_dates: Sequence[str]
    ) -> PulseTopic:
        mentions = recent.mentions if recent else 0
        baseline_mentions = baseline.mentions if baseline else 0

        raw_names = (recent.raw_names if recent else []) + (baseline.raw_names if baseline else [])
        per_date = recent.per_date if recent else {}

        return PulseTopic(
            key=key,
            display_name=self.normalizer.pick_display_name(key, raw_names),
            type=self.classifier.classify(key),
            mentions=mentions,
            baseline_mentions=baseline_mentions,
            momentum=mentions - baseline_mentions,
            days_present=len(recent.dates) if recent else 0,
            unique_sources=len(recent.source_ids) if recent else 0,
            trend_series=tuple(per_date.get(d, 0) for d in recent_dates),
        )


_default_aggregator = PulseSnapshotAggregator()


def compute_pulse_snapshot(
        briefs: Sequence[BriefInput],
        date_key: str,
        window_days: int = 7
) -> PulseSnapshot:
    return _default_aggregator.compute(briefs, date_key, window_days)
