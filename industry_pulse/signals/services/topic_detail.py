"""
Topic drilldown over a stored pulse snapshot.

The snapshot is the source of truth for metrics; briefs are only read to find
which recent days (and which articles) mention the topic. Deterministic, no AI.
"""
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from industry_pulse.config.settings import PulseSettings, settings as default_settings
from industry_pulse.core.time.system_time_source import SystemTimeSource
from industry_pulse.core.time.time_source import TimeSource
from industry_pulse.observability.structured_logger import StructuredPulseLogger
from industry_pulse.signals.domain.date_window import batched, clamp_window, date_range, validate_date_key
from industry_pulse.signals.domain.exceptions import InvalidTopicKey, SnapshotNotFound, TopicNotFound
from industry_pulse.signals.domain.topic_detail import PulseTopicDetail
from industry_pulse.signals.interfaces.brief_source import BriefSource
from industry_pulse.signals.interfaces.snapshot_store import SnapshotStore
from industry_pulse.signals.interfaces.topic_normalizer import TopicNormalizer
from industry_pulse.signals.services.topic_normalization import VocabularyTopicNormalizer
from industry_pulse.signals.services.vocabulary_loader import TopicVocabularyLoader

SNAPSHOT_LISTS = ("rising", "falling", "stable")


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class PulseTopicDetailService:

    def __init__(
            self,
            brief_source: BriefSource,
            snapshot_store: SnapshotStore,
            normalizer: Optional[TopicNormalizer] = None,
            time_source: Optional[TimeSource] = None,
            logger: Optional[StructuredPulseLogger] = None,
            config: Optional[PulseSettings] = None
    ):
        self.config = config or default_settings
        self.brief_source = brief_source
        self.snapshot_store = snapshot_store
        self.logger = logger or StructuredPulseLogger()
        self.normalizer = normalizer or VocabularyTopicNormalizer(
            TopicVocabularyLoader(self.config.VOCABULARY_PATH, logger=self.logger).load()
        )
        self.time_source = time_source or SystemTimeSource()
        self.freshness = timedelta(minutes=self.config.SNAPSHOT_FRESHNESS_MINUTES)

    def get_detail(self, topic_key: str, window_days: Optional[int] = None) -> PulseTopicDetail:
        if not isinstance(topic_key, str) or not topic_key.strip():
            raise InvalidTopicKey("topic_key is required")
        key = topic_key.strip().lower()
        window = clamp_window(window_days, default=self.config.WINDOW_DAYS)
        start = time.perf_counter()

        # 1. Snapshot lookup
        snapshot = self.snapshot_store.get(window)
        if snapshot is None:
            raise SnapshotNotFound(f"No pulse snapshot found for window_days={window}")
        snapshot_date_key = validate_date_key(snapshot.get("dateKey"))
        stale = self._is_stale(snapshot)
        if stale:
            self.logger.warn(
                "pulse_topic_detail_stale_snapshot",
                window_days=window,
                snapshot_date_key=snapshot_date_key,
                generated_at=snapshot.get("generatedAt"),
            )

        topic = self._find_topic(snapshot, key)
        if topic is None:
            raise TopicNotFound(f"Topic {key!r} not found in the {window}D pulse snapshot")

        # 2. Briefs in the recent window that mention the topic
        brief_start = time.perf_counter()
        recent_dates = date_range(snapshot_date_key, window)
        driver_dates: List[str] = []
        article_ids: Dict[str, None] = {}
        for batch in batched(recent_dates, self.config.FETCH_BATCH_SIZE):
            for brief in self.brief_source.fetch(batch):
                if not any(self.normalizer.canonical_key(raw) == key for raw in brief.topics):
                    continue
                if brief.date not in driver_dates:
                    driver_dates.append(brief.date)
                for article_id in brief.article_ids:
                    article_ids.setdefault(article_id, None)

        detail = PulseTopicDetail(
            window_days=window,
            snapshot_date_key=snapshot_date_key,
            topic=topic,
            driver_dates=tuple(sorted(driver_dates)),
            article_ids=tuple(article_ids),
            stale=stale,
        )

        self.logger.emit(
            "pulse_topic_detail",
            topic_key=key,
            display_name=topic.get("displayName"),
            window_days=window,
            snapshot_date_key=snapshot_date_key,
            driver_dates=len(detail.driver_dates),
            candidate_articles=len(detail.article_ids),
            brief_dates_queried=len(recent_dates),
            brief_read_ms=_elapsed_ms(brief_start),
            total_ms=_elapsed_ms(start),
        )
        return detail

    @staticmethod
    def _find_topic(snapshot: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
        for list_name in SNAPSHOT_LISTS:
            for topic in snapshot.get(list_name) or []:
                if topic.get("key") == key:
                    return topic
        return None

    def _is_stale(self, snapshot: Dict[str, Any]) -> bool:
        # Stale data is still returned; an unreadable timestamp counts as stale
        generated_at = snapshot.get("generatedAt")
        if not isinstance(generated_at, str):
            return True
        try:
            generated = datetime.fromisoformat(generated_at)
        except ValueError:
            return True
        if generated.tzinfo is None:
            return True
        return self.time_source.now() - generated > self.freshness
