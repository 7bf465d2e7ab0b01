import json
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from industry_pulse.config.settings import PulseSettings, settings as default_settings
from industry_pulse.core.time.system_time_source import SystemTimeSource
from industry_pulse.core.time.time_source import TimeSource
from industry_pulse.observability.structured_logger import StructuredPulseLogger
from industry_pulse.signals.domain.brief import BriefInput
from industry_pulse.signals.domain.date_window import batched, query_dates, validate_date_key
from industry_pulse.signals.domain.exceptions import InvalidWindow, SnapshotGenerationFailed
from industry_pulse.signals.interfaces.brief_source import BriefSource
from industry_pulse.signals.interfaces.pulse_aggregator import PulseAggregator
from industry_pulse.signals.interfaces.snapshot_store import SnapshotStore
from industry_pulse.signals.services.pulse_snapshot import PulseSnapshotAggregator
from industry_pulse.signals.services.topic_normalization import VocabularyTopicNormalizer
from industry_pulse.signals.services.vocabulary_loader import TopicVocabularyLoader


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def build_aggregator(config: PulseSettings, logger: Optional[StructuredPulseLogger] = None) -> PulseSnapshotAggregator:
    vocabulary = TopicVocabularyLoader(config.VOCABULARY_PATH, logger=logger).load()
    return PulseSnapshotAggregator(
        normalizer=VocabularyTopicNormalizer(vocabulary),
        max_items=config.MAX_ITEMS,
        persistence_mode=config.PERSISTENCE_MODE,
        persistence_ratio=config.PERSISTENCE_RATIO,
    )


class PulseGenerationService:
    """
    Calling layer around the pure aggregator.
    Fetches briefs for both windows, computes, serializes and stores one snapshot per window size.
    A stored snapshot for the same date key younger than the freshness limit is reused.
    """

    def __init__(
            self,
            brief_source: BriefSource,
            snapshot_store: SnapshotStore,
            aggregator: Optional[PulseAggregator] = None,
            time_source: Optional[TimeSource] = None,
            logger: Optional[StructuredPulseLogger] = None,
            config: Optional[PulseSettings] = None
    ):
        self.config = config or default_settings
        self.brief_source = brief_source
        self.snapshot_store = snapshot_store
        self.logger = logger or StructuredPulseLogger()
        self.aggregator = aggregator or build_aggregator(self.config, self.logger)
        self.time_source = time_source or SystemTimeSource()
        self.freshness = timedelta(minutes=self.config.SNAPSHOT_FRESHNESS_MINUTES)

    def generate(self, window_days: int, date_key: str, force: bool = False) -> Dict[str, Any]:
        if window_days < 1:
            raise InvalidWindow(f"window_days must be >= 1, got {window_days}")
        validate_date_key(date_key)
        start = time.perf_counter()

        # 1. Redundancy guard
        if not force:
            existing = self.snapshot_store.get(window_days)
            if existing is not None and self._is_fresh(existing, date_key):
                self.logger.emit(
                    "pulse_snapshot_reused",
                    window_days=window_days,
                    date_key=date_key,
                    total_topics=existing.get("totalTopics"),
                    duration_ms=_elapsed_ms(start),
                )
                return existing

        # 2. Fetch both windows
        fetch_start = time.perf_counter()
        dates = query_dates(date_key, window_days)
        briefs = self._fetch(dates)
        fetch_ms = _elapsed_ms(fetch_start)

        # 3. Compute
        compute_start = time.perf_counter()
        snapshot = self.aggregator.compute(briefs, date_key, window_days)
        compute_ms = _elapsed_ms(compute_start)

        # 4. Serialize and store
        document = snapshot.to_document()
        document["generatedAt"] = self.time_source.now().isoformat()
        document["narrative"] = None
        doc_size = len(json.dumps(document))
        self.snapshot_store.put(window_days, document)

        self.logger.emit(
            "pulse_snapshot_written",
            window_days=window_days,
            date_key=date_key,
            total_topics=snapshot.total_topics,
            rising=len(snapshot.rising),
            falling=len(snapshot.falling),
            stable=len(snapshot.stable),
            briefs_fetched=len(briefs),
            brief_dates_queried=len(dates),
            doc_size_bytes=doc_size,
            fetch_ms=fetch_ms,
            compute_ms=compute_ms,
            total_ms=_elapsed_ms(start),
        )
        return document

    def generate_all(self, date_key: Optional[str] = None, force: bool = False) -> Dict[int, Dict[str, Any]]:
        """
        Scheduler entry point. One failing window does not stop the others;
        failures are reported together once every window has been tried.
        """
        key = date_key or self.time_source.today_key(self.config.BRIEF_TIMEZONE)
        validate_date_key(key)
        documents: Dict[int, Dict[str, Any]] = {}
        failed: Dict[int, str] = {}

        for window in self.config.SNAPSHOT_WINDOWS:
            try:
                documents[window] = self.generate(window, key, force=force)
            except Exception as e:
                failed[window] = str(e) or type(e).__name__
                self.logger.warn(
                    "pulse_snapshot_failed",
                    window_days=window,
                    date_key=key,
                    error=failed[window],
                    error_type=type(e).__name__,
                )

        if failed:
            raise SnapshotGenerationFailed(failed, documents)
        self.logger.emit(
            "pulse_snapshot_run_complete",
            date_key=key,
            total_topics={w: d.get("totalTopics") for w, d in documents.items()},
        )
        return documents

    def _fetch(self, dates: Sequence[str]) -> List[BriefInput]:
        briefs: List[BriefInput] = []
        for batch in batched(dates, self.config.FETCH_BATCH_SIZE):
            briefs.extend(self.brief_source.fetch(batch))
        return briefs

    def _is_fresh(self, existing: Dict[str, Any], date_key: str) -> bool:
        if existing.get("dateKey") != date_key:
            return False
        generated_at = existing.get("generatedAt")
        if not isinstance(generated_at, str):
            return False
        try:
            generated = datetime.fromisoformat(generated_at)
        except ValueError:
            self.logger.warn("pulse_snapshot_bad_timestamp", generated_at=generated_at)
            return False
        if generated.tzinfo is None:
            return False
        return self.time_source.now() - generated < self.freshness
