import time
from typing import Any, Dict, List, Optional, Sequence

from industry_pulse.config.settings import PulseSettings, settings as default_settings
from industry_pulse.core.time.system_time_source import SystemTimeSource
from industry_pulse.core.time.time_source import TimeSource
from industry_pulse.observability.structured_logger import StructuredPulseLogger
from industry_pulse.signals.domain.brief import BriefInput
from industry_pulse.signals.domain.date_window import batched, clamp_window, query_dates, validate_date_key
from industry_pulse.signals.interfaces.brief_source import BriefSource
from industry_pulse.signals.interfaces.signals_store import SignalsStore
from industry_pulse.signals.services.legacy_signals import compute_signals


def signals_cache_id(date_key: str, window_days: int) -> str:
    return f"{date_key}_w{window_days}"


class SignalsGenerationService:
    """
    On-demand rising / falling / persistent signals with a write-once cache.
    A cached result for the same date key and window is returned as-is, never recomputed.
    """

    def __init__(
            self,
            brief_source: BriefSource,
            signals_store: SignalsStore,
            time_source: Optional[TimeSource] = None,
            logger: Optional[StructuredPulseLogger] = None,
            config: Optional[PulseSettings] = None
    ):
        self.config = config or default_settings
        self.brief_source = brief_source
        self.signals_store = signals_store
        self.time_source = time_source or SystemTimeSource()
        self.logger = logger or StructuredPulseLogger()

    def get_signals(self, window_days: Optional[int] = None, date_key: Optional[str] = None) -> Dict[str, Any]:
        window = clamp_window(window_days, default=self.config.WINDOW_DAYS)
        key = validate_date_key(date_key) if date_key else self.time_source.today_key(self.config.BRIEF_TIMEZONE)
        cache_id = signals_cache_id(key, window)
        start = time.perf_counter()

        # 1. Cache
        cached = self.signals_store.get(cache_id)
        if cached is not None:
            self.logger.emit("signals_cache_hit", cache_id=cache_id)
            return self._response(cached, cached=True)

        # 2. Fetch both windows, compute
        dates = query_dates(key, window)
        briefs = self._fetch(dates)
        result = compute_signals(briefs, key, window)

        # 3. Cache; a failed write still returns the computed result
        document = result.to_document()
        document["narrative"] = ""
        stored = dict(document)
        stored.update({
            "dateKey": key,
            "windowDays": window,
            "createdAt": self.time_source.now().isoformat(),
        })
        try:
            self.signals_store.put(cache_id, stored)
        except Exception as e:
            self.logger.warn("signals_cache_write_failed", cache_id=cache_id, error=str(e))

        self.logger.emit(
            "signals_computed",
            cache_id=cache_id,
            briefs_fetched=len(briefs),
            brief_dates_queried=len(dates),
            rising=len(result.rising),
            falling=len(result.falling),
            persistent=len(result.persistent),
            total_ms=int((time.perf_counter() - start) * 1000),
        )
        return self._response(document, cached=False)

    @staticmethod
    def _response(document: Dict[str, Any], cached: bool) -> Dict[str, Any]:
        return {
            "cached": cached,
            "narrative": document.get("narrative") or "",
            "rising": document.get("rising", []),
            "falling": document.get("falling", []),
            "persistent": document.get("persistent", []),
            "meta": document.get("meta", {}),
        }

    def _fetch(self, dates: Sequence[str]) -> List[BriefInput]:
        briefs: List[BriefInput] = []
        for batch in batched(dates, self.config.FETCH_BATCH_SIZE):
            briefs.extend(self.brief_source.fetch(batch))
        return briefs
