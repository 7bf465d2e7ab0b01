import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from industry_pulse.config.settings import PulseSettings
from industry_pulse.core.time.frozen_time_source import FrozenTimeSource
from industry_pulse.observability.structured_logger import StructuredPulseLogger
from industry_pulse.signals.adapters.in_memory_brief_source import InMemoryBriefSource
from industry_pulse.signals.adapters.in_memory_snapshot_store import InMemorySnapshotStore
from industry_pulse.signals.domain.exceptions import (
    InvalidDateKey,
    InvalidWindow,
    PulseError,
    SnapshotGenerationFailed,
)
from industry_pulse.signals.services.pulse_generation import PulseGenerationService

FIXED_NOW = datetime(2026, 2, 10, 6, 0, 0, tzinfo=timezone.utc)
DATE_KEY = "2026-02-10"


# --- Fixtures ---

@pytest.fixture
def config():
    return PulseSettings(
        WINDOW_DAYS=7,
        SNAPSHOT_WINDOWS=[7, 30],
        SNAPSHOT_FRESHNESS_MINUTES=60,
        FETCH_BATCH_SIZE=30,
        VOCABULARY_PATH=None,
    )


@pytest.fixture
def brief_source():
    source = InMemoryBriefSource()
    for day in ["2026-02-04", "2026-02-05", "2026-02-06", "2026-02-07"]:
        source.add_document(day, {
            "topics": ["Nuclear Verdicts"],
            "sourcesUsed": [{"sourceId": f"src-{day}"}],
        })
    source.add_document("2026-01-30", {"topics": ["Nuclear Verdicts", "Cyber Risk"]})
    return source


@pytest.fixture
def time_source():
    return FrozenTimeSource(FIXED_NOW)


@pytest.fixture
def store():
    return InMemorySnapshotStore()


@pytest.fixture
def service(brief_source, store, time_source, config):
    return PulseGenerationService(
        brief_source=brief_source,
        snapshot_store=store,
        time_source=time_source,
        config=config,
    )


class FlakySnapshotStore(InMemorySnapshotStore):
    def __init__(self, failing_windows):
        super().__init__()
        self.failing_windows = set(failing_windows)

    def put(self, window_days, document):
        if window_days in self.failing_windows:
            raise IOError(f"write rejected for window {window_days}")
        super().put(window_days, document)


def events(caplog):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "industry_pulse"]


# --- Tests ---

def test_generate_writes_snapshot_document(service, store):
    document = service.generate(7, DATE_KEY)

    assert document["dateKey"] == DATE_KEY
    assert document["windowDays"] == 7
    assert document["generatedAt"] == FIXED_NOW.isoformat()
    assert document["narrative"] is None
    assert document["totalTopics"] == 2

    nv = document["rising"][0]
    assert nv["key"] == "nuclear verdicts"
    assert nv["mentions"] == 4
    assert nv["baselineMentions"] == 1
    assert nv["momentum"] == 3
    assert nv["uniqueSources"] == 4
    assert nv["type"] == "regulation"
    assert document["falling"][0]["key"] == "cyber liability"

    assert store.get(7) == document
    assert store.writes == 1


def test_fetches_both_windows_in_batches(brief_source, store, time_source, config):
    service = PulseGenerationService(
        brief_source, store, time_source=time_source,
        config=config.model_copy(update={"FETCH_BATCH_SIZE": 5}),
    )

    service.generate(7, DATE_KEY)

    assert [len(batch) for batch in brief_source.fetch_calls] == [5, 5, 4]
    assert brief_source.fetch_calls[0][0] == "2026-01-28"
    assert brief_source.fetch_calls[-1][-1] == DATE_KEY


def test_fresh_snapshot_is_reused(service, store, brief_source, time_source):
    first = service.generate(7, DATE_KEY)
    time_source.advance(timedelta(minutes=30))

    second = service.generate(7, DATE_KEY)

    assert second == first
    assert store.writes == 1
    assert len(brief_source.fetch_calls) == 1


def test_stale_snapshot_is_recomputed(service, store, time_source):
    service.generate(7, DATE_KEY)
    time_source.advance(timedelta(minutes=61))

    document = service.generate(7, DATE_KEY)

    assert store.writes == 2
    assert document["generatedAt"] == (FIXED_NOW + timedelta(minutes=61)).isoformat()


def test_new_date_key_is_recomputed(service, store):
    service.generate(7, DATE_KEY)
    service.generate(7, "2026-02-11")

    assert store.writes == 2
    assert store.get(7)["dateKey"] == "2026-02-11"


def test_force_skips_redundancy_guard(service, store):
    service.generate(7, DATE_KEY)
    service.generate(7, DATE_KEY, force=True)
    assert store.writes == 2


def test_unparseable_timestamp_is_not_fresh(service, store):
    store.put(7, {"dateKey": DATE_KEY, "generatedAt": "not-a-time", "totalTopics": 0})

    document = service.generate(7, DATE_KEY)

    assert document["totalTopics"] == 2
    assert store.writes == 2


def test_generate_all_runs_every_window(service, store):
    documents = service.generate_all()

    assert sorted(documents) == [7, 30]
    assert documents[30]["windowDays"] == 30
    assert documents[30]["dateKey"] == DATE_KEY
    # a 30-day recent window holds everything, nothing in the baseline
    assert documents[30]["rising"][0]["mentions"] == 5
    assert store.get(30) is not None


def test_rejects_bad_window(service):
    with pytest.raises(InvalidWindow):
        service.generate(0, DATE_KEY)


def test_rejects_bad_date_key(service):
    with pytest.raises(InvalidDateKey):
        service.generate(7, "2026-02-31")


def test_logs_structured_events(service, time_source, caplog):
    caplog.set_level(logging.INFO, logger="industry_pulse")

    service.generate(7, DATE_KEY)
    service.generate(7, DATE_KEY)

    logged = events(caplog)
    assert [e["event_type"] for e in logged] == ["pulse_snapshot_written", "pulse_snapshot_reused"]
    written = logged[0]
    assert written["briefs_fetched"] == 5
    assert written["brief_dates_queried"] == 14
    assert written["rising"] == 1
    assert written["falling"] == 1
    assert "compute_ms" in written and "doc_size_bytes" in written


def test_custom_logger_instance(brief_source, store, time_source, config):
    captured = []

    class ListHandler(logging.Handler):
        def emit(self, record):
            captured.append(json.loads(record.getMessage()))

    log = logging.getLogger("pulse-test")
    log.setLevel(logging.INFO)
    log.addHandler(ListHandler())

    service = PulseGenerationService(
        brief_source, store, time_source=time_source, config=config,
        logger=StructuredPulseLogger(log),
    )
    service.generate(7, DATE_KEY)

    assert captured[0]["event_type"] == "pulse_snapshot_written"
    assert captured[0]["window_days"] == 7


def test_failed_window_does_not_block_later_windows(brief_source, time_source, config, caplog):
    caplog.set_level(logging.INFO, logger="industry_pulse")
    store = FlakySnapshotStore(failing_windows=[7])
    service = PulseGenerationService(brief_source, store, time_source=time_source, config=config)

    with pytest.raises(SnapshotGenerationFailed) as exc_info:
        service.generate_all(DATE_KEY)

    assert isinstance(exc_info.value, PulseError)
    assert "w7" in str(exc_info.value)
    assert "w30" not in str(exc_info.value)
    assert list(exc_info.value.failed) == [7]
    assert "write rejected" in exc_info.value.failed[7]

    assert store.get(7) is None
    assert store.get(30)["dateKey"] == DATE_KEY
    assert sorted(exc_info.value.documents) == [30]

    failures = [e for e in events(caplog) if e["event_type"] == "pulse_snapshot_failed"]
    assert [f["window_days"] for f in failures] == [7]
    assert failures[0]["error_type"] == "OSError"


def test_every_failed_window_is_named(brief_source, time_source, config):
    store = FlakySnapshotStore(failing_windows=[7, 30])
    service = PulseGenerationService(brief_source, store, time_source=time_source, config=config)

    with pytest.raises(SnapshotGenerationFailed, match="w7, w30"):
        service.generate_all(DATE_KEY)
    assert store.writes == 0


def test_generate_all_rejects_bad_date_key_up_front(service, store):
    with pytest.raises(InvalidDateKey):
        service.generate_all("2026-13-01")
    assert store.writes == 0


def test_generate_all_logs_run_summary(service, caplog):
    caplog.set_level(logging.INFO, logger="industry_pulse")

    service.generate_all(DATE_KEY)

    summary = events(caplog)[-1]
    assert summary["event_type"] == "pulse_snapshot_run_complete"
    assert summary["total_topics"] == {"7": 2, "30": 2}


def test_default_date_key_follows_brief_timezone(brief_source, store, config):
    # 02:00Z on the 11th is still the evening of the 10th in New York
    late_evening = FrozenTimeSource(datetime(2026, 2, 11, 2, 0, tzinfo=timezone.utc))
    service = PulseGenerationService(brief_source, store, time_source=late_evening, config=config)

    documents = service.generate_all()

    assert documents[7]["dateKey"] == DATE_KEY
    assert documents[7]["rising"][0]["mentions"] == 4


def test_default_freshness_reuses_snapshot_all_day(brief_source, store, time_source):
    # scheduler runs overnight, on-demand calls later the same day reuse its output
    service = PulseGenerationService(
        brief_source, store, time_source=time_source,
        config=PulseSettings(_env_file=None, SNAPSHOT_FRESHNESS_MINUTES=24 * 60),
    )
    service.generate(7, DATE_KEY)
    time_source.advance(timedelta(hours=16))

    service.generate(7, DATE_KEY)

    assert store.writes == 1
    assert PulseSettings(_env_file=None).SNAPSHOT_FRESHNESS_MINUTES == 1440
