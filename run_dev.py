import json
import logging

from industry_pulse.config.settings import settings
from industry_pulse.core.time.system_time_source import SystemTimeSource
from industry_pulse.signals.adapters.in_memory_brief_source import InMemoryBriefSource
from industry_pulse.signals.adapters.in_memory_snapshot_store import InMemorySnapshotStore
from industry_pulse.signals.adapters.in_memory_signals_store import InMemorySignalsStore
from industry_pulse.signals.domain.date_window import date_range
from industry_pulse.signals.services.pulse_generation import PulseGenerationService
from industry_pulse.signals.services.signals_generation import SignalsGenerationService
from industry_pulse.signals.services.topic_detail import PulseTopicDetailService

SAMPLE_TOPICS = [
    ["Nuclear Verdicts", "Cat Bonds", "Florida Property"],
    ["Social Inflation", "Catastrophe Bonds", "Reinsurance Renewals"],
    ["Nuclear Verdict", "Cyber Risk"],
    ["Cat Bonds", "Commercial Automobile Losses"],
    ["Nuclear Verdicts", "Florida Citizens", "Workers Compensation"],
]


def seed_briefs(source: InMemoryBriefSource, date_key: str, days: int) -> None:
    for i, day in enumerate(date_range(date_key, days)):
        topics = SAMPLE_TOPICS[i % len(SAMPLE_TOPICS)]
        # Recent days carry an extra topic so something is rising
        if i >= days // 2:
            topics = topics + ["AI Underwriting Platforms"]
        source.add_document(day, {
            "topics": topics,
            "sourcesUsed": [{"sourceId": f"feed-{i % 3}"}, {"sourceId": "wire"}],
            "sourceArticleIds": [f"article-{i}"],
        })


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    print("Initializing DEV environment...")

    # 1. Infrastructure
    time_source = SystemTimeSource()
    brief_source = InMemoryBriefSource()
    store = InMemorySnapshotStore()
    today = time_source.today_key(settings.BRIEF_TIMEZONE)
    seed_briefs(brief_source, today, max(settings.SNAPSHOT_WINDOWS) * 2)

    # 2. Service
    service = PulseGenerationService(
        brief_source=brief_source,
        snapshot_store=store,
        time_source=time_source,
    )

    # 3. Generate every window, then again to hit the freshness guard
    service.generate_all(today)
    service.generate_all(today)

    for window in settings.SNAPSHOT_WINDOWS:
        document = store.get(window)
        print(f"--- {window}d pulse ({document['totalTopics']} topics) ---")
        for bucket in ["rising", "falling", "stable"]:
            names = [f"{t['displayName']} ({t['momentum']:+d})" for t in document[bucket]]
            print(f"{bucket}: {', '.join(names) or '-'}")

    # 4. Drilldown on the top rising topic
    top = (store.get(settings.WINDOW_DAYS) or {}).get("rising", [])
    if top:
        detail = PulseTopicDetailService(brief_source, store, time_source=time_source).get_detail(top[0]["key"])
        print(f"{detail.topic['displayName']}: driven by {', '.join(detail.driver_dates)}")

    # 5. Cached signals, second call is a cache hit
    signals_service = SignalsGenerationService(brief_source, InMemorySignalsStore(), time_source=time_source)
    signals_service.get_signals(settings.WINDOW_DAYS, today)
    response = signals_service.get_signals(settings.WINDOW_DAYS, today)
    print(json.dumps({"cached": response["cached"], **response["meta"]}, indent=2))

    print(f"Dev run complete ({store.writes} snapshot writes).")


if __name__ == "__main__":
    main()
