"""
Day-granularity signal computation used by the cached pulse-signals endpoint.

Counts each topic at most once per date, compares two adjacent windows and
reports rising, falling and persistent topics. Canonicalization here is only
trim / lowercase / collapse whitespace; no synonyms, no stopwords.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Sequence, Set, Tuple

from industry_pulse.signals.domain.brief import BriefInput
from industry_pulse.signals.domain.date_window import date_range, previous_window
from industry_pulse.signals.domain.signal_item import SignalItem, SignalsMeta, SignalsResult

MAX_ITEMS = 25
PERSISTENCE_RATIO = 0.6

_WHITESPACE = re.compile(r"\s+")


def canonicalize(topic: str) -> str:
    return _WHITESPACE.sub(" ", topic.strip().lower())


def _intensity(recent_count: int, window_days: int) -> int:
    if window_days <= 0:
        return 0
    # Half-up, not banker's rounding: 1/2 of the window is 50, 1/8 is 13
    ratio = Decimal(recent_count) * 100 / Decimal(window_days)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _count_topics(
        dates: Sequence[str],
        topics_by_date: Dict[str, List[str]]
) -> Dict[str, Tuple[int, str]]:
    """
    canonical -> (days present, first raw form seen)
    """
    counts: Dict[str, Tuple[int, str]] = {}
    for date in dates:
        topics = topics_by_date.get(date)
        if not topics:
            continue
        seen: Set[str] = set()
        for topic in topics:
            canon = canonicalize(topic)
            if not canon or canon in seen:
                continue
            seen.add(canon)
            count, display = counts.get(canon, (0, topic))
            counts[canon] = (count + 1, display)
    return counts


def compute_signals(
        briefs: Sequence[BriefInput],
        date_key: str,
        window_days: int = 7
) -> SignalsResult:
    recent_dates = date_range(date_key, window_days) if window_days > 0 else []
    prev_dates = previous_window(recent_dates, window_days)

    # Briefs sharing a date are merged into one topic list
    topics_by_date: Dict[str, List[str]] = {}
    for brief in briefs:
        topics_by_date.setdefault(brief.date, []).extend(brief.topics)

    recent_counts = _count_topics(recent_dates, topics_by_date)
    prev_counts = _count_topics(prev_dates, topics_by_date)

    all_canonical = sorted(set(recent_counts) | set(prev_counts))

    signals: List[SignalItem] = []
    for canon in all_canonical:
        recent_count, recent_display = recent_counts.get(canon, (0, ""))
        prev_count, prev_display = prev_counts.get(canon, (0, ""))
        display = recent_display or prev_display or canon

        sparkline = tuple(
            1 if any(canonicalize(t) == canon for t in topics_by_date.get(d, ())) else 0
            for d in recent_dates
        )

        signals.append(SignalItem(
            topic=display,
            canonical=canon,
            recent_count=recent_count,
            prev_count=prev_count,
            delta=recent_count - prev_count,
            intensity=_intensity(recent_count, window_days),
            sparkline=sparkline,
        ))

    rising = sorted(
        (s for s in signals if s.delta > 0),
        key=lambda s: (-s.delta, -s.recent_count, s.canonical)
    )
    falling = sorted(
        (s for s in signals if s.delta < 0),
        key=lambda s: (s.delta, -s.recent_count, s.canonical)
    )
    threshold = math.ceil(round(window_days * PERSISTENCE_RATIO, 9))
    persistent = sorted(
        (s for s in signals if s.recent_count >= threshold and s.recent_count > 0),
        key=lambda s: (-s.recent_count, s.canonical)
    )

    return SignalsResult(
        meta=SignalsMeta(
            date_key=date_key,
            window_days=window_days,
            recent_dates=tuple(recent_dates),
            prev_dates=tuple(prev_dates),
            total_topics=len(all_canonical),
            briefs_available=len(topics_by_date),
        ),
        rising=tuple(rising[:MAX_ITEMS]),
        falling=tuple(falling[:MAX_ITEMS]),
        persistent=tuple(persistent[:MAX_ITEMS]),
    )
