from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional, Sequence, TypeVar

from industry_pulse.core.time.time_source import DATE_KEY_FORMAT
from industry_pulse.signals.domain.exceptions import InvalidDateKey

T = TypeVar("T")


def _parse(date_key: str) -> date:
    year, month, day = (int(part) for part in date_key.split("-"))
    return date(year, month, day)


def _format(d: date) -> str:
    return d.strftime(DATE_KEY_FORMAT)


def date_range(end_date_key: str, count: int) -> List[str]:
    """
    `count` consecutive date keys ending on `end_date_key` (inclusive), oldest first.
    Calendar arithmetic is plain UTC dates, so month and year boundaries roll over.
    """
    end = _parse(end_date_key)
    return [_format(end - timedelta(days=i)) for i in range(count - 1, -1, -1)]


def previous_window(recent_dates: Sequence[str], count: int) -> List[str]:
    """
    The `count` dates immediately before the first recent date. No gap, no overlap.
    """
    if not recent_dates:
        return []
    prev_end = _parse(recent_dates[0]) - timedelta(days=1)
    return date_range(_format(prev_end), count)


def query_dates(date_key: str, window_days: int) -> List[str]:
    """
    Every date a caller must fetch briefs for: baseline window plus recent window.
    """
    return date_range(date_key, window_days * 2)


def batched(items: Sequence[T], size: int) -> Iterator[List[T]]:
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def validate_date_key(value: str) -> str:
    """
    Boundary check for date keys. The aggregators assume this already happened.
    """
    if not isinstance(value, str) or len(value) != 10:
        raise InvalidDateKey(f"Date key must be yyyy-mm-dd, got {value!r}")
    try:
        parsed = datetime.strptime(value, DATE_KEY_FORMAT).date()
    except ValueError as e:
        raise InvalidDateKey(f"Date key must be yyyy-mm-dd, got {value!r}") from e
    if _format(parsed) != value:
        raise InvalidDateKey(f"Date key must be zero-padded yyyy-mm-dd, got {value!r}")
    return value


# Upper bound for on-demand lookups; 2 * 30 dates is two fetch batches
MAX_WINDOW_DAYS = 30


def clamp_window(value: Optional[int], default: int = 7, maximum: int = MAX_WINDOW_DAYS) -> int:
    """
    Request-side window size: missing or zero falls back to `default`,
    everything else is clamped into [1, maximum].
    """
    if not value:
        return default
    return max(1, min(int(value), maximum))
