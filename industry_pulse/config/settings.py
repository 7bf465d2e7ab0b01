from typing import List, Literal, Optional

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from industry_pulse.core.time.time_source import DEFAULT_BRIEF_TIMEZONE


class PulseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PULSE_", env_file=".env", extra="ignore")

    # Comparison windows
    WINDOW_DAYS: int = 7
    SNAPSHOT_WINDOWS: List[int] = [7, 30]

    # Snapshot shape
    MAX_ITEMS: int = 25
    PERSISTENCE_MODE: Literal["momentum-zero", "threshold"] = "momentum-zero"
    PERSISTENCE_RATIO: float = 0.6

    # Generation runner
    SNAPSHOT_FRESHNESS_MINUTES: int = 24 * 60
    FETCH_BATCH_SIZE: int = 30  # document store getAll limit

    # Calendar that brief ids and default date keys follow
    BRIEF_TIMEZONE: str = DEFAULT_BRIEF_TIMEZONE

    # Optional JSON file overriding the default synonym/stopword tables
    VOCABULARY_PATH: Optional[str] = None

    @field_validator("WINDOW_DAYS", "MAX_ITEMS", "FETCH_BATCH_SIZE")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be >= 1")
        return value

    @field_validator("SNAPSHOT_WINDOWS")
    @classmethod
    def _positive_windows(cls, value: List[int]) -> List[int]:
        if any(w < 1 for w in value):
            raise ValueError("every snapshot window must be >= 1 day")
        return value

    @field_validator("BRIEF_TIMEZONE")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value

    @field_validator("PERSISTENCE_RATIO")
    @classmethod
    def _ratio(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("must be in (0, 1]")
        return value


settings = PulseSettings()
