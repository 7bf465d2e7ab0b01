import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOGGER_NAME = "industry_pulse"


class StructuredPulseLogger:
    """
    JSON-lines logger for the snapshot runner and the vocabulary loader.
    Every line carries timestamp and event_type, then the caller's fields.
    The pure aggregators never log.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    def emit(self, event_type: str, level: int = logging.INFO, **fields: Any) -> None:
        self._logger.log(level, self._render(event_type, fields))

    def warn(self, event_type: str, **fields: Any) -> None:
        self.emit(event_type, level=logging.WARNING, **fields)

    @staticmethod
    def _render(event_type: str, fields: Dict[str, Any]) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
        }
        payload.update(fields)
        # sets and datetimes fall back to str()
        return json.dumps(payload, default=str, ensure_ascii=True)
