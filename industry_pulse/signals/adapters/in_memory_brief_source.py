from typing import Any, Dict, List, Mapping, Sequence

from industry_pulse.signals.domain.brief import BriefInput
from industry_pulse.signals.interfaces.brief_source import BriefSource


class InMemoryBriefSource(BriefSource):
    """
    In-memory stand-in for the daily brief collection.
    Documents are keyed by their date key; a date may hold several documents.
    """

    def __init__(self):
        self._documents: Dict[str, List[Dict[str, Any]]] = {}
        self.fetch_calls: List[List[str]] = []

    def add_document(self, doc_id: str, data: Mapping[str, Any]) -> None:
        self._documents.setdefault(doc_id, []).append(dict(data))

    def fetch(self, dates: Sequence[str]) -> List[BriefInput]:
        self.fetch_calls.append(list(dates))
        briefs: List[BriefInput] = []
        for date in dates:
            for data in self._documents.get(date, []):
                brief = BriefInput.from_document(date, data)
                if brief is not None:
                    briefs.append(brief)
        return briefs
