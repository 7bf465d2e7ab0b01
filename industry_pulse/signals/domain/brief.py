from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from industry_pulse.signals.domain.date_window import validate_date_key


def _string_ids(entries: Optional[Iterable[Any]], field_name: Optional[str] = None) -> Tuple[str, ...]:
    ids: List[str] = []
    for entry in entries or []:
        if field_name is not None and isinstance(entry, Mapping):
            entry = entry.get(field_name)
        if isinstance(entry, str) and entry:
            ids.append(entry)
    return tuple(ids)


@dataclass(frozen=True)
class BriefInput:
    """
    The slice of one daily brief the signal pipeline reads.
    Several briefs may share a date.
    """
    date: str                      # yyyy-mm-dd
    topics: Tuple[str, ...]        # raw topic strings, ordered, may repeat
    source_ids: Tuple[str, ...] = ()  # upstream sources that fed the brief
    article_ids: Tuple[str, ...] = ()  # articles the brief was written from

    @classmethod
    def create(
            cls,
            date: str,
            topics: Sequence[str],
            source_ids: Sequence[str] = (),
            article_ids: Sequence[str] = ()
    ) -> 'BriefInput':
        return cls(date=date, topics=tuple(topics), source_ids=tuple(source_ids), article_ids=tuple(article_ids))

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Optional['BriefInput']:
        """
        Adapts a stored brief document (id = date key) into a BriefInput.
        Briefs without topics carry no signal and return None.
        """
        date_key = validate_date_key(doc_id)

        topics = [t for t in (data.get("topics") or []) if isinstance(t, str)]
        if not topics:
            return None

        return cls(
            date=date_key,
            topics=tuple(topics),
            # entries are {"sourceId": ...} mappings or bare ids
            source_ids=_string_ids(data.get("sourcesUsed"), "sourceId"),
            article_ids=_string_ids(data.get("sourceArticleIds")),
        )
