import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from industry_pulse.observability.structured_logger import StructuredPulseLogger
from industry_pulse.signals.domain.exceptions import VocabularyConfigError
from industry_pulse.signals.domain.vocabulary import TopicVocabulary
from industry_pulse.signals.services.topic_normalization import clean_phrase


class TopicVocabularyLoader:
    """
    Loads synonym and stopword tables from a JSON file.

    Format:
        {
          "extend": true,                      # merge with defaults (default) or replace
          "synonyms": {"phrase": "canonical"},
          "stopwords": ["word", ...]
        }

    Phrases go through the same cleaning as topics, so file entries with
    capitals or punctuation still match.
    """

    def __init__(self, config_path: Optional[str] = None, logger: Optional[StructuredPulseLogger] = None):
        self.config_path = Path(config_path) if config_path else None
        self.logger = logger or StructuredPulseLogger()

    def load(self) -> TopicVocabulary:
        if self.config_path is None or not self.config_path.exists():
            return TopicVocabulary.default()
        payload = self._read_json()
        vocabulary = self._parse(payload)
        self.logger.emit(
            "vocabulary_loaded",
            path=str(self.config_path),
            synonyms=len(vocabulary.synonyms),
            stopwords=len(vocabulary.stopwords),
        )
        return vocabulary

    def _read_json(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise VocabularyConfigError(f"Invalid vocabulary file {self.config_path}: {e}") from e
        if not isinstance(payload, dict):
            raise VocabularyConfigError(f"Vocabulary file {self.config_path} must hold a JSON object")
        return payload

    def _parse(self, payload: Dict[str, Any]) -> TopicVocabulary:
        raw_synonyms = payload.get("synonyms", {})
        raw_stopwords = payload.get("stopwords", [])
        if not isinstance(raw_synonyms, dict) or not isinstance(raw_stopwords, list):
            raise VocabularyConfigError("'synonyms' must be an object and 'stopwords' a list")

        synonyms: List[Tuple[str, str]] = []
        for phrase, canonical in raw_synonyms.items():
            if not isinstance(canonical, str):
                raise VocabularyConfigError(f"Synonym target for {phrase!r} must be a string")
            phrase_key = clean_phrase(phrase)
            canonical_key = clean_phrase(canonical)
            if not phrase_key or phrase_key == canonical_key:
                continue
            synonyms.append((phrase_key, canonical_key))

        stopwords = frozenset(
            token
            for word in raw_stopwords if isinstance(word, str)
            for token in clean_phrase(word).split(" ") if token
        )

        if payload.get("extend", True):
            return TopicVocabulary.default().with_synonyms(tuple(synonyms)).with_stopwords(stopwords)
        return TopicVocabulary(synonyms=tuple(synonyms), stopwords=stopwords)
