"""
Topic normalization for the Industry Pulse.

Pipeline: trim -> lowercase -> strip punctuation (keep &) -> collapse whitespace
        -> synonyms (longest phrase first, word boundaries) -> drop stopwords
        -> rejoin.

Pure, no IO.
"""
import re
from typing import List, Optional, Pattern, Sequence, Tuple

from industry_pulse.signals.domain.vocabulary import TopicVocabulary
from industry_pulse.signals.interfaces.topic_normalizer import TopicNormalizer

# & survives because it carries meaning in P&C terms (d&o, e&s, m&a).
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s&]")
_WHITESPACE = re.compile(r"\s+")


def clean_phrase(raw: str) -> str:
    """
    Steps 1-2 of the pipeline: trim, lowercase, strip punctuation, collapse whitespace.
    """
    s = raw.strip().lower()
    if not s:
        return ""
    s = _DISALLOWED_CHARS.sub("", s)
    return _WHITESPACE.sub(" ", s).strip()


class VocabularyTopicNormalizer(TopicNormalizer):
    """
    Deterministic normalizer driven by an immutable TopicVocabulary.
    No NLP, no LLM.
    """

    # Upper bound on whole-pipeline reruns while the key keeps changing
    MAX_PASSES = 8

    def __init__(self, vocabulary: Optional[TopicVocabulary] = None):
        self.vocabulary = vocabulary or TopicVocabulary.default()
        self._synonym_rules = self._compile(self.vocabulary.synonyms)

    @staticmethod
    def _compile(synonyms: Tuple[Tuple[str, str], ...]) -> List[Tuple[Pattern, str]]:
        # Stable sort: equal-length phrases keep declaration order.
        ordered = sorted(synonyms, key=lambda entry: -len(entry[0]))
        return [
            (re.compile(r"\b" + re.escape(phrase) + r"\b"), canonical)
            for phrase, canonical in ordered
        ]

    def canonical_key(self, raw: str) -> str:
        key = self._normalize_once(raw)
        # Dropping a stopword can expose a synonym phrase ("cyber the risk"),
        # so the key is the fixed point of the pipeline.
        for _ in range(self.MAX_PASSES):
            again = self._normalize_once(key)
            if again == key:
                break
            key = again
        return key

    def _normalize_once(self, raw: str) -> str:
        s = clean_phrase(raw)
        if not s:
            return ""
        s = self.apply_synonyms(s)
        tokens = [t for t in s.split(" ") if t and t not in self.vocabulary.stopwords]
        return " ".join(tokens).strip()

    def apply_synonyms(self, text: str) -> str:
        """
        One pass over the length-sorted rules. Each rule rewrites all of its
        whole-word occurrences once; the result is not rescanned by the same rule.
        """
        result = text
        for pattern, canonical in self._synonym_rules:
            result = pattern.sub(lambda _m, c=canonical: c, result)
        return result

    def pick_display_name(self, canon_key: str, raw_candidates: Sequence[str]) -> str:
        """
        Shortest raw form that normalizes to canon_key, ties broken by plain string order.
        Falls back to the key itself.
        """
        matching = [r for r in raw_candidates if self.canonical_key(r) == canon_key]
        if not matching:
            return canon_key
        return min(matching, key=lambda r: (len(r), r))


_default_normalizer = VocabularyTopicNormalizer()


def canonical_topic_key(raw: str) -> str:
    return _default_normalizer.canonical_key(raw)


def pick_display_name(canon_key: str, raw_candidates: Sequence[str]) -> str:
    return _default_normalizer.pick_display_name(canon_key, raw_candidates)
