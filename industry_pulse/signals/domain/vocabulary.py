from dataclasses import dataclass
from typing import FrozenSet, Tuple

# Generic noise tokens removed from canonical keys.
DEFAULT_STOPWORDS: FrozenSet[str] = frozenset({
    "insurance", "insurer", "insurers",
    "market", "markets",
    "company", "companies",
    "industry", "industries",
    "sector", "sectors",
    "the", "and", "for", "with", "from", "that", "this", "into", "its",
    "are", "was", "has", "have", "been", "will", "may", "could",
    "new", "latest", "recent", "update", "updates", "news",
    "report", "reports", "trend", "trends", "impact", "impacts",
    "affecting", "regarding", "around", "about", "amid", "during",
})

# Phrase -> canonical phrase. Both sides are already lowercase with punctuation
# stripped (except &). Order matters only between phrases of equal length.
DEFAULT_SYNONYMS: Tuple[Tuple[str, str], ...] = (
    # Catastrophe terminology
    ("catastrophe losses", "cat losses"),
    ("catastrophe loss", "cat losses"),
    ("cat loss", "cat losses"),
    ("cat events", "cat losses"),
    ("catastrophe events", "cat losses"),

    # Winter storm
    ("winter storm claims", "winter storm losses"),
    ("winter storm damage", "winter storm losses"),
    ("winter storms", "winter storm losses"),

    # Wildfire
    ("wildfire claims", "wildfire losses"),
    ("wildfire damage", "wildfire losses"),
    ("wildfires", "wildfire losses"),
    ("wildfire risk", "wildfire losses"),

    # Hurricane
    ("hurricane claims", "hurricane losses"),
    ("hurricane damage", "hurricane losses"),
    ("hurricane season", "hurricane losses"),
    ("hurricanes", "hurricane losses"),

    # Nuclear verdicts
    ("nuclear verdict", "nuclear verdicts"),
    ("social inflation", "nuclear verdicts"),

    # Commercial auto
    ("commercial auto severity", "commercial auto"),
    ("commercial auto losses", "commercial auto"),
    ("commercial automobile", "commercial auto"),

    # Cyber
    ("cyber risk", "cyber liability"),
    ("cyber claims", "cyber liability"),
    ("cyber losses", "cyber liability"),
    ("cybersecurity", "cyber liability"),

    # CAT bonds
    ("catastrophe bonds", "cat bonds"),
    ("catastrophe bond", "cat bonds"),
    ("cat bond", "cat bonds"),

    # Reinsurance
    ("reinsurance pricing", "reinsurance rates"),
    ("reinsurance renewals", "reinsurance rates"),
    ("reinsurance rate increases", "reinsurance rates"),
    ("reinsurance market hardening", "reinsurance rates"),

    # Rate adequacy
    ("pricing adequacy", "rate adequacy"),
    ("premium adequacy", "rate adequacy"),
    ("rate increases", "rate adequacy"),

    # Loss development
    ("reserve development", "loss development"),
    ("reserve strengthening", "loss development"),
    ("loss reserve", "loss development"),
    ("loss reserves", "loss development"),

    # Litigation
    ("litigation funding", "litigation finance"),
    ("third party litigation funding", "litigation finance"),

    # Climate
    ("climate risk", "climate change"),
    ("climate change risk", "climate change"),

    # Florida
    ("florida property", "florida homeowners"),
    ("florida home insurance", "florida homeowners"),
    ("florida citizens", "florida homeowners"),

    # Combined ratio
    ("combined ratios", "combined ratio"),
    ("underwriting profitability", "combined ratio"),

    # M&A
    ("mergers and acquisitions", "m&a"),
    ("mergers & acquisitions", "m&a"),
    ("merger activity", "m&a"),
    ("acquisition activity", "m&a"),

    # Insurtech
    ("insurance technology", "insurtech"),
    ("insuretech", "insurtech"),

    # Workers comp
    ("workers compensation", "workers comp"),
    ("workers comp claims", "workers comp"),

    # D&O / E&O
    ("directors and officers", "d&o"),
    ("directors & officers", "d&o"),
    ("errors and omissions", "e&o"),
    ("errors & omissions", "e&o"),

    # Excess & surplus
    ("excess and surplus lines", "e&s"),
    ("excess & surplus lines", "e&s"),
    ("e&s lines", "e&s"),
    ("surplus lines", "e&s"),

    # Lloyd's
    ("lloyds of london", "lloyds"),
)


@dataclass(frozen=True)
class TopicVocabulary:
    """
    Immutable synonym and stopword tables for one normalizer instance.
    Synonyms keep their declaration order; the normalizer sorts them by phrase length.
    """
    synonyms: Tuple[Tuple[str, str], ...] = DEFAULT_SYNONYMS
    stopwords: FrozenSet[str] = DEFAULT_STOPWORDS

    @classmethod
    def default(cls) -> 'TopicVocabulary':
        return cls()

    def with_synonyms(self, extra: Tuple[Tuple[str, str], ...]) -> 'TopicVocabulary':
        return TopicVocabulary(synonyms=self.synonyms + tuple(extra), stopwords=self.stopwords)

    def with_stopwords(self, extra: FrozenSet[str]) -> 'TopicVocabulary':
        return TopicVocabulary(synonyms=self.synonyms, stopwords=self.stopwords | frozenset(extra))
