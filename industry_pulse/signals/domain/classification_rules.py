from dataclasses import dataclass
from typing import Tuple

from industry_pulse.signals.domain.topic_type import TopicType


@dataclass(frozen=True)
class ClassificationRule:
    """
    One tagged keyword list. A keyword matches when it is a substring of the canonical key.
    """
    type: TopicType
    keywords: Tuple[str, ...]


# Evaluated top-down, first keyword hit across the whole list wins.
# Narrow categories first, line of business last.
DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(TopicType.MNA, (
        "m&a", "merger", "acquisition", "consolidation", "ipo", "spac",
        "deal", "buyout", "divestiture", "takeover",
    )),
    ClassificationRule(TopicType.PEOPLE, (
        "ceo", "cfo", "cro", "leadership", "executive", "appointment",
        "hire", "hiring", "talent", "workforce", "diversity", "de&i",
        "retirement", "succession", "layoff", "headcount",
    )),
    ClassificationRule(TopicType.TECHNOLOGY, (
        "insurtech", "artificial intelligence", "machine learning", "ai model",
        "automation", "digital", "platform", "telematics", "parametric",
        "blockchain", "data analytics", "predictive", "saas", "api", "cloud",
    )),
    ClassificationRule(TopicType.REGULATION, (
        "regulation", "regulatory", "legislature", "legislation", "bill",
        "statute", "ruling", "court", "lawsuit", "litigation",
        "attorney general", "naic", "department of", "commissioner",
        "compliance", "mandate", "reform", "tort", "nuclear verdicts",
        "social inflation", "class action", "antitrust", "solvency", "rbc",
        "ifrs", "gaap",
    )),
    ClassificationRule(TopicType.CAPITAL, (
        "cat bond", "ils", "insurance linked", "capital", "investor",
        "investment", "am best", "s&p", "moody", "fitch", "rating",
        "downgrade", "upgrade", "surplus", "combined ratio", "loss ratio",
        "expense ratio", "roe", "book value", "reserve", "loss development",
        "rate adequacy",
    )),
    ClassificationRule(TopicType.REINSURER, (
        "reinsur", "retrocession", "retro", "swiss re", "munich re",
        "hannover re", "scor", "gen re", "berkshire re", "lloyds", "treaty",
        "facultative", "excess of loss", "quota share",
    )),
    ClassificationRule(TopicType.BROKER, (
        "broker", "brokerage", "marsh", "aon", "gallagher", "willis", "wtw",
        "lockton", "hub international", "ryan specialty", "brown & brown",
        "mga", "managing general", "wholesale", "program", "distribution",
        "e&s",
    )),
    ClassificationRule(TopicType.PERIL, (
        "hurricane", "wildfire", "flood", "tornado", "hail", "earthquake",
        "winter storm", "convective", "severe weather", "cat loss",
        "catastrophe", "nat cat", "secondary peril", "climate change",
        "sea level", "drought", "freeze",
    )),
    ClassificationRule(TopicType.CARRIER, (
        "state farm", "allstate", "progressive", "geico", "liberty mutual",
        "travelers", "chubb", "hartford", "nationwide", "usaa", "farmers",
        "erie", "american family", "auto owners", "citizens", "zurich", "aig",
        "allianz", "berkshire", "fairfax", "markel", "rli", "carrier",
        "underwriter", "admitted", "nonadmitted",
    )),
    ClassificationRule(TopicType.LOB, (
        "commercial auto", "personal auto", "homeowners", "renters",
        "commercial property", "general liability", "professional liability",
        "d&o", "e&o", "cyber", "workers comp", "medical malpractice",
        "umbrella", "excess liability", "marine", "aviation", "surety",
        "title", "crop", "pet", "flood", "earthquake", "auto", "property",
        "liability", "casualty", "specialty", "personal lines",
        "commercial lines", "florida homeowners", "california", "texas wind",
    )),
)

# Most uncategorized P&C news is line-of-business adjacent.
FALLBACK_TYPE = TopicType.LOB
