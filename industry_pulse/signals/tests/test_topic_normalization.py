import pytest

from industry_pulse.signals.domain.vocabulary import TopicVocabulary
from industry_pulse.signals.services.topic_normalization import (
    VocabularyTopicNormalizer,
    canonical_topic_key,
    clean_phrase,
    pick_display_name,
)


# --- Basic normalization ---

def test_trims_lowercases_and_collapses():
    assert canonical_topic_key("  Florida Homeowners  ") == "florida homeowners"


def test_collapses_internal_whitespace_before_synonyms():
    # "commercial auto severity" is itself a synonym of "commercial auto"
    assert canonical_topic_key("commercial   auto   severity") == "commercial auto"


def test_strips_punctuation_but_keeps_ampersand():
    assert canonical_topic_key("D&O liability!") == "d&o liability"


def test_blank_input_is_discarded():
    assert canonical_topic_key("   ") == ""
    assert canonical_topic_key("") == ""
    assert canonical_topic_key("?!...") == ""


def test_stopword_only_input_is_discarded():
    assert canonical_topic_key("insurance market trends") == ""


# --- Stopwords ---

def test_removes_insurance_from_compound_topic():
    assert canonical_topic_key("cyber insurance") == "cyber"


def test_synonyms_apply_before_stopwords():
    # "market" is a stopword but part of the synonym phrase
    assert canonical_topic_key("reinsurance market hardening") == "reinsurance rates"


def test_preserves_meaningful_tokens():
    assert canonical_topic_key("nuclear verdicts") == "nuclear verdicts"


# --- Synonyms ---

@pytest.mark.parametrize("raw, expected", [
    ("Winter Storm Claims", "winter storm losses"),
    ("Catastrophe Losses", "cat losses"),
    ("cat events", "cat losses"),
    ("Wildfire Claims", "wildfire losses"),
    ("Mergers and Acquisitions", "m&a"),
    ("Mergers & Acquisitions", "m&a"),
    ("insurance technology", "insurtech"),
    ("Workers Compensation", "workers comp"),
    ("reinsurance pricing", "reinsurance rates"),
    ("Social Inflation", "nuclear verdicts"),
    ("Lloyd's of London", "lloyds"),
    ("Third Party Litigation Funding", "litigation finance"),
])
def test_synonym_map(raw, expected):
    assert canonical_topic_key(raw) == expected


def test_synonyms_respect_word_boundaries():
    # "cat loss" must not fire inside "cat losses"
    assert canonical_topic_key("cat losses") == "cat losses"
    # nor inside a longer word
    assert canonical_topic_key("cat lossy") == "cat lossy"


def test_longest_phrase_wins():
    # "third party litigation funding" must not be pre-empted by "litigation funding"
    assert canonical_topic_key("third party litigation funding") == "litigation finance"


def test_apply_synonyms_is_single_pass():
    normalizer = VocabularyTopicNormalizer(TopicVocabulary(
        synonyms=(("alpha beta", "gamma"), ("gamma", "delta")),
        stopwords=frozenset(),
    ))
    # the shorter "gamma" rule runs after "alpha beta" and rewrites its output,
    # but nothing loops back to longer rules
    assert normalizer.apply_synonyms("alpha beta") == "delta"
    assert normalizer.apply_synonyms("gamma alpha") == "delta alpha"


# --- Stability ---

def test_case_variations_share_a_key():
    keys = {canonical_topic_key(s) for s in ("Florida Homeowners", "florida homeowners", "FLORIDA HOMEOWNERS")}
    assert keys == {"florida homeowners"}


def test_punctuation_variations_share_a_key():
    assert canonical_topic_key("D&O") == canonical_topic_key("D&O.")


def test_synonym_variations_share_a_key():
    keys = {canonical_topic_key(s) for s in ("catastrophe losses", "cat loss", "CAT Events")}
    assert keys == {"cat losses"}


@pytest.mark.parametrize("raw", [
    "Winter Storm Claims",
    "Commercial Automobile Losses",
    "cyber the risk",
    "Florida Home Insurance Market",
    "workers compensation claims",
    "  E&S lines  ",
    "Hurricane Season 2026!",
])
def test_is_idempotent(raw):
    first = canonical_topic_key(raw)
    assert canonical_topic_key(first) == first


def test_stopword_removal_exposing_a_synonym_still_converges():
    assert canonical_topic_key("cyber the risk") == "cyber liability"
    assert canonical_topic_key("Commercial Automobile Losses") == "commercial auto"


def test_clean_phrase():
    assert clean_phrase("  Lloyd's   of London ") == "lloyds of london"
    assert clean_phrase("") == ""


# --- Per-instance vocabulary ---

def test_instances_do_not_share_vocabulary():
    custom = VocabularyTopicNormalizer(
        TopicVocabulary.default().with_synonyms((("gl", "general liability"),))
    )
    assert custom.canonical_key("GL") == "general liability"
    assert canonical_topic_key("GL") == "gl"


def test_custom_stopwords():
    custom = VocabularyTopicNormalizer(TopicVocabulary.default().with_stopwords(frozenset({"outlook"})))
    assert custom.canonical_key("cyber outlook") == "cyber"
    assert canonical_topic_key("cyber outlook") == "cyber outlook"


# --- Display names ---

def test_picks_shortest_matching_raw_name():
    candidates = [
        "Florida Homeowners Insurance Market",
        "Florida Homeowners",
        "florida homeowners crisis",
    ]
    key = canonical_topic_key("Florida Homeowners")
    assert pick_display_name(key, candidates) == "Florida Homeowners"


def test_returns_key_when_nothing_matches():
    assert pick_display_name("unknown topic", ["other thing"]) == "unknown topic"
    assert pick_display_name("unknown topic", []) == "unknown topic"


def test_same_length_tie_is_order_independent():
    candidates = ["cat bonds", "Cat Bonds"]
    key = canonical_topic_key("cat bonds")
    d1 = pick_display_name(key, candidates)
    d2 = pick_display_name(key, list(reversed(candidates)))
    assert d1 == d2 == "Cat Bonds"
