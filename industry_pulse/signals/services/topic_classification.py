from typing import Optional, Tuple

from industry_pulse.signals.domain.classification_rules import (
    DEFAULT_RULES,
    FALLBACK_TYPE,
    ClassificationRule,
)
from industry_pulse.signals.domain.topic_type import TopicType
from industry_pulse.signals.interfaces.topic_classifier import TopicClassifier


class RuleBasedTopicClassifier(TopicClassifier):
    """
    Ordered keyword rules, first substring hit wins.
    Rule order is part of the contract: reordering changes published classifications.
    """

    def __init__(self, rules: Optional[Tuple[ClassificationRule, ...]] = None):
        self.rules = rules if rules is not None else DEFAULT_RULES

    def classify(self, canon_key: str) -> TopicType:
        if not canon_key:
            return FALLBACK_TYPE

        for rule in self.rules:
            for keyword in rule.keywords:
                if keyword in canon_key:
                    return rule.type

        return FALLBACK_TYPE


_default_classifier = RuleBasedTopicClassifier()


def classify_topic(canon_key: str) -> TopicType:
    return _default_classifier.classify(canon_key)
