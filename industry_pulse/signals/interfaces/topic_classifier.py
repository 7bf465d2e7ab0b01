from abc import ABC, abstractmethod
from industry_pulse.signals.domain.topic_type import TopicType

class TopicClassifier(ABC):
    """
    Interface for assigning a TopicType to a canonical key.
    Total: every key, including "", maps to some type.
    """
    @abstractmethod
    def classify(self, canon_key: str) -> TopicType:
        pass
