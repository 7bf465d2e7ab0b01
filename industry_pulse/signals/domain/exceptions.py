from typing import Any, Dict


class PulseError(Exception):
    """Base class for errors raised around the topic signal pipeline."""
    pass

class InvalidDateKey(PulseError, ValueError):
    """Raised at the boundary when a date key is not a real yyyy-mm-dd date."""
    pass

class InvalidWindow(PulseError, ValueError):
    """Raised when a comparison window is smaller than one day."""
    pass

class VocabularyConfigError(PulseError):
    """Raised when a vocabulary file cannot be parsed into synonyms and stopwords."""
    pass

class SnapshotNotFound(PulseError):
    """Raised when no pulse snapshot has been stored for a window size yet."""
    pass

class TopicNotFound(PulseError):
    """Raised when a topic key is absent from every list of the stored snapshot."""
    pass

class InvalidTopicKey(PulseError, ValueError):
    pass

class SnapshotGenerationFailed(PulseError):
    """
    Raised after a multi-window run when at least one window failed.
    The windows that did succeed are already stored.
    """
    def __init__(self, failed: Dict[int, str], documents: Dict[int, Dict[str, Any]]):
        self.failed = failed
        self.documents = documents
        windows = ", ".join(f"w{w}" for w in sorted(failed))
        super().__init__(f"Pulse snapshot generation failed for: {windows}")
