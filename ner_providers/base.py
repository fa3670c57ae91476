"""
Base interface for NER backends that locate person names
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable
from enum import Enum

PERSON = "PERSON"


class ProviderStatus(Enum):
    """Backend availability status"""
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EntitySpan:
    """Half-open token range [start, end) within one sentence"""
    start: int
    end: int
    label: str = PERSON


@dataclass(frozen=True)
class SentenceSpans:
    """Tokens of one sentence and the PERSON spans found in it"""
    tokens: Tuple[str, ...]
    spans: Tuple[EntitySpan, ...] = ()

    def span_texts(self) -> List[str]:
        """Tokens of each span joined with single spaces"""
        return [" ".join(self.tokens[span.start:span.end]) for span in self.spans]


@runtime_checkable
class PersonSpanFinder(Protocol):
    """Anything that can find PERSON spans in raw document text.

    Backends are interchangeable: the same text must yield the same
    sentence/span structure regardless of which engine produced it.
    """

    def find_person_spans(self, text: str) -> List[SentenceSpans]:
        ...

    def clear_adaptive_data(self) -> None:
        """Forget any document-level state; called once per document"""
        ...


@dataclass
class FinderLoadResult:
    """Outcome of selecting a NER backend at construction time"""
    finder: Optional[PersonSpanFinder] = None
    backend: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def available(self) -> bool:
        return self.finder is not None

    @property
    def status(self) -> ProviderStatus:
        return ProviderStatus.AVAILABLE if self.available else ProviderStatus.UNAVAILABLE


def normalize_entity_type(provider_type: str) -> str:
    """Normalize entity labels across backends (BIO prefixes stripped)"""
    label = provider_type.upper()
    if label[:2] in ("B-", "I-", "E-", "S-", "L-", "U-"):
        label = label[2:]

    mappings = {
        "PER": PERSON,
        "PERSON": PERSON,
        "GPE": "LOC",
        "LOCATION": "LOC",
        "ORGANIZATION": "ORG",
    }
    return mappings.get(label, label)
