"""
NER backends for person-name detection

Backends implement ``PersonSpanFinder`` and are chosen at construction time
by ``load_person_finder``, which reports unavailability through
``FinderLoadResult`` instead of raising.
"""

from .base import (
    PERSON,
    EntitySpan,
    SentenceSpans,
    PersonSpanFinder,
    FinderLoadResult,
    ProviderStatus,
    normalize_entity_type
)
from .exceptions import (
    ErrorSeverity,
    ExtractionError,
    ResourceUnavailableError,
    TransientExtractionError,
    DocumentReadError,
    classify_error
)
from .registry import BackendRegistry, get_registry, load_person_finder

__all__ = [
    "PERSON",
    "EntitySpan",
    "SentenceSpans",
    "PersonSpanFinder",
    "FinderLoadResult",
    "ProviderStatus",
    "normalize_entity_type",
    "ErrorSeverity",
    "ExtractionError",
    "ResourceUnavailableError",
    "TransientExtractionError",
    "DocumentReadError",
    "classify_error",
    "BackendRegistry",
    "get_registry",
    "load_person_finder",
]
