"""
Patient name extraction: NER spans first, cue patterns as fallback
"""
from typing import List, Optional

from pattern_matching.base import PatternSet, add_unique, collect
from ner_providers.base import PersonSpanFinder
from ner_providers.exceptions import classify_error
from metrics import record_fallback, track_stage
from logger import get_logger

logger = get_logger(__name__)

# Names must be longer than one character
MIN_NAME_LENGTH = 2


class NameExtractor:
    """Extracts person names from a document.

    With a finder, names are the PERSON spans of each sentence, tokens
    joined by single spaces. Without one, or when the finder raises for a
    document, names come from the cue patterns run over the whole text.
    A finder failure only affects the document being processed.
    """

    def __init__(self, patterns: PatternSet, finder: Optional[PersonSpanFinder] = None,
                 fallback_on_empty: bool = False):
        self.patterns = patterns
        self.finder = finder
        self.fallback_on_empty = fallback_on_empty

    @property
    def uses_ner(self) -> bool:
        return self.finder is not None

    @track_stage("names")
    def extract(self, text: str) -> List[str]:
        if not text or not text.strip():
            return []

        if self.finder is None:
            record_fallback("unavailable")
            return self.extract_with_patterns(text)

        try:
            names = self.extract_with_finder(text)
        except Exception as e:
            error = classify_error(e, provider_name=getattr(self.finder, "name", None))
            logger.warning(f"Error in NER name extraction, using cue patterns: {error}")
            record_fallback("error")
            return self.extract_with_patterns(text)

        if not names and self.fallback_on_empty:
            record_fallback("empty")
            return self.extract_with_patterns(text)

        return names

    def extract_with_finder(self, text: str) -> List[str]:
        names: List[str] = []
        try:
            for sentence in self.finder.find_person_spans(text):
                for candidate in sentence.span_texts():
                    add_unique(names, candidate.strip(), MIN_NAME_LENGTH)
        finally:
            self.finder.clear_adaptive_data()
        logger.debug(f"NER found {len(names)} name(s)")
        return names

    def extract_with_patterns(self, text: str) -> List[str]:
        """Cue-pattern names, pattern order then match order"""
        return collect(self.patterns.name_cues, text, MIN_NAME_LENGTH)
