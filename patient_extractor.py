"""
Patient information extractor - names, dates of birth and claim IDs from report text
"""
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import settings
from extractors import ClaimIdExtractor, DateOfBirthExtractor, ExtractionResult, NameExtractor
from ner_providers import DocumentReadError, FinderLoadResult, PersonSpanFinder, load_person_finder
from pattern_matching import PatternSet, get_pattern_set
from metrics import record_document, record_read_failure
from logger import get_logger

logger = get_logger(__name__)


def read_document(path: Union[str, Path], encoding: Optional[str] = None) -> str:
    """Read a text document, normalizing line boundaries to '\\n'.

    Raises DocumentReadError when the file cannot be read or decoded.
    """
    encoding = encoding or settings.get('document_encoding', 'utf-8')
    try:
        return Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise DocumentReadError(f"Error reading file {path}: {e}", original_error=e)


class PatientInformationExtractor:
    """
    Runs name, date-of-birth and claim-id extraction over documents.

    The pattern set and NER backend are set up once per instance. A missing
    NER model is not an error: names then come from cue patterns for the
    lifetime of the instance.
    """

    def __init__(self,
                 finder: Optional[PersonSpanFinder] = None,
                 patterns: Optional[PatternSet] = None,
                 use_ner: Optional[bool] = None,
                 backends: Optional[List[str]] = None,
                 backend_configs: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        Args:
            finder: Ready NER backend; skips backend loading when given
            patterns: Pattern set; defaults to the configured shared set
            use_ner: Override of the ``ner_enabled`` setting
            backends: Backend preference order; defaults to ``ner_backends``
            backend_configs: Per-backend config dicts keyed by backend name
        """
        self.patterns = patterns or get_pattern_set()

        if use_ner is None:
            use_ner = settings.get('ner_enabled', True)

        if finder is not None:
            self.load_result = FinderLoadResult(finder=finder, backend=getattr(finder, "name", None))
        elif use_ner:
            self.load_result = load_person_finder(backends, backend_configs)
        else:
            logger.info("NER disabled, names will come from cue patterns")
            self.load_result = FinderLoadResult()

        self.name_extractor = NameExtractor(
            self.patterns,
            self.load_result.finder,
            fallback_on_empty=settings.get('name_fallback_on_empty', False)
        )
        self.date_extractor = DateOfBirthExtractor(self.patterns)
        self.claim_id_extractor = ClaimIdExtractor(
            self.patterns,
            min_length=settings.get('min_claim_id_length', 6)
        )

    @property
    def ner_available(self) -> bool:
        return self.load_result.available

    def extract(self, text: str) -> ExtractionResult:
        """Extract patient information from text content"""
        result = self._extract(text)
        record_document("text", result)
        return result

    def extract_from_file(self, path: Union[str, Path]) -> ExtractionResult:
        """Extract patient information from a text file.

        An unreadable file is logged and yields an empty result.
        """
        try:
            content = read_document(path)
        except DocumentReadError as e:
            logger.error(str(e))
            record_read_failure()
            return ExtractionResult()

        result = self._extract(content)
        record_document("file", result)
        return result

    def _extract(self, text: str) -> ExtractionResult:
        result = ExtractionResult.from_lists(
            self.name_extractor.extract(text),
            self.date_extractor.extract(text),
            self.claim_id_extractor.extract(text)
        )
        logger.debug(
            f"Extracted {len(result.patient_names)} name(s), "
            f"{len(result.dates_of_birth)} date(s), {len(result.claim_ids)} claim id(s)"
        )
        return result
