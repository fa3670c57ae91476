"""
Local SpaCy backend - full annotation pipeline (sentences, tokens, NER in one pass)
"""
import subprocess
import sys
from typing import Any, Dict, List, Optional

import spacy

from ner_providers.base import PERSON, EntitySpan, ProviderStatus, SentenceSpans, normalize_entity_type
from ner_providers.exceptions import ResourceUnavailableError
from logger import get_logger
from config import settings

logger = get_logger(__name__)

SENTENCE_PIPES = ("parser", "senter", "sentencizer")
ENTITY_PIPES = ("ner", "entity_ruler", "span_ruler")


class SpacyPersonFinder:
    """Finds PERSON spans with a spaCy pipeline.

    A ready ``Language`` object can be passed in; otherwise ``load()`` reads
    the configured model package.
    """

    name = "spacy"

    def __init__(self, config: Optional[Dict[str, Any]] = None, nlp=None):
        config = config or {}
        self.model_name = config.get('model_name', settings.get('spacy_model', 'en_core_web_sm'))
        self.enable_gpu = config.get('enable_gpu', settings.get('enable_gpu', False))
        self.auto_download = config.get('auto_download', settings.get('spacy_auto_download', False))
        self.max_length = config.get('max_length', settings.get('max_text_length', 1000000))
        self.nlp = None
        self._status = ProviderStatus.UNKNOWN

        if nlp is not None:
            self._prepare(nlp)

    @property
    def status(self) -> ProviderStatus:
        return self._status

    def load(self) -> None:
        """Load the spaCy model, raising ResourceUnavailableError on failure"""
        if self.nlp is not None:
            return

        if self.enable_gpu:
            try:
                spacy.require_gpu()
                logger.info("GPU enabled for SpaCy")
            except Exception as e:
                logger.info(f"GPU not available, using CPU: {e}")

        try:
            nlp = spacy.load(self.model_name)
        except OSError as e:
            if not self.auto_download:
                self._status = ProviderStatus.UNAVAILABLE
                raise ResourceUnavailableError(
                    f"SpaCy model {self.model_name} not found",
                    provider_name=self.name,
                    original_error=e
                )
            nlp = self._download_and_load()

        self._prepare(nlp)
        logger.info(f"Loaded SpaCy model: {self.model_name}")

    def _download_and_load(self):
        logger.warning(f"SpaCy model {self.model_name} not found, attempting download")
        try:
            subprocess.run(
                [sys.executable, "-m", "spacy", "download", self.model_name],
                check=True,
                capture_output=True
            )
            return spacy.load(self.model_name)
        except (subprocess.CalledProcessError, OSError) as e:
            self._status = ProviderStatus.UNAVAILABLE
            raise ResourceUnavailableError(
                f"Failed to download SpaCy model {self.model_name}",
                provider_name=self.name,
                original_error=e
            )

    def _prepare(self, nlp) -> None:
        if not any(pipe in nlp.pipe_names for pipe in ENTITY_PIPES):
            self._status = ProviderStatus.UNAVAILABLE
            raise ResourceUnavailableError(
                f"SpaCy pipeline has no entity recognizer (pipes: {nlp.pipe_names})",
                provider_name=self.name
            )

        if not any(pipe in nlp.pipe_names for pipe in SENTENCE_PIPES):
            nlp.add_pipe("sentencizer", first=True)

        nlp.max_length = self.max_length
        self.nlp = nlp
        self._status = ProviderStatus.AVAILABLE

    def find_person_spans(self, text: str) -> List[SentenceSpans]:
        if self.nlp is None:
            raise RuntimeError("SpaCy model not initialized")

        doc = self.nlp(text)
        sentences = []
        for sent in doc.sents:
            tokens = [token for token in sent if not token.is_space]
            if not tokens:
                continue
            sentences.append(SentenceSpans(
                tokens=tuple(token.text for token in tokens),
                spans=tuple(self._person_spans(sent, tokens))
            ))
        return sentences

    @staticmethod
    def _person_spans(sent, tokens) -> List[EntitySpan]:
        """PERSON entities as offsets into the non-space tokens of a sentence.

        Adjacent entities stay separate names.
        """
        index = {token.i: position for position, token in enumerate(tokens)}
        spans = []
        for ent in sent.ents:
            if normalize_entity_type(ent.label_) != PERSON:
                continue
            positions = [index[token.i] for token in ent if token.i in index]
            if positions:
                spans.append(EntitySpan(positions[0], positions[-1] + 1))
        return spans

    def clear_adaptive_data(self) -> None:
        # spaCy pipelines keep no state between documents
        pass

