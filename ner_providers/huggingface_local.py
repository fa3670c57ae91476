"""
Hugging Face backend - raw token classifier

Sentence boundaries and word tokens come from a rule-based spaCy pipeline;
each sentence's words are labelled by an ``AutoModelForTokenClassification``
model, rendered as tagged output and parsed back into PERSON runs.
"""
from typing import Any, Dict, List, Optional, Sequence

import spacy
import torch
from transformers import AutoModelForTokenClassification, AutoTokenizer

from ner_providers.base import ProviderStatus, SentenceSpans
from ner_providers.exceptions import ResourceUnavailableError
from ner_providers.tagged_output import format_tagged_output, parse_tagged_output, person_runs
from logger import get_logger
from config import settings

logger = get_logger(__name__)


class TransformersPersonFinder:
    """Finds PERSON spans with a Hugging Face token-classification model"""

    name = "transformers"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.model_name = config.get('model_name', settings.get('hf_ner_model', 'dslim/bert-base-NER'))
        self.max_length = config.get('max_length', settings.get('hf_max_length', 512))
        # Sub-word pieces shared by consecutive windows of a long sentence
        self.stride = config.get('stride', max(1, self.max_length // 8))
        enable_gpu = config.get('enable_gpu', settings.get('enable_gpu', False))
        self.device = "cuda" if enable_gpu and torch.cuda.is_available() else "cpu"
        self.tokenizer = None
        self.model = None
        self.id2label: Dict[int, str] = {}
        self.segmenter = None
        self._status = ProviderStatus.UNKNOWN

    @property
    def status(self) -> ProviderStatus:
        return self._status

    def load(self) -> None:
        """Load tokenizer, model and sentence segmenter"""
        if self.model is not None:
            return

        logger.info(f"Loading Hugging Face model: {self.model_name}")
        try:
            self.tokenizer = AutoTokenizer.from_pretrained(self.model_name)
            self.model = AutoModelForTokenClassification.from_pretrained(self.model_name)
        except (OSError, ValueError) as e:
            self._status = ProviderStatus.UNAVAILABLE
            self.tokenizer = None
            self.model = None
            raise ResourceUnavailableError(
                f"Failed to load Hugging Face model {self.model_name}",
                provider_name=self.name,
                original_error=e
            )

        if not getattr(self.tokenizer, "is_fast", False):
            self._status = ProviderStatus.UNAVAILABLE
            raise ResourceUnavailableError(
                f"Model {self.model_name} has no fast tokenizer; word alignment needs one",
                provider_name=self.name
            )

        self.model.to(self.device)
        self.model.eval()
        self.id2label = {int(k): v for k, v in self.model.config.id2label.items()}

        self.segmenter = spacy.blank("en")
        self.segmenter.add_pipe("sentencizer")
        self.segmenter.max_length = settings.get('max_text_length', 1000000)

        self._status = ProviderStatus.AVAILABLE
        logger.info(f"Successfully loaded Hugging Face model: {self.model_name} on {self.device}")

    def find_person_spans(self, text: str) -> List[SentenceSpans]:
        if self.model is None or self.segmenter is None:
            raise RuntimeError(f"Model {self.model_name} not loaded")

        sentences = []
        for sent in self.segmenter(text).sents:
            words = [token.text for token in sent if not token.is_space]
            if not words:
                continue
            pairs = parse_tagged_output(self.classify_to_string(words))
            sentences.append(SentenceSpans(
                tokens=tuple(word for word, _ in pairs),
                spans=tuple(person_runs(label for _, label in pairs))
            ))
        return sentences

    def classify_to_string(self, words: Sequence[str]) -> str:
        """Label each word and render one ``word<TAB>label`` line per word.

        A word takes the label of its first sub-word piece. Sentences longer
        than ``max_length`` pieces are split into overlapping windows, so
        every word gets a prediction; a word split across windows is labelled
        from the window holding its first piece.
        """
        encoding = self.tokenizer(
            list(words),
            is_split_into_words=True,
            truncation=True,
            max_length=self.max_length,
            stride=self.stride,
            return_overflowing_tokens=True,
            padding=True,
            return_tensors="pt"
        )
        inputs = {
            key: value.to(self.device)
            for key, value in encoding.items()
            if key != "overflow_to_sample_mapping"
        }

        with torch.no_grad():
            logits = self.model(**inputs).logits
        predicted = torch.argmax(logits, dim=-1).tolist()

        labels = ["O"] * len(words)
        seen = set()
        for window, window_predictions in enumerate(predicted):
            for position, word_id in enumerate(encoding.word_ids(batch_index=window)):
                if word_id is None or word_id in seen:
                    continue
                seen.add(word_id)
                labels[word_id] = self.id2label.get(window_predictions[position], "O")

        if len(predicted) > 1:
            logger.debug(f"Classified {len(words)} words in {len(predicted)} windows")
        return format_tagged_output(words, labels)

    def clear_adaptive_data(self) -> None:
        # Inference runs under no_grad with no cached context between documents
        pass

