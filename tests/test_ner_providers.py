"""
Test suite for NER backends, tagged output parsing and backend selection
"""
import pytest
import spacy

from ner_providers import (
    BackendRegistry,
    EntitySpan,
    ErrorSeverity,
    FinderLoadResult,
    PersonSpanFinder,
    ProviderStatus,
    ResourceUnavailableError,
    TransientExtractionError,
    classify_error,
    normalize_entity_type
)
from ner_providers.spacy_local import SpacyPersonFinder
from ner_providers.tagged_output import format_tagged_output, parse_tagged_output, person_runs
from extractors import NameExtractor
from pattern_matching import get_pattern_set


def ruler_pipeline(*names):
    """Blank English pipeline tagging the given names as PERSON"""
    nlp = spacy.blank("en")
    ruler = nlp.add_pipe("entity_ruler")
    ruler.add_patterns([{"label": "PERSON", "pattern": name} for name in names])
    return nlp


TINY_VOCAB = [
    "[PAD]", "[UNK]", "[CLS]", "[SEP]", "[MASK]",
    "emily", "johnson", "rob", "##ert", "smith", "saw", "the", "patient", ".",
]


@pytest.fixture
def tiny_bert(tmp_path):
    """Builds transformers finders around a small randomly initialized BERT"""
    torch = pytest.importorskip("torch")
    transformers = pytest.importorskip("transformers")
    from ner_providers.huggingface_local import TransformersPersonFinder

    vocab_file = tmp_path / "vocab.txt"
    vocab_file.write_text("\n".join(TINY_VOCAB) + "\n")
    tokenizer = transformers.BertTokenizerFast(vocab_file=str(vocab_file))

    id2label = {0: "O", 1: "B-PER", 2: "I-PER"}
    config = transformers.BertConfig(
        vocab_size=len(TINY_VOCAB),
        hidden_size=16,
        num_hidden_layers=1,
        num_attention_heads=2,
        intermediate_size=32,
        max_position_embeddings=64,
        id2label=id2label,
        label2id={label: index for index, label in id2label.items()}
    )
    torch.manual_seed(0)
    model = transformers.BertForTokenClassification(config)
    model.eval()

    def build(max_length=64, label_id=None):
        if label_id is not None:
            # Constant logits: every piece gets label_id
            with torch.no_grad():
                model.classifier.weight.zero_()
                model.classifier.bias.zero_()
                model.classifier.bias[label_id] = 10.0

        finder = TransformersPersonFinder({"model_name": "tiny-bert", "max_length": max_length})
        finder.tokenizer = tokenizer
        finder.model = model
        finder.id2label = dict(id2label)
        finder.segmenter = spacy.blank("en")
        finder.segmenter.add_pipe("sentencizer")
        return finder

    return build


class TestTaggedOutput:
    """Line-oriented tagged output"""

    def test_label_normalization(self):
        assert normalize_entity_type("B-PER") == "PERSON"
        assert normalize_entity_type("I-PER") == "PERSON"
        assert normalize_entity_type("person") == "PERSON"
        assert normalize_entity_type("B-ORG") == "ORG"
        assert normalize_entity_type("O") == "O"

    def test_parse_uses_first_and_last_field(self):
        output = "Emily\tB-PER\nJohnson  NNP  I-PER\n\nlonely\nvisited O"
        assert parse_tagged_output(output) == [
            ("Emily", "PERSON"),
            ("Johnson", "PERSON"),
            ("visited", "O"),
        ]

    def test_runs_flush_on_other_tag_and_end_of_input(self):
        labels = ["PERSON", "PERSON", "O", "ORG", "PERSON", "O", "PERSON", "PERSON"]
        assert person_runs(labels) == [EntitySpan(0, 2), EntitySpan(4, 5), EntitySpan(6, 8)]

    def test_runs_on_empty_input(self):
        assert person_runs([]) == []
        assert person_runs(["O", "O"]) == []

    def test_format_round_trip(self):
        output = format_tagged_output(["Robert", "Smith", "."], ["B-PER", "I-PER", "O"])
        assert output == "Robert\tB-PER\nSmith\tI-PER\n.\tO"
        assert person_runs(label for _, label in parse_tagged_output(output)) == [EntitySpan(0, 2)]


class TestSpacyBackend:
    """spaCy backend with a rule-based entity recognizer"""

    def test_finds_person_spans_per_sentence(self):
        finder = SpacyPersonFinder(nlp=ruler_pipeline("Emily Johnson", "Robert Smith"))
        sentences = finder.find_person_spans(
            "Emily Johnson saw the patient. Robert Smith signed the form."
        )

        assert isinstance(finder, PersonSpanFinder)
        assert finder.status == ProviderStatus.AVAILABLE
        assert len(sentences) == 2
        assert sentences[0].span_texts() == ["Emily Johnson"]
        assert sentences[1].span_texts() == ["Robert Smith"]

    def test_adjacent_entities_stay_separate(self):
        finder = SpacyPersonFinder(nlp=ruler_pipeline("Emily", "Johnson"))
        sentences = finder.find_person_spans("Emily Johnson called.")

        assert sentences[0].spans == (EntitySpan(0, 1), EntitySpan(1, 2))
        assert sentences[0].span_texts() == ["Emily", "Johnson"]

    def test_sentencizer_added_when_missing(self):
        nlp = ruler_pipeline("Emily Johnson")
        SpacyPersonFinder(nlp=nlp)
        assert "sentencizer" in nlp.pipe_names

    def test_pipeline_without_entities_is_unavailable(self):
        with pytest.raises(ResourceUnavailableError):
            SpacyPersonFinder(nlp=spacy.blank("en"))

    def test_missing_model_is_unavailable(self):
        finder = SpacyPersonFinder({"model_name": "no_such_spacy_model_xyz", "auto_download": False})
        with pytest.raises(ResourceUnavailableError) as exc_info:
            finder.load()

        assert exc_info.value.severity == ErrorSeverity.CONFIGURATION
        assert finder.status == ProviderStatus.UNAVAILABLE

    def test_name_extraction_through_spacy(self):
        finder = SpacyPersonFinder(nlp=ruler_pipeline("Emily Johnson", "J"))
        extractor = NameExtractor(get_pattern_set(), finder)
        text = "J met Emily Johnson. Later Emily Johnson left.\n\nNothing else."

        assert extractor.extract(text) == ["Emily Johnson"]


class TestTransformersBackend:
    """Hugging Face backend with a stubbed classifier"""

    def test_runs_parsed_from_classifier_output(self):
        pytest.importorskip("torch")
        pytest.importorskip("transformers")
        from ner_providers.huggingface_local import TransformersPersonFinder

        tags = {"Emily": "B-PER", "Johnson": "I-PER", "Smith": "B-PER"}

        class StubFinder(TransformersPersonFinder):
            def classify_to_string(self, words):
                return format_tagged_output(words, [tags.get(word, "O") for word in words])

        finder = StubFinder({"model_name": "stub"})
        finder.model = object()
        finder.segmenter = spacy.blank("en")
        finder.segmenter.add_pipe("sentencizer")

        sentences = finder.find_person_spans("Emily Johnson called. Ask for Smith.")
        assert [s.span_texts() for s in sentences] == [["Emily Johnson"], ["Smith"]]

    def test_one_line_per_word(self, tiny_bert):
        words = ["Robert", "Smith", "saw", "the", "patient", "."]
        finder = tiny_bert()

        pairs = parse_tagged_output(finder.classify_to_string(words))
        assert [word for word, _ in pairs] == words
        assert {label for _, label in pairs} <= {"O", "PERSON"}

    def test_labels_mapped_through_id2label(self, tiny_bert):
        finder = tiny_bert(label_id=2)

        output = finder.classify_to_string(["Robert", "Smith", "saw", "Emily"])
        assert output == "Robert\tI-PER\nSmith\tI-PER\nsaw\tI-PER\nEmily\tI-PER"

    def test_unmapped_label_ids_become_o(self, tiny_bert):
        finder = tiny_bert(label_id=2)
        finder.id2label = {0: "O", 1: "B-PER"}

        output = finder.classify_to_string(["Emily", "Johnson"])
        assert output == "Emily\tO\nJohnson\tO"

    def test_long_sentence_is_labelled_past_max_length(self, tiny_bert):
        words = ["the", "patient", "saw"] * 10 + ["Robert", "Smith"]
        finder = tiny_bert(max_length=8, label_id=1)

        pairs = parse_tagged_output(finder.classify_to_string(words))
        assert len(pairs) == len(words)
        assert all(label == "PERSON" for _, label in pairs)

    def test_person_spans_from_real_classifier(self, tiny_bert):
        finder = tiny_bert(label_id=1)

        sentences = finder.find_person_spans("Emily Johnson saw Robert.")
        assert len(sentences) == 1
        assert sentences[0].tokens == ("Emily", "Johnson", "saw", "Robert", ".")
        assert sentences[0].span_texts() == ["Emily Johnson saw Robert ."]

    def test_unloaded_model_raises(self):
        pytest.importorskip("torch")
        pytest.importorskip("transformers")
        from ner_providers.huggingface_local import TransformersPersonFinder

        with pytest.raises(RuntimeError):
            TransformersPersonFinder({"model_name": "stub"}).find_person_spans("text")


class TestBackendRegistry:
    """Backend selection at construction time"""

    class WorkingFinder:
        name = "working"

        def load(self):
            pass

        def find_person_spans(self, text):
            return []

        def clear_adaptive_data(self):
            pass

    def test_first_loadable_backend_wins(self):
        registry = BackendRegistry()

        def broken(config):
            raise OSError("weights missing")

        registry.register("broken", broken)
        registry.register("working", lambda config: self.WorkingFinder())

        result = registry.load(["broken", "working"])
        assert result.available
        assert result.backend == "working"
        assert result.status == ProviderStatus.AVAILABLE
        assert "broken" in result.errors
        assert "weights missing" in result.errors["broken"]

    def test_nothing_loadable_is_unavailable(self):
        registry = BackendRegistry()
        result = registry.load(["unknown"])

        assert isinstance(result, FinderLoadResult)
        assert not result.available
        assert result.finder is None
        assert result.status == ProviderStatus.UNAVAILABLE
        assert result.errors == {"unknown": "backend not registered"}

    def test_missing_spacy_model_falls_through(self):
        registry = BackendRegistry()
        result = registry.load(["spacy"], {"spacy": {"model_name": "no_such_spacy_model_xyz"}})

        assert not result.available
        assert "spacy" in result.errors

    def test_builtin_backends_registered(self):
        assert BackendRegistry().list_backends() == ["spacy", "transformers"]


class TestErrorClassification:

    def test_resource_errors(self):
        assert isinstance(classify_error(OSError("gone")), ResourceUnavailableError)
        assert isinstance(classify_error(ImportError("no torch")), ResourceUnavailableError)

    def test_runtime_errors_are_transient(self):
        error = classify_error(ValueError("text too long"), provider_name="spacy")
        assert isinstance(error, TransientExtractionError)
        assert error.provider_name == "spacy"
        assert "(provider: spacy)" in str(error)

    def test_already_classified_passthrough(self):
        error = ResourceUnavailableError("x")
        assert classify_error(error) is error
