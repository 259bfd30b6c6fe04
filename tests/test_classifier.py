"""Tests for the sentiment classifier adapters."""

import pytest
from reviewpulse.core.errors import ClassificationError, ModelLoadError
from reviewpulse.services.classifier import ClassifierFactory, TransformersClassifier, VADERClassifier


class FakePipeline:
    def __init__(self, output):
        self.output = output
        self.inputs = []

    def __call__(self, text):
        self.inputs.append(text)
        return self.output


class TestTransformersClassifier:
    """Test the Hugging Face pipeline wrapper with an injected factory."""

    def setup_method(self):
        """Set up a fake pipeline factory."""
        self.pipeline = FakePipeline([{"label": "NEGATIVE", "score": 0.87}])
        self.factory_calls = []

        def factory(task, model=None, tokenizer=None):
            self.factory_calls.append((task, model, tokenizer))
            return self.pipeline

        self.classifier = TransformersClassifier("tiny-model", pipeline_factory=factory)

    def test_load_builds_sentiment_pipeline(self):
        self.classifier.load()
        assert self.classifier.loaded
        assert self.factory_calls == [("sentiment-analysis", "tiny-model", "tiny-model")]

    def test_classify_returns_predictions(self):
        self.classifier.load()
        assert self.classifier.classify("Broke in a day") == [{"label": "NEGATIVE", "score": 0.87}]

    def test_long_input_is_truncated(self):
        self.classifier.load()
        self.classifier.classify("x" * 2000)
        assert len(self.pipeline.inputs[0]) == 512

    def test_classify_before_load(self):
        with pytest.raises(ClassificationError):
            self.classifier.classify("anything")

    def test_malformed_output(self):
        self.pipeline.output = [{"label": "POSITIVE"}]
        self.classifier.load()
        with pytest.raises(ClassificationError):
            self.classifier.classify("text")

    def test_empty_output(self):
        self.pipeline.output = []
        self.classifier.load()
        with pytest.raises(ClassificationError):
            self.classifier.classify("text")

    def test_load_failure(self):
        def factory(*args, **kwargs):
            raise OSError("model not found")

        classifier = TransformersClassifier("missing/model", pipeline_factory=factory)
        with pytest.raises(ModelLoadError, match="missing/model"):
            classifier.load()
        assert not classifier.loaded


class TestVADERClassifier:
    """Test the lexicon-based classifier."""

    def setup_method(self):
        """Set up test instance."""
        self.classifier = VADERClassifier()
        self.classifier.load()

    def test_positive(self):
        [top] = self.classifier.classify("I love this phone, it is absolutely wonderful!")
        assert top["label"] == "POSITIVE"
        assert 0.5 < top["score"] <= 1.0

    def test_negative(self):
        [top] = self.classifier.classify("This is terrible, I hate it and it is awful.")
        assert top["label"] == "NEGATIVE"
        assert 0.5 < top["score"] <= 1.0

    def test_neutral(self):
        [top] = self.classifier.classify("The box is blue.")
        assert top["label"] == "NEUTRAL"
        assert top["score"] == 1.0

    def test_requires_load(self):
        with pytest.raises(ClassificationError):
            VADERClassifier().classify("text")


class TestClassifierFactory:
    """Test backend selection."""

    def test_vader(self):
        assert isinstance(ClassifierFactory.create("vader"), VADERClassifier)

    def test_transformers(self):
        classifier = ClassifierFactory.create("transformers", "some/model")
        assert isinstance(classifier, TransformersClassifier)
        assert classifier.model_id == "some/model"
        assert not classifier.loaded

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            ClassifierFactory.create("bert-as-a-service")
