"""Sentiment classifier adapters."""

import logging
from typing import Any, Dict, List, Optional, Protocol

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from ..core.config import settings
from ..core.constants import SentimentConstants
from ..core.errors import ClassificationError, ModelLoadError

logger = logging.getLogger(__name__)


class SentimentClassifier(Protocol):
    name: str

    def load(self) -> None:
        ...

    def classify(self, text: str) -> List[Dict[str, Any]]:
        ...


def _validate(raw: Any) -> List[Dict[str, Any]]:
    """Normalise classifier output to a non-empty list of {label, score}."""
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ClassificationError(f"Classifier returned no predictions: {raw!r}")
    predictions = []
    for item in raw:
        if not isinstance(item, dict) or "label" not in item or "score" not in item:
            raise ClassificationError(f"Malformed prediction: {item!r}")
        try:
            score = float(item["score"])
        except (TypeError, ValueError) as e:
            raise ClassificationError(f"Non-numeric score in prediction: {item!r}") from e
        predictions.append({"label": str(item["label"]), "score": score})
    return predictions


class TransformersClassifier:
    """Run a pretrained Hugging Face text-classification pipeline."""

    def __init__(self, model_id: Optional[str] = None, *, pipeline_factory=None):
        self.model_id = model_id or settings.model_id
        self.name = self.model_id
        self._pipeline_factory = pipeline_factory
        self._pipeline = None

    @property
    def loaded(self) -> bool:
        return self._pipeline is not None

    def load(self) -> None:
        factory = self._pipeline_factory
        try:
            if factory is None:
                from transformers import pipeline

                factory = pipeline
            self._pipeline = factory(
                "sentiment-analysis",
                model=self.model_id,
                tokenizer=self.model_id,
            )
        except Exception as e:
            raise ModelLoadError(f"Could not load model {self.model_id}: {e}") from e
        logger.info(f"Sentiment model ready: {self.model_id}")

    def classify(self, text: str) -> List[Dict[str, Any]]:
        if self._pipeline is None:
            raise ClassificationError("Model is not loaded")
        raw = self._pipeline(text[:SentimentConstants.MAX_MODEL_INPUT_CHARS])
        return _validate(raw)


class VADERClassifier:
    """Lexicon-based classifier that needs no model download."""

    name = "vader"

    def __init__(self):
        self.analyzer = None

    @property
    def loaded(self) -> bool:
        return self.analyzer is not None

    def load(self) -> None:
        try:
            self.analyzer = SentimentIntensityAnalyzer()
        except Exception as e:
            raise ModelLoadError(f"Could not initialise VADER: {e}") from e

    def classify(self, text: str) -> List[Dict[str, Any]]:
        if self.analyzer is None:
            raise ClassificationError("VADER analyzer is not loaded")
        compound = self.analyzer.polarity_scores(text)["compound"]

        # Determine label
        if compound >= SentimentConstants.VADER_NEUTRAL_BAND:
            label, score = "POSITIVE", compound
        elif compound <= -SentimentConstants.VADER_NEUTRAL_BAND:
            label, score = "NEGATIVE", -compound
        else:
            label, score = "NEUTRAL", 1.0 - abs(compound)

        return _validate([{"label": label, "score": score}])


class ClassifierFactory:
    """Factory for creating sentiment classifiers."""

    @staticmethod
    def create(backend: Optional[str] = None, model_id: Optional[str] = None):
        """Create the configured classifier (not yet loaded)."""
        backend = (backend or settings.classifier_backend).lower()
        if backend == "vader":
            return VADERClassifier()
        if backend == "transformers":
            return TransformersClassifier(model_id)
        raise ValueError(f"Unknown classifier backend: {backend}")
