"""Sentiment derivation from raw classifier output."""

from .constants import SentimentConstants
from .models import Sentiment


def derive_sentiment(label: str, score: float) -> Sentiment:
    """Map a model label and score to positive, negative or neutral.

    A label only counts when its score is strictly above 0.5, so a weak
    NEGATIVE prediction comes out neutral.
    """
    marker = str(label).upper()
    if SentimentConstants.POSITIVE_MARKER in marker and score > SentimentConstants.MIN_CONFIDENT_SCORE:
        return Sentiment.POSITIVE
    if SentimentConstants.NEGATIVE_MARKER in marker and score > SentimentConstants.MIN_CONFIDENT_SCORE:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def confidence_percent(score: float) -> float:
    """Convert a 0..1 score to a percentage with one decimal."""
    return round(float(score) * 100, 1)
