"""Services for ReviewPulse."""

from .classifier import ClassifierFactory, TransformersClassifier, VADERClassifier
from .dataset import ReviewDataset
from .sink import WebhookSink

__all__ = [
    "ClassifierFactory",
    "TransformersClassifier",
    "VADERClassifier",
    "ReviewDataset",
    "WebhookSink",
]
