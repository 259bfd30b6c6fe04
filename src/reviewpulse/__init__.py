"""ReviewPulse - live review sentiment demo with spreadsheet logging."""

__version__ = "1.0.0"
__author__ = "ReviewPulse Team"

from .core.config import settings
from .core.models import AnalysisResult, HistoryEntry, LoopState, Sentiment
from .core.orchestrator import AnalysisLoop, PeriodicTrigger
from .services.classifier import ClassifierFactory
from .services.dataset import ReviewDataset
from .services.sink import WebhookSink

__all__ = [
    "settings",
    "AnalysisLoop",
    "PeriodicTrigger",
    "AnalysisResult",
    "HistoryEntry",
    "LoopState",
    "Sentiment",
    "ClassifierFactory",
    "ReviewDataset",
    "WebhookSink",
]
