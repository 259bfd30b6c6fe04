"""Core modules for ReviewPulse."""

from .models import *
from .config import settings
from .errors import *
from .sampler import Sampler
from .sentiment import derive_sentiment, confidence_percent
from .history import HistoryBuffer, is_duplicate

__all__ = [
    "settings",
    "Sampler",
    "HistoryBuffer",
    "is_duplicate",
    "derive_sentiment",
    "confidence_percent",
    "AnalysisResult",
    "AnalysisEvent",
    "HistoryEntry",
    "LoopState",
    "Sentiment",
    "SinkStatus",
]
