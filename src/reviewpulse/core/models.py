"""Data models for ReviewPulse."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any

from .constants import HistoryConstants


class Sentiment(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class SinkStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    OK = "ok"
    FAILED = "failed"


def truncate_text(text: str, limit: int = HistoryConstants.TRUNCATE_CHARS) -> str:
    """Cap text at ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + HistoryConstants.ELLIPSIS


@dataclass(frozen=True)
class HistoryEntry:
    """Compact summary of a past analysis."""
    text: str  # truncated
    label: str
    confidence_percent: float
    timestamp: datetime


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one completed classification."""
    text: str
    label: str
    score: float
    sentiment: Sentiment
    confidence_percent: float
    timestamp: datetime
    triggered_by_user: bool

    @property
    def confidence_display(self) -> str:
        return f"{self.confidence_percent:.1f}"

    def summary(self, limit: int = HistoryConstants.TRUNCATE_CHARS) -> HistoryEntry:
        return HistoryEntry(
            text=truncate_text(self.text, limit),
            label=self.label,
            confidence_percent=self.confidence_percent,
            timestamp=self.timestamp,
        )


@dataclass(frozen=True)
class AnalysisEvent:
    """Notification delivered to presentation subscribers."""
    kind: str  # "result" or "error"
    result: Optional[AnalysisResult] = None
    error: Optional[Exception] = None


@dataclass
class LoopState:
    """Mutable state owned by a single AnalysisLoop."""
    busy: bool = False
    auto_logging_enabled: bool = False
    dataset_ready: bool = False
    model_ready: bool = False

    last_result: Optional[AnalysisResult] = None
    last_user_error: Optional[str] = None
    last_user_error_at: Optional[datetime] = None
    startup_error: Optional[str] = None
    diagnostics: List[Dict[str, Any]] = field(default_factory=list)

    sink_status: SinkStatus = SinkStatus.IDLE
    analyses_completed: int = 0
    auto_logged: int = 0
    sink_failures: int = 0
    skipped_busy: int = 0

    @property
    def ready(self) -> bool:
        return self.dataset_ready and self.model_ready

    def record_diagnostic(self, message: str, when: datetime) -> None:
        self.diagnostics.append({"timestamp": when.isoformat(), "message": message})
        del self.diagnostics[:-HistoryConstants.MAX_DIAGNOSTICS]
