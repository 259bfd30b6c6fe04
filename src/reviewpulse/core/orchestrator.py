"""Analysis loop: single-flight sampling, classification and auto-logging."""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Settings, settings
from .errors import (
    ClassificationError,
    DatasetLoadError,
    ModelLoadError,
    NotReadyError,
    ReviewPulseError,
)
from .history import HistoryBuffer, is_duplicate
from .models import AnalysisEvent, AnalysisResult, HistoryEntry, LoopState, SinkStatus
from .sampler import Sampler
from .sentiment import confidence_percent, derive_sentiment
from ..utils.data_prep import build_sink_payload

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PeriodicTrigger:
    """Run ``callback`` on a fixed interval in a background scheduler.

    Ticks that come due while the previous one is still running are dropped
    rather than queued.
    """

    JOB_ID = "periodic_analysis"

    def __init__(self, interval: float, callback: Callable[[], Any]):
        self.interval = float(interval)
        self._callback = callback
        self.scheduler = BackgroundScheduler(timezone=timezone.utc)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        self.scheduler.add_job(
            self._callback,
            IntervalTrigger(seconds=self.interval),
            id=self.JOB_ID,
            name="Periodic review analysis",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()

    def stop(self, wait: bool = True) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)


class AnalysisLoop:
    """Coordinates dataset, classifier and sink for repeated analyses.

    ``request_analysis`` runs at most one analysis at a time; a request that
    arrives while another is in flight is dropped. Only user-triggered
    requests raise errors or notify subscribers. Periodic requests record
    failures in ``state.diagnostics`` and keep going.
    """

    def __init__(
        self,
        dataset,
        classifier,
        sink=None,
        sampler: Optional[Sampler] = None,
        clock: Optional[Callable[[], datetime]] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or settings
        self.dataset = dataset
        self.classifier = classifier
        self.sink = sink
        self.sampler = sampler or Sampler()
        self._clock = clock or _utcnow

        self.state = LoopState(auto_logging_enabled=self.config.auto_logging_enabled)
        self.history = HistoryBuffer(self.config.history_size)
        self._duplicate_window = timedelta(seconds=self.config.duplicate_window_seconds)
        self._lock = threading.Lock()
        self._listeners: List[Callable[[AnalysisEvent], None]] = []
        self._trigger: Optional[PeriodicTrigger] = None

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "AnalysisLoop":
        """Wire the default adapters from configuration."""
        from ..services.classifier import ClassifierFactory
        from ..services.dataset import ReviewDataset
        from ..services.sink import WebhookSink

        config = config or settings
        sink = WebhookSink(config.webhook_url, config.sink_timeout) if config.webhook_url else None
        return cls(
            dataset=ReviewDataset(config.dataset_path),
            classifier=ClassifierFactory.create(config.classifier_backend, config.model_id),
            sink=sink,
            config=config,
        )

    # ------------------------------------------------------------------
    # Startup and scheduling
    def initialize(self) -> bool:
        """Load dataset and model. Returns True when both are ready."""
        errors = []
        try:
            self.dataset.load()
            self.state.dataset_ready = bool(self.dataset.rows())
        except DatasetLoadError as e:
            self.state.dataset_ready = False
            errors.append(str(e))
            logger.error(f"Dataset load failed: {e}")

        try:
            self.classifier.load()
            self.state.model_ready = True
        except ModelLoadError as e:
            self.state.model_ready = False
            errors.append(str(e))
            logger.error(f"Model load failed: {e}")

        self.state.startup_error = "; ".join(errors) or None
        return self.state.ready

    def start(self) -> None:
        """Start periodic analyses. Refuses to run after a failed startup."""
        if not self.state.ready:
            raise NotReadyError(self.state.startup_error or "Loop has not been initialized")
        if self._trigger is not None and self._trigger.running:
            return
        self._trigger = PeriodicTrigger(self.config.analysis_interval_seconds, self._tick)
        self._trigger.start()
        logger.info(f"Periodic analysis every {self.config.analysis_interval_seconds:g}s")

    def stop(self) -> None:
        if self._trigger is not None:
            self._trigger.stop()
            self._trigger = None

    def close(self) -> None:
        self.stop()
        if self.sink is not None:
            self.sink.close()

    @property
    def running(self) -> bool:
        return self._trigger is not None and self._trigger.running

    def _tick(self) -> None:
        if self.state.busy or not self.dataset.rows():
            return
        self.request_analysis(triggered_by_user=False)

    # ------------------------------------------------------------------
    # Presentation interface
    def subscribe(self, listener: Callable[[AnalysisEvent], None]) -> Callable[[], None]:
        """Register for user-triggered result and error events."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_auto_logging(self, enabled: bool) -> None:
        self.state.auto_logging_enabled = bool(enabled)
        logger.info(f"Auto-logging {'enabled' if enabled else 'disabled'}")

    def toggle_auto_logging(self) -> bool:
        self.set_auto_logging(not self.state.auto_logging_enabled)
        return self.state.auto_logging_enabled

    def current_error(self, now: Optional[datetime] = None) -> Optional[str]:
        """The last user-facing error, or None once its display window has passed."""
        if self.state.last_user_error is None:
            return None
        now = now or self._clock()
        if now - self.state.last_user_error_at > timedelta(seconds=self.config.error_display_seconds):
            self.state.last_user_error = None
            self.state.last_user_error_at = None
            return None
        return self.state.last_user_error

    def recent_history(self) -> List[HistoryEntry]:
        return self.history.entries()

    def status(self) -> Dict[str, Any]:
        return {
            "dataset_ready": self.state.dataset_ready,
            "model_ready": self.state.model_ready,
            "busy": self.state.busy,
            "running": self.running,
            "auto_logging_enabled": self.state.auto_logging_enabled,
            "sink_configured": self.sink is not None,
            "sink_status": self.state.sink_status.value,
            "dataset_size": len(self.dataset.rows()),
            "analyses_completed": self.state.analyses_completed,
            "auto_logged": self.state.auto_logged,
            "sink_failures": self.state.sink_failures,
            "skipped_busy": self.state.skipped_busy,
            "startup_error": self.state.startup_error,
        }

    # ------------------------------------------------------------------
    # Analysis
    @contextmanager
    def _single_flight(self):
        if not self._lock.acquire(blocking=False):
            yield False
            return
        self.state.busy = True
        try:
            yield True
        finally:
            self.state.busy = False
            self._lock.release()

    def request_analysis(self, triggered_by_user: bool = False) -> Optional[AnalysisResult]:
        """Analyze one random review.

        Returns None when dropped because another analysis is in flight, or
        when a periodic request fails.
        """
        if not self.state.ready:
            return self._fail(NotReadyError("Dataset or model is not loaded"), triggered_by_user)

        with self._single_flight() as acquired:
            if not acquired:
                self.state.skipped_busy += 1
                logger.debug("Analysis already in progress; request dropped")
                return None
            try:
                result = self._analyze_once(triggered_by_user)
            except ReviewPulseError as e:
                return self._fail(e, triggered_by_user)

        if triggered_by_user:
            self._emit(AnalysisEvent(kind="result", result=result))
        return result

    def _analyze_once(self, triggered_by_user: bool) -> AnalysisResult:
        text = self.sampler.pick(self.dataset.rows())
        label, score = self._classify(text)

        now = self._clock()
        result = AnalysisResult(
            text=text,
            label=label,
            score=score,
            sentiment=derive_sentiment(label, score),
            confidence_percent=confidence_percent(score),
            timestamp=now,
            triggered_by_user=triggered_by_user,
        )

        duplicate = is_duplicate(
            text,
            self.history,
            now,
            window=self._duplicate_window,
            prefix_chars=self.config.history_text_chars,
        )
        self.history.append(result.summary(self.config.history_text_chars))
        self.state.last_result = result
        self.state.analyses_completed += 1
        logger.info(f"{result.sentiment.value} ({result.confidence_display}%): {result.summary().text}")

        if self.state.auto_logging_enabled:
            if duplicate:
                logger.debug("Skipping auto-log for recently seen review")
            else:
                self._dispatch(result)
        return result

    def _classify(self, text: str):
        try:
            predictions = self.classifier.classify(text)
            top = predictions[0]
            label = str(top["label"])
            score = float(top["score"])
        except ClassificationError:
            raise
        except Exception as e:
            raise ClassificationError(f"Classification failed: {e}") from e
        if not 0.0 <= score <= 1.0:
            raise ClassificationError(f"Score out of range: {score}")
        return label, score

    def _fail(self, error: ReviewPulseError, triggered_by_user: bool) -> None:
        now = self._clock()
        if triggered_by_user:
            self.state.last_user_error = str(error)
            self.state.last_user_error_at = now
            self._emit(AnalysisEvent(kind="error", error=error))
            raise error
        logger.warning(f"Periodic analysis failed: {error}")
        self.state.record_diagnostic(f"{type(error).__name__}: {error}", now)
        return None

    def _emit(self, event: AnalysisEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Analysis listener failed")

    # ------------------------------------------------------------------
    # Logging sink
    def _dispatch(self, result: AnalysisResult) -> None:
        if self.sink is None:
            logger.debug("Auto-logging is on but no webhook is configured")
            return
        payload = build_sink_payload(
            result,
            model_name=getattr(self.classifier, "name", type(self.classifier).__name__),
            source=str(getattr(self.dataset, "source", "")),
        )
        self.state.sink_status = SinkStatus.PENDING
        try:
            future = self.sink.send(payload)
        except Exception as e:
            self._record_sink_failure(e)
            return
        future.add_done_callback(self._on_sink_done)

    def _on_sink_done(self, future) -> None:
        error = future.exception()
        if error is not None:
            self._record_sink_failure(error)
        else:
            self.state.auto_logged += 1
            self.state.sink_status = SinkStatus.OK

    def _record_sink_failure(self, error: BaseException) -> None:
        self.state.sink_failures += 1
        self.state.sink_status = SinkStatus.FAILED
        logger.warning(f"Webhook logging failed: {error}")
