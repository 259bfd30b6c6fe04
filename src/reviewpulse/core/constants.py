"""Constants and configuration values for ReviewPulse."""

# History and Deduplication Constants
class HistoryConstants:
    """Constants related to the recent-results buffer."""

    MAX_HISTORY = 10  # entries kept before the oldest is evicted
    TRUNCATE_CHARS = 50  # chars of review text kept per entry
    ELLIPSIS = "..."
    DUPLICATE_WINDOW_SECONDS = 300  # 5 minutes
    MAX_DIAGNOSTICS = 20  # timer-triggered failures kept for inspection

# Sentiment Constants
class SentimentConstants:
    """Constants for label interpretation."""

    POSITIVE_MARKER = "POSITIVE"
    NEGATIVE_MARKER = "NEGATIVE"
    MIN_CONFIDENT_SCORE = 0.5  # strictly greater is required
    MAX_MODEL_INPUT_CHARS = 512  # chars passed to the transformers pipeline
    VADER_NEUTRAL_BAND = 0.05  # compound magnitude treated as neutral

# Scheduling Constants
class ScheduleConstants:
    """Constants for the periodic trigger."""

    DEFAULT_INTERVAL_SECONDS = 30
    UI_REFRESH_SECONDS = 5  # status panel redraw interval

# Error Handling Constants
class ErrorConstants:
    """Constants for error handling and retries."""

    MAX_RETRY_ATTEMPTS = 3  # dataset fetch attempts
    RETRY_BASE_DELAY = 1  # base delay for exponential backoff
    REQUEST_TIMEOUT = 30  # timeout for dataset downloads
    ERROR_DISPLAY_SECONDS = 5  # user-visible error lifetime

# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    TEXT_COLUMN = "text"
    DATASET_SEPARATOR = "\t"
    EXPORT_VERSION = "1.0.0"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
