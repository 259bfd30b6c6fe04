"""Configuration management for ReviewPulse."""

from pydantic_settings import BaseSettings
from pydantic import Field

from .constants import ErrorConstants, HistoryConstants, ScheduleConstants


class Settings(BaseSettings):
    """Application settings."""

    # Dataset
    dataset_path: str = Field("data/reviews.tsv", description="TSV file path or http(s) URL with a 'text' column")

    # Sentiment model
    classifier_backend: str = Field("transformers", description="Classifier backend: transformers or vader")
    model_id: str = Field(
        "distilbert-base-uncased-finetuned-sst-2-english",
        description="Hugging Face model used by the transformers backend"
    )

    # Spreadsheet webhook
    webhook_url: str = Field("", description="Logging webhook URL (empty disables the sink)")
    auto_logging_enabled: bool = Field(False, description="Forward results to the webhook automatically")
    sink_timeout: float = Field(10.0, description="Webhook request timeout in seconds")

    # Loop behaviour
    analysis_interval_seconds: float = Field(ScheduleConstants.DEFAULT_INTERVAL_SECONDS, description="Seconds between periodic analyses")
    history_size: int = Field(HistoryConstants.MAX_HISTORY, ge=1, le=HistoryConstants.MAX_HISTORY, description="Number of recent results kept in memory")
    duplicate_window_seconds: float = Field(HistoryConstants.DUPLICATE_WINDOW_SECONDS, description="Window in which a repeated review is not re-logged")
    history_text_chars: int = Field(HistoryConstants.TRUNCATE_CHARS, description="Characters of review text kept per history entry")
    error_display_seconds: float = Field(ErrorConstants.ERROR_DISPLAY_SECONDS, description="How long a user-facing error stays visible")

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Dataset fetch retries
    max_retries: int = Field(ErrorConstants.MAX_RETRY_ATTEMPTS, description="Maximum retry attempts")
    retry_delay: float = Field(ErrorConstants.RETRY_BASE_DELAY, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "REVIEWPULSE_"


# Global settings instance
settings = Settings()
