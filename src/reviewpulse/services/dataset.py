"""Review dataset loading from tab-separated text."""

import csv
import io
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd
import requests
from tenacity import retry, stop_after_attempt, wait_exponential

from ..core.config import settings
from ..core.constants import ErrorConstants, FileConstants
from ..core.errors import DatasetLoadError

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


@retry(
    stop=stop_after_attempt(settings.max_retries),
    wait=wait_exponential(multiplier=settings.retry_delay, max=settings.retry_backoff * 10),
    reraise=True,
)
def fetch_text(url: str, timeout: float = ErrorConstants.REQUEST_TIMEOUT) -> str:
    """Download a dataset resource, retrying transient failures."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.text


def parse_reviews(raw: str) -> List[str]:
    """Parse TSV text and return the non-blank values of its ``text`` column."""
    try:
        frame = pd.read_csv(
            io.StringIO(raw),
            sep=FileConstants.DATASET_SEPARATOR,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            dtype=str,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError as e:
        raise DatasetLoadError("Dataset resource is empty") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise DatasetLoadError(f"Dataset could not be parsed: {e}") from e

    if FileConstants.TEXT_COLUMN not in frame.columns:
        raise DatasetLoadError(
            f"Dataset has no '{FileConstants.TEXT_COLUMN}' column (found: {', '.join(map(str, frame.columns))})"
        )

    reviews = []
    for value in frame[FileConstants.TEXT_COLUMN].tolist():
        if isinstance(value, str) and value.strip():
            reviews.append(value)

    dropped = len(frame) - len(reviews)
    if dropped:
        logger.debug(f"Discarded {dropped} rows with empty or non-text values")
    if not reviews:
        raise DatasetLoadError("Dataset contains no valid review text")
    return reviews


class ReviewDataset:
    """Data source adapter exposing the loaded review texts."""

    def __init__(self, source: Optional[str] = None):
        self.source = source or settings.dataset_path
        self._rows: List[str] = []

    @property
    def loaded(self) -> bool:
        return bool(self._rows)

    def load(self) -> List[str]:
        """Read and validate the dataset. Raises DatasetLoadError on failure."""
        if _is_url(self.source):
            try:
                raw = fetch_text(self.source)
            except requests.RequestException as e:
                raise DatasetLoadError(f"Failed to download dataset from {self.source}: {e}") from e
        else:
            path = Path(self.source)
            try:
                raw = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise DatasetLoadError(f"Failed to read dataset {path}: {e}") from e

        self._rows = parse_reviews(raw)
        logger.info(f"Loaded {len(self._rows)} reviews from {self.source}")
        return self._rows

    def rows(self) -> List[str]:
        return self._rows
