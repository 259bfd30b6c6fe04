"""Fire-and-forget delivery of results to a spreadsheet webhook."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

from ..core.config import settings
from ..core.errors import SinkDeliveryError

logger = logging.getLogger(__name__)


class WebhookSink:
    """POST JSON payloads to a logging webhook on a background worker.

    Calls are never retried and the response body is ignored; callers only
    get a future for status bookkeeping.
    """

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None, executor: Optional[ThreadPoolExecutor] = None):
        self.url = url if url is not None else settings.webhook_url
        self.timeout = timeout if timeout is not None else settings.sink_timeout
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="reviewpulse-sink")
        self._owns_executor = executor is None

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def deliver(self, payload: Dict[str, Any]) -> None:
        """Send one payload synchronously. Raises SinkDeliveryError on failure."""
        if not self.url:
            raise SinkDeliveryError("No webhook URL configured")
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SinkDeliveryError(f"Webhook delivery failed: {e}") from e
        logger.debug(f"Webhook accepted payload ({response.status_code})")

    def send(self, payload: Dict[str, Any]) -> Future:
        """Queue a payload for delivery and return immediately."""
        return self._executor.submit(self.deliver, payload)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)
