"""Tests for the webhook sink."""

import pytest
import requests
from unittest.mock import Mock, patch
from reviewpulse.core.errors import SinkDeliveryError
from reviewpulse.services.sink import WebhookSink

PAYLOAD = {"ts_iso": "2024-05-01T12:00:00+00:00", "review": "Nice", "sentiment": "positive", "meta": "{}"}


class TestWebhookSink:
    """Test best-effort delivery."""

    def setup_method(self):
        """Set up test instance."""
        self.sink = WebhookSink("https://hooks.example.com/log", timeout=3)

    def teardown_method(self):
        self.sink.close()

    @patch("reviewpulse.services.sink.requests.post")
    def test_deliver_posts_json(self, mock_post):
        mock_post.return_value = Mock(status_code=200)
        self.sink.deliver(PAYLOAD)
        mock_post.assert_called_once_with("https://hooks.example.com/log", json=PAYLOAD, timeout=3)

    @patch("reviewpulse.services.sink.requests.post")
    def test_transport_error_becomes_delivery_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(SinkDeliveryError):
            self.sink.deliver(PAYLOAD)

    @patch("reviewpulse.services.sink.requests.post")
    def test_http_error_becomes_delivery_error(self, mock_post):
        response = Mock(status_code=500)
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        mock_post.return_value = response
        with pytest.raises(SinkDeliveryError):
            self.sink.deliver(PAYLOAD)

    @patch("reviewpulse.services.sink.requests.post")
    def test_send_is_fire_and_forget(self, mock_post):
        mock_post.side_effect = requests.Timeout("slow")
        future = self.sink.send(PAYLOAD)
        assert isinstance(future.exception(timeout=5), SinkDeliveryError)

    @patch("reviewpulse.services.sink.requests.post")
    def test_send_success(self, mock_post):
        mock_post.return_value = Mock(status_code=200)
        future = self.sink.send(PAYLOAD)
        assert future.result(timeout=5) is None

    def test_unconfigured_sink(self):
        sink = WebhookSink("")
        try:
            assert not sink.configured
            with pytest.raises(SinkDeliveryError):
                sink.deliver(PAYLOAD)
        finally:
            sink.close()
