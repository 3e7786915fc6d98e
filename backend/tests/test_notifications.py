"""Tests for notification payloads, channels and the rate limiter."""

import http.client as http_client
import unittest
from unittest.mock import MagicMock, patch
from urllib import error as urllib_error

from thanks.platform.notifications import (
    NOTIFICATION_TYPES,
    LoggingNotificationChannel,
    NotificationPayload,
    TransmissionError,
    WebhookNotificationChannel,
    build_notification_channel,
)
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.platform.types import page_url, profile_url


def _payload(subtype: str = "edit") -> NotificationPayload:
    return NotificationPayload(
        subtype=subtype,
        agent_id=2,
        agent_name="Bob",
        agent_url="https://wiki.example.org/wiki/UserProfile:Bob",
        recipient_id=1,
        recipient_name="Alice",
        recipient_url="https://wiki.example.org/wiki/UserProfile:Alice",
        target_text="Main Page",
        target_url="https://wiki.example.org/wiki/Main_Page",
        source="diff",
    )


class NotificationPayloadTests(unittest.TestCase):
    def test_types_are_registered(self) -> None:
        for subtype in ("creation", "edit", "log"):
            with self.subTest(subtype=subtype):
                notification_type = _payload(subtype).notification_type
                self.assertIn(notification_type, NOTIFICATION_TYPES)
                self.assertEqual(NOTIFICATION_TYPES[notification_type]["importance"], 0)

    def test_wire_shape_numbers_message_parameters(self) -> None:
        body = _payload().to_dict()

        self.assertEqual(body["type"], "user-interest-thanks-edit")
        self.assertEqual(body["agent_id"], 2)
        self.assertEqual(body["recipient_id"], 1)
        self.assertEqual(body["url"], "https://wiki.example.org/wiki/Main_Page")
        self.assertEqual(
            body["message"],
            [
                ["user_note", ""],
                [1, "https://wiki.example.org/wiki/UserProfile:Bob"],
                [2, "Bob"],
                [3, "https://wiki.example.org/wiki/UserProfile:Alice"],
                [4, "Alice"],
                [5, "https://wiki.example.org/wiki/Main_Page"],
                [6, "Main Page"],
            ],
        )

    def test_urls(self) -> None:
        self.assertEqual(page_url("https://wiki.example.org/", "Main Page"), "https://wiki.example.org/wiki/Main_Page")
        self.assertEqual(profile_url("https://wiki.example.org", "Alice"), "https://wiki.example.org/wiki/UserProfile:Alice")


class NotificationChannelTests(unittest.TestCase):
    def test_channel_selection(self) -> None:
        self.assertIsInstance(build_notification_channel(None), LoggingNotificationChannel)

        channel = build_notification_channel("https://broadcast.example.org/notify", 3)
        self.assertIsInstance(channel, WebhookNotificationChannel)
        self.assertEqual(channel.timeout_seconds, 3)

    def test_logging_channel_logs_payload(self) -> None:
        with self.assertLogs("thanks.platform.notifications", level="INFO") as logs:
            LoggingNotificationChannel().transmit(_payload())

        self.assertIn("type=user-interest-thanks-edit", logs.output[0])

    def test_webhook_failures_become_transmission_errors(self) -> None:
        channel = WebhookNotificationChannel(url="https://broadcast.example.org/notify")
        failures = (
            urllib_error.URLError("connection refused"),
            urllib_error.HTTPError(channel.url, 503, "unavailable", None, None),
            TimeoutError(),
            http_client.RemoteDisconnected("Remote end closed connection without response"),
            ConnectionResetError(104, "Connection reset by peer"),
        )
        for failure in failures:
            with self.subTest(failure=type(failure).__name__):
                with patch("thanks.platform.notifications.urllib_request.urlopen", side_effect=failure):
                    with self.assertRaises(TransmissionError):
                        channel.transmit(_payload())

    def test_truncated_response_body_becomes_transmission_error(self) -> None:
        channel = WebhookNotificationChannel(url="https://broadcast.example.org/notify")
        response = MagicMock()
        response.__enter__.return_value.read.side_effect = http_client.IncompleteRead(b"", 12)

        with patch("thanks.platform.notifications.urllib_request.urlopen", return_value=response):
            with self.assertRaises(TransmissionError):
                channel.transmit(_payload())


class SlidingWindowRateLimiterTests(unittest.TestCase):
    def test_limit_within_window_then_recovers(self) -> None:
        now = [1000.0]
        limiter = SlidingWindowRateLimiter(2, 60, clock=lambda: now[0])

        self.assertFalse(limiter.hit("thanks-notification:2"))
        self.assertFalse(limiter.hit("thanks-notification:2"))
        self.assertTrue(limiter.hit("thanks-notification:2"))
        self.assertFalse(limiter.hit("thanks-notification:4"))

        now[0] += 61
        self.assertFalse(limiter.hit("thanks-notification:2"))

    def test_non_positive_limit_disables_limiting(self) -> None:
        limiter = SlidingWindowRateLimiter(0, 60)

        self.assertFalse(any(limiter.hit("k") for _ in range(50)))

    def test_reset_clears_state(self) -> None:
        limiter = SlidingWindowRateLimiter(1, 60)
        limiter.hit("k")

        limiter.reset()

        self.assertFalse(limiter.hit("k"))


if __name__ == "__main__":
    unittest.main()
