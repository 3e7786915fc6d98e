"""Notification payloads and best-effort transmission channels."""

from __future__ import annotations

import http.client as http_client
import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol
from urllib import error as urllib_error
from urllib import request as urllib_request

logger = logging.getLogger(__name__)

NOTIFICATION_TYPE_PREFIX = "user-interest-thanks"

# Notification types this service emits, with their delivery importance.
NOTIFICATION_TYPES: dict[str, dict[str, int]] = {
    NOTIFICATION_TYPE_PREFIX: {"importance": 0},
    f"{NOTIFICATION_TYPE_PREFIX}-creation": {"importance": 0},
    f"{NOTIFICATION_TYPE_PREFIX}-edit": {"importance": 0},
    f"{NOTIFICATION_TYPE_PREFIX}-log": {"importance": 0},
}


class TransmissionError(RuntimeError):
    """Raised when the notification channel cannot accept a payload."""


@dataclass(frozen=True, slots=True)
class NotificationPayload:
    """Structured thanks notification handed to the broadcast channel."""

    subtype: str
    agent_id: int
    agent_name: str
    agent_url: str
    recipient_id: int
    recipient_name: str
    recipient_url: str
    target_text: str
    target_url: str
    source: str | None = None

    @property
    def notification_type(self) -> str:
        return f"{NOTIFICATION_TYPE_PREFIX}-{self.subtype}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the broadcast wire shape (numbered message parameters)."""

        return {
            "type": self.notification_type,
            "agent_id": self.agent_id,
            "recipient_id": self.recipient_id,
            "url": self.target_url,
            "source": self.source,
            "message": [
                ["user_note", ""],
                [1, self.agent_url],
                [2, self.agent_name],
                [3, self.recipient_url],
                [4, self.recipient_name],
                [5, self.target_url],
                [6, self.target_text],
            ],
        }


class NotificationChannel(Protocol):
    """Protocol for fire-and-forget notification delivery."""

    def transmit(self, payload: NotificationPayload) -> None:
        """Deliver a payload or raise TransmissionError."""


class LoggingNotificationChannel:
    """Channel that only records payloads in the application log."""

    def transmit(self, payload: NotificationPayload) -> None:
        logger.info(
            "thanks.notification type=%s agent_id=%d recipient_id=%d url=%s",
            payload.notification_type,
            payload.agent_id,
            payload.recipient_id,
            payload.target_url,
        )


@dataclass(slots=True)
class WebhookNotificationChannel:
    """POSTs payloads as JSON to a broadcast service endpoint."""

    url: str
    timeout_seconds: int = 10

    def transmit(self, payload: NotificationPayload) -> None:
        req = urllib_request.Request(
            url=self.url,
            data=json.dumps(payload.to_dict()).encode("utf-8"),
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        try:
            with urllib_request.urlopen(req, timeout=self.timeout_seconds) as resp:
                resp.read()
        except urllib_error.HTTPError as exc:
            raise TransmissionError(f"Broadcast HTTP {exc.code}") from exc
        except urllib_error.URLError as exc:
            raise TransmissionError(f"Broadcast request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise TransmissionError("Broadcast request timed out") from exc
        except (OSError, http_client.HTTPException) as exc:
            raise TransmissionError(f"Broadcast connection failed: {exc!r}") from exc


def build_notification_channel(
    webhook_url: str | None,
    timeout_seconds: int = 10,
) -> NotificationChannel:
    """Return the webhook channel when configured, else the logging channel."""

    if webhook_url:
        return WebhookNotificationChannel(url=webhook_url, timeout_seconds=timeout_seconds)
    return LoggingNotificationChannel()
