"""Emit thanks notifications and write the durable thanks record."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from thanks.dispatch.context import RequestContext
from thanks.dispatch.dedup import DuplicateDetector
from thanks.dispatch.events import ContributionEvent
from thanks.dispatch.keys import ThanksKey
from thanks.dispatch.session import mark_sent
from thanks.platform.interfaces import AuditStore, DedupRecord
from thanks.platform.notifications import NotificationChannel, NotificationPayload, TransmissionError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of one dispatch; duplicates are successes too."""

    recipient_name: str
    thanks_key: ThanksKey
    duplicate: bool = False
    notified: bool = False


def build_notification(
    ctx: RequestContext,
    event: ContributionEvent,
    *,
    source: str | None = None,
) -> NotificationPayload:
    """Build the broadcast payload for a fresh thanks."""

    return NotificationPayload(
        subtype=event.subtype,
        agent_id=ctx.actor.id,
        agent_name=ctx.actor.name,
        agent_url=ctx.actor.profile_url,
        recipient_id=event.recipient.id,
        recipient_name=event.recipient.name,
        recipient_url=event.recipient.profile_url,
        target_text=event.target.display_text,
        target_url=event.target.url,
        source=source,
    )


class Dispatcher:
    """Sends a thanks exactly once per (actor, key).

    The durable record is written before the notification goes out: a losing
    concurrent insert is reported as a duplicate and never notifies. The
    notification itself is best-effort; ``TransmissionError`` is logged and
    absorbed and the thanks still counts as sent.
    """

    def __init__(
        self,
        detector: DuplicateDetector,
        channel: NotificationChannel,
        *,
        audit_store: AuditStore | None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._detector = detector
        self._channel = channel
        self._audit = audit_store
        self._clock = clock

    def dispatch(
        self,
        ctx: RequestContext,
        event: ContributionEvent,
        *,
        source: str | None = None,
    ) -> DispatchResult:
        key = event.thanks_key
        if self._detector.recorded(ctx, key):
            logger.info("thanks.duplicate actor_id=%d thanks_key=%s stage=recheck", ctx.actor.id, key)
            return DispatchResult(recipient_name=event.recipient.name, thanks_key=key, duplicate=True)

        if self._audit is not None and not self._audit.append(self._record_for(ctx, event, source)):
            logger.info("thanks.duplicate actor_id=%d thanks_key=%s stage=insert", ctx.actor.id, key)
            mark_sent(ctx.session, key)
            return DispatchResult(recipient_name=event.recipient.name, thanks_key=key, duplicate=True)

        notified = self._transmit(build_notification(ctx, event, source=source))
        logger.info(
            "thanks.sent actor_id=%d recipient_id=%d thanks_key=%s subtype=%s notified=%s durable=%s",
            ctx.actor.id,
            event.recipient.id,
            key,
            event.subtype,
            notified,
            self._audit is not None,
        )
        return DispatchResult(recipient_name=event.recipient.name, thanks_key=key, notified=notified)

    def _record_for(
        self,
        ctx: RequestContext,
        event: ContributionEvent,
        source: str | None,
    ) -> DedupRecord:
        return DedupRecord(
            actor_id=ctx.actor.id,
            actor_name=ctx.actor.name,
            thanks_key=event.thanks_key.value,
            recipient_id=event.recipient.id,
            recipient_name=event.recipient.name,
            recorded_at=self._clock(),
            source=source,
        )

    def _transmit(self, payload: NotificationPayload) -> bool:
        try:
            self._channel.transmit(payload)
        except TransmissionError as exc:
            logger.warning(
                "thanks.transmission_failed type=%s agent_id=%d recipient_id=%d error=%s",
                payload.notification_type,
                payload.agent_id,
                payload.recipient_id,
                exc,
            )
            return False
        return True
