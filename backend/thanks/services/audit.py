"""Durable thanks log: dedup writes, point lookups and listing."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from thanks.models.thanks_log_entry import ThanksLogEntry
from thanks.platform.interfaces import AuditStore, DedupRecord
from thanks.platform.types import profile_url
from thanks.schemas.thanks_log import ThanksLogEntryRead, ThanksLogLine

logger = logging.getLogger(__name__)


class SqlAuditStore(AuditStore):
    """Thanks log backed by the ``thanks_log`` table.

    ``append`` relies on the (actor_id, thanks_key) unique constraint to turn a
    lost insert race into a reported duplicate rather than a second row.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def has_record(self, actor_id: int, thanks_key: str) -> bool:
        stmt = (
            select(ThanksLogEntry.id)
            .where(ThanksLogEntry.actor_id == actor_id, ThanksLogEntry.thanks_key == thanks_key)
            .limit(1)
        )
        return self._db.scalar(stmt) is not None

    def append(self, record: DedupRecord) -> bool:
        self._db.add(
            ThanksLogEntry(
                actor_id=record.actor_id,
                actor_name=record.actor_name,
                thanks_key=record.thanks_key,
                recipient_id=record.recipient_id,
                recipient_name=record.recipient_name,
                source=record.source,
                recorded_at=record.recorded_at,
            )
        )
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            logger.info(
                "thanks.log_insert_conflict actor_id=%d thanks_key=%s",
                record.actor_id,
                record.thanks_key,
            )
            return False
        return True


def list_thanks_log(
    db: Session,
    *,
    actor_id: int | None = None,
    recipient_id: int | None = None,
    limit: int = 50,
) -> list[ThanksLogEntry]:
    """List thanks log records, newest first."""

    stmt = select(ThanksLogEntry)
    if actor_id is not None:
        stmt = stmt.where(ThanksLogEntry.actor_id == actor_id)
    if recipient_id is not None:
        stmt = stmt.where(ThanksLogEntry.recipient_id == recipient_id)
    stmt = stmt.order_by(ThanksLogEntry.recorded_at.desc(), ThanksLogEntry.id.desc()).limit(limit)
    return list(db.scalars(stmt).all())


def format_thanks_log_entry(entry: ThanksLogEntry, *, site_base_url: str) -> ThanksLogLine:
    """Render one record; the log target is the recipient's profile, not a page."""

    return ThanksLogLine(
        entry=ThanksLogEntryRead.model_validate(entry),
        actor_url=profile_url(site_base_url, entry.actor_name),
        recipient_url=profile_url(site_base_url, entry.recipient_name),
        summary=f"{entry.actor_name} thanked {entry.recipient_name}",
    )
