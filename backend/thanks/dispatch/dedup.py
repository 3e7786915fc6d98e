"""Two-tier duplicate detection for thanks."""

from __future__ import annotations

import logging

from thanks.dispatch.context import RequestContext
from thanks.dispatch.keys import ThanksKey
from thanks.dispatch.session import mark_sent
from thanks.platform.interfaces import AuditStore

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """Checks session flags first, then the durable thanks log.

    The session check is only an optimisation: a negative answer there never
    means "not yet thanked", so dispatch always consults ``recorded`` before
    writing. With ``audit_store=None`` (durable logging disabled) only the
    session flags are consulted.
    """

    def __init__(self, audit_store: AuditStore | None) -> None:
        self._audit = audit_store

    @property
    def durable(self) -> bool:
        return self._audit is not None

    def seen_in_session(self, ctx: RequestContext, key: ThanksKey) -> bool:
        return ctx.session.has_thanked(key)

    def recorded(self, ctx: RequestContext, key: ThanksKey) -> bool:
        """Authoritative lookup; a hit also sets the session flags."""

        if self._audit is None:
            return False
        if not self._audit.has_record(ctx.actor.id, key.value):
            return False
        mark_sent(ctx.session, key)
        return True

    def already_thanked(self, ctx: RequestContext, key: ThanksKey) -> bool:
        if self.seen_in_session(ctx, key):
            return True
        return self.recorded(ctx, key)
