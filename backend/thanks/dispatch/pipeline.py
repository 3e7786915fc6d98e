"""Thanks request pipeline: resolve, authorize, deduplicate, dispatch, mark."""

from __future__ import annotations

import logging

from thanks.dispatch.context import RequestContext
from thanks.dispatch.dedup import DuplicateDetector
from thanks.dispatch.dispatcher import Dispatcher, DispatchResult
from thanks.dispatch.events import ContributionEvent
from thanks.dispatch.guard import AuthorizationGuard
from thanks.dispatch.resolver import ReferenceResolver
from thanks.dispatch.session import mark_sent

logger = logging.getLogger(__name__)


class ThanksPipeline:
    """Runs one thanks request end to end."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        guard: AuthorizationGuard,
        detector: DuplicateDetector,
        dispatcher: Dispatcher,
    ) -> None:
        self.resolver = resolver
        self.guard = guard
        self.detector = detector
        self.dispatcher = dispatcher

    def thank(
        self,
        ctx: RequestContext,
        *,
        edit_id: int | None = None,
        action_id: int | None = None,
        source: str | None = None,
    ) -> DispatchResult:
        event = self.resolver.resolve_request(edit_id=edit_id, action_id=action_id)
        return self._run(ctx, event, source=source)

    def thank_reference(
        self,
        ctx: RequestContext,
        kind: str | None,
        raw_id: int | str | None,
        *,
        source: str | None = None,
    ) -> DispatchResult:
        event = self.resolver.resolve(kind, raw_id)
        return self._run(ctx, event, source=source)

    def _run(
        self,
        ctx: RequestContext,
        event: ContributionEvent,
        *,
        source: str | None,
    ) -> DispatchResult:
        self.guard.authorize(ctx.actor, event)

        key = event.thanks_key
        if self.detector.seen_in_session(ctx, key):
            logger.info("thanks.duplicate actor_id=%d thanks_key=%s stage=session", ctx.actor.id, key)
            result = DispatchResult(recipient_name=event.recipient.name, thanks_key=key, duplicate=True)
        else:
            result = self.dispatcher.dispatch(ctx, event, source=source)

        mark_sent(ctx.session, key)
        return result
