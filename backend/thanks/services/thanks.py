"""Wire the thanks pipeline to the database-backed platform adapters."""

from __future__ import annotations

from sqlalchemy.orm import Session

from thanks.config import Settings
from thanks.dispatch.context import RequestContext
from thanks.dispatch.dedup import DuplicateDetector
from thanks.dispatch.dispatcher import Dispatcher
from thanks.dispatch.guard import AuthorizationGuard
from thanks.dispatch.pipeline import ThanksPipeline
from thanks.dispatch.resolver import ReferenceResolver
from thanks.dispatch.session import SessionFlagStore
from thanks.platform.notifications import NotificationChannel
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.platform.sql import SqlActionLogStore, SqlContentStore, SqlIdentityService
from thanks.schemas.thanks import ThankRequest, ThankResult
from thanks.services.audit import SqlAuditStore


def build_identity_service(
    db: Session,
    settings: Settings,
    rate_limiter: SlidingWindowRateLimiter,
) -> SqlIdentityService:
    return SqlIdentityService(db, site_base_url=settings.site_base_url, rate_limiter=rate_limiter)


def build_thanks_pipeline(
    db: Session,
    settings: Settings,
    *,
    identities: SqlIdentityService,
    channel: NotificationChannel,
) -> ThanksPipeline:
    """Assemble the pipeline; a disabled thanks log means session-only dedup."""

    audit_store = SqlAuditStore(db) if settings.thanks_logging else None
    detector = DuplicateDetector(audit_store)
    return ThanksPipeline(
        resolver=ReferenceResolver(
            SqlContentStore(db, identities, site_base_url=settings.site_base_url),
            SqlActionLogStore(db, identities, site_base_url=settings.site_base_url),
            log_type_allowlist=settings.thanks_log_type_allowlist,
        ),
        guard=AuthorizationGuard(identities, send_to_bots=settings.thanks_send_to_bots),
        detector=detector,
        dispatcher=Dispatcher(detector, channel, audit_store=audit_store),
    )


def build_request_context(
    identities: SqlIdentityService,
    session_store: SessionFlagStore,
    auth_token: str,
) -> RequestContext:
    """Resolve the actor for ``auth_token`` and bind that session's flags.

    A token that no longer maps to a login session has its flags dropped.
    """

    session_id = auth_token.strip()
    actor = identities.from_session_token(session_id)
    if actor.is_anonymous and session_id:
        session_store.end_session(session_id)
    return RequestContext(actor=actor, session=session_store.flags_for(session_id))


def send_thanks(
    db: Session,
    payload: ThankRequest,
    *,
    settings: Settings,
    channel: NotificationChannel,
    session_store: SessionFlagStore,
    rate_limiter: SlidingWindowRateLimiter,
) -> ThankResult:
    """Send (or idempotently re-acknowledge) one thanks."""

    identities = build_identity_service(db, settings, rate_limiter)
    ctx = build_request_context(identities, session_store, payload.auth_token)
    pipeline = build_thanks_pipeline(db, settings, identities=identities, channel=channel)
    result = pipeline.thank(
        ctx,
        edit_id=payload.edit_id,
        action_id=payload.action_id,
        source=payload.source,
    )
    return ThankResult(recipient=result.recipient_name)
