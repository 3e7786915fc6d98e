"""Thank affordance lookups for history, diff and log views."""

from typing import Literal

from fastapi import APIRouter, Depends, Header, Path, Query
from sqlalchemy.orm import Session

from thanks.config import Settings, get_settings
from thanks.db.dependencies import get_db
from thanks.dependencies import get_rate_limiter, get_session_store, get_view_bus
from thanks.dispatch.session import SessionFlagStore
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.schemas.affordance import ThankAffordanceRead
from thanks.schemas.common import ApiResponse
from thanks.services.affordances import (
    ThankAffordance,
    ViewEventBus,
    log_entry_affordances,
    revision_affordances,
)
from thanks.services.thanks import build_identity_service, build_request_context

router = APIRouter(prefix="/affordances")


@router.get("/revisions/{revision_id}", response_model=ApiResponse[list[ThankAffordanceRead]])
def get_revision_affordances(
    revision_id: int = Path(..., ge=1),
    previous_id: int | None = Query(default=None, ge=1),
    view: Literal["history", "diff"] = Query(default="history"),
    x_auth_token: str = Header(default=""),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    bus: ViewEventBus = Depends(get_view_bus),
    session_store: SessionFlagStore = Depends(get_session_store),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> ApiResponse[list[ThankAffordanceRead]]:
    """Report the thank affordance for one history row or diff."""

    identities = build_identity_service(db, settings, rate_limiter)
    ctx = build_request_context(identities, session_store, x_auth_token)
    affordances = revision_affordances(
        db,
        bus,
        ctx,
        identities,
        settings,
        revision_id=revision_id,
        previous_id=previous_id,
        view=view,
    )
    return ApiResponse(data=[_to_read(affordance) for affordance in affordances])


@router.get("/log-entries/{log_id}", response_model=ApiResponse[list[ThankAffordanceRead]])
def get_log_entry_affordances(
    log_id: int = Path(..., ge=1),
    x_auth_token: str = Header(default=""),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    bus: ViewEventBus = Depends(get_view_bus),
    session_store: SessionFlagStore = Depends(get_session_store),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> ApiResponse[list[ThankAffordanceRead]]:
    """Report the thank affordance for one log line."""

    identities = build_identity_service(db, settings, rate_limiter)
    ctx = build_request_context(identities, session_store, x_auth_token)
    affordances = log_entry_affordances(db, bus, ctx, identities, settings, log_id=log_id)
    return ApiResponse(data=[_to_read(affordance) for affordance in affordances])


def _to_read(affordance: ThankAffordance) -> ThankAffordanceRead:
    return ThankAffordanceRead(
        kind=affordance.kind,
        id=affordance.id,
        recipient=affordance.recipient,
        already_thanked=affordance.already_thanked,
        href=affordance.href,
        confirmation_required=affordance.confirmation_required,
    )
